"""
Behave environment configuration for the DNS record model features.
"""

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up shared test settings before all features."""
    context.origin = "example.com"
    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Reset per-scenario state."""
    context.record = None
    context.rr = None
    context.decoded = None
    context.error = None
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Log scenario completion."""
    logger.info(f"Completed scenario: {scenario.name}")
