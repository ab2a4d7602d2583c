"""
DNS config parser - Load and dump the serialized record model

Domains, registrars, providers, records and nameservers are exchanged as
YAML (JSON documents load too, being valid YAML). Zero-valued ttl,
priority and metadata fields may be omitted.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

import yaml

from ..core.domain import DNSConfig
from ..utils.errors import DNSModelError

logger = logging.getLogger(__name__)


def parse_dns_config(text: str) -> DNSConfig:
    """Build a DNSConfig from YAML or JSON text."""
    try:
        data = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing DNS config: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("DNS config must be a mapping at the top level")

    try:
        return DNSConfig.from_dict(data)
    except DNSModelError:
        raise
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ValueError(f"Malformed DNS config: {e!r}") from e


def load_dns_config(config_path: str) -> DNSConfig:
    """
    Load a DNSConfig from a YAML or JSON file.

    Args:
        config_path: Path to the file

    Returns:
        The parsed configuration

    Raises:
        FileNotFoundError: if the file does not exist
        ValueError: if the file is not a valid DNS config
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"DNS config file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        config = parse_dns_config(f.read())

    logger.info(f"Loaded {len(config.domains)} domains from {config_path}")
    return config


def dump_dns_config(config: DNSConfig, config_path: Optional[str] = None) -> str:
    """Serialize a DNSConfig to YAML, writing it to config_path when given."""
    text = yaml.safe_dump(config.to_dict(), sort_keys=False, default_flow_style=False)
    if config_path:
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(text)
        logger.info(f"DNS config written to {config_path}")
    return text


def get_default_settings() -> Dict:
    """Return default tool settings."""
    return {"logging": {"level": "INFO"}}


def load_settings(settings_path: Optional[str]) -> Dict:
    """Load tool settings (logging level and file) from YAML."""
    if not settings_path:
        return get_default_settings()
    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            settings = yaml.safe_load(f) or {}
        logger.info(f"Settings loaded from {settings_path}")
        return settings
    except FileNotFoundError:
        logger.warning(f"Settings file {settings_path} not found, using defaults")
        return get_default_settings()
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing settings file: {e}") from e
