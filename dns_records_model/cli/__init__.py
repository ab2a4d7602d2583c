"""
Command-line interface components.

This package contains the dns-model inspection CLI.
"""

from .main import main

__all__ = ["main"]
