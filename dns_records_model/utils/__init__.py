"""
Utility functions and helpers.

This package contains validation, address coercion and the error
taxonomy shared by the record model and codec.
"""

from .addresses import coerce_to_ip, ip_to_uint, uint_to_ip
from .validators import normalize_fqdn, validate_origin, validate_short_name

__all__ = [
    "coerce_to_ip",
    "ip_to_uint",
    "uint_to_ip",
    "normalize_fqdn",
    "validate_origin",
    "validate_short_name",
]
