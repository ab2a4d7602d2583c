"""
Parsers for the serialized record model.
"""

from .dnsconfig import dump_dns_config, load_dns_config, load_settings, parse_dns_config

__all__ = ["dump_dns_config", "load_dns_config", "load_settings", "parse_dns_config"]
