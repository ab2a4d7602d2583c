"""
Core DNS record model.

This package contains the record, domain and correction types and the
deep copy used to snapshot them.
"""

from .copying import copy_obj
from .correction import Correction
from .domain import DNSConfig, DNSProviderConfig, DomainConfig, RegistrarConfig, find_domain
from .record import (
    DEFAULT_TTL,
    Nameserver,
    RecordConfig,
    RecordKey,
    Records,
    strings_to_nameservers,
)

__all__ = [
    "copy_obj",
    "Correction",
    "DNSConfig",
    "DNSProviderConfig",
    "DomainConfig",
    "RegistrarConfig",
    "find_domain",
    "DEFAULT_TTL",
    "Nameserver",
    "RecordConfig",
    "RecordKey",
    "Records",
    "strings_to_nameservers",
]
