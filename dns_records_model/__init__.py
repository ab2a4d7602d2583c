"""
DNS Records Model - Provider-agnostic DNS record model

A canonical record model with conversion to and from wire-level
resource records, record grouping, and domain-level aggregates
for use by providers and diff engines.
"""

__version__ = "1.0.0"
__author__ = "DNS Records Manager Team"
__description__ = "Provider-agnostic DNS record model and wire codec"

from .codec.rr import ResourceRecord, record_to_rr, rr_to_record
from .core.correction import Correction
from .core.domain import DNSConfig, DomainConfig, find_domain
from .core.record import DEFAULT_TTL, Nameserver, RecordConfig, RecordKey, Records
from .utils.addresses import coerce_to_ip

__all__ = [
    "ResourceRecord",
    "record_to_rr",
    "rr_to_record",
    "Correction",
    "DNSConfig",
    "DomainConfig",
    "find_domain",
    "DEFAULT_TTL",
    "Nameserver",
    "RecordConfig",
    "RecordKey",
    "Records",
    "coerce_to_ip",
]
