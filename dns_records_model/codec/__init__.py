"""
Record codec.

This package converts records to and from wire-level resource records.
"""

from .rr import (
    ResourceRecord,
    record_to_rr,
    records_to_zone_text,
    rr_to_record,
    rrset_to_records,
    zone_to_records,
)

__all__ = [
    "ResourceRecord",
    "record_to_rr",
    "records_to_zone_text",
    "rr_to_record",
    "rrset_to_records",
    "zone_to_records",
]
