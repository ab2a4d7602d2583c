"""
Deep copy of record model objects.

A copy shares no mutable structure with its source. Provider handles
(RecordConfig.original) are opaque and are shared by reference rather than
cloned; callers should not rely on their identity surviving a copy.
"""

import copy
import logging

from ..utils.errors import CopyError

logger = logging.getLogger(__name__)


def _iter_records(obj):
    # DNSConfig -> domains -> records, DomainConfig -> records, or a record
    for domain in getattr(obj, "domains", None) or []:
        yield from domain.records
    yield from getattr(obj, "records", None) or []
    if hasattr(obj, "original"):
        yield obj


def copy_obj(obj):
    """
    Deep copy a RecordConfig, DomainConfig or DNSConfig.

    Args:
        obj: The object to copy

    Returns:
        A new, fully independent instance

    Raises:
        CopyError: if any part of the object cannot be duplicated
    """
    # Pre-seeding the memo makes deepcopy reuse each original handle as-is.
    memo = {}
    for record in _iter_records(obj):
        if record.original is not None:
            memo[id(record.original)] = record.original

    try:
        return copy.deepcopy(obj, memo)
    except Exception as e:
        logger.error(f"Failed to copy {type(obj).__name__}: {e}")
        raise CopyError(f"Cannot copy {type(obj).__name__}: {e}") from e
