"""
Validators - Shape checks for record names and zone origins

These helpers guard the short-name/FQDN invariants of the record model.
They check shape only; whether a name exists in a zone is the provider's
business.
"""

import logging
import re

logger = logging.getLogger(__name__)

APEX = "@"

# Owner labels may carry underscores (_dmarc, _sip._tcp), a leading wildcard,
# and "/" for RFC 2317 classless reverse delegations (0/26).
_LABEL_RE = re.compile(r"^(\*|[a-z0-9_]([a-z0-9_/-]*[a-z0-9_])?)$")


def normalize_fqdn(fqdn: str) -> str:
    """
    Normalize an FQDN for storage: trimmed, lowercased, no trailing dot.

    Args:
        fqdn: The FQDN to normalize

    Returns:
        Normalized FQDN
    """
    if not fqdn:
        return fqdn
    return fqdn.strip().rstrip(".").lower()


def validate_label(label: str) -> bool:
    """Validate a single owner-name label."""
    if len(label) == 0 or len(label) > 63:
        return False
    return bool(_LABEL_RE.match(label.lower()))


def validate_origin(origin: str) -> bool:
    """
    Validate a zone origin.

    Args:
        origin: Zone apex name, with or without a trailing dot

    Returns:
        True if valid, False otherwise
    """
    if not origin or not isinstance(origin, str):
        return False

    origin = origin.rstrip(".")
    if not origin or len(origin) > 253:
        logger.warning(f"Zone origin has an invalid length: {origin!r}")
        return False

    for label in origin.split("."):
        if not validate_label(label) or label == "*":
            logger.warning(f"Invalid label '{label}' in zone origin: {origin}")
            return False

    return True


def validate_short_name(name: str) -> bool:
    """
    Validate a short (relative) record name.

    The apex is spelled "@". A short name never ends with a dot and never
    has empty labels.

    Args:
        name: The short name to validate

    Returns:
        True if valid, False otherwise
    """
    if not name or not isinstance(name, str):
        return False

    if name == APEX:
        return True

    if name.endswith("."):
        logger.warning(f"Short name ends with dot: {name}")
        return False

    labels = name.split(".")
    if any(label == "" for label in labels):
        logger.warning(f"Short name contains empty labels: {name}")
        return False

    # A wildcard is only allowed as the leftmost label
    for i, label in enumerate(labels):
        if label == "*" and i != 0:
            return False
        if not validate_label(label):
            logger.warning(f"Invalid label '{label}' in short name: {name}")
            return False

    return True
