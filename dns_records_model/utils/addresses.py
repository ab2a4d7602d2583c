"""
Address coercion helpers.

Provider APIs hand back addresses either as dotted/colon text or as packed
32-bit integers (JSON numbers decode to floats).
"""

import ipaddress
import logging
from typing import Union

from .errors import InvalidAddressError

logger = logging.getLogger(__name__)

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

MAX_UINT32 = 0xFFFFFFFF


def uint_to_ip(value: int) -> ipaddress.IPv4Address:
    """Convert a packed 32-bit integer (network byte order) to an IPv4 address."""
    if not 0 <= value <= MAX_UINT32:
        raise InvalidAddressError(f"{value} is out of range for an IPv4 address")
    return ipaddress.IPv4Address(value)


def ip_to_uint(address) -> int:
    """Convert an IPv4 address (text or object) to its packed 32-bit integer."""
    return int(ipaddress.IPv4Address(address))


def coerce_to_ip(value) -> IPAddress:
    """
    Coerce a provider value into an IP address.

    Args:
        value: A packed IPv4 integer, an integral float, or an IPv4/IPv6 literal

    Returns:
        The parsed address

    Raises:
        InvalidAddressError: for any other shape or an unparsable literal
    """
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool):
        raise InvalidAddressError(f"Cannot convert type {type(value).__name__} to ip.")

    if isinstance(value, int):
        return uint_to_ip(value)

    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidAddressError(f"{value} is not a packed ip address")
        return uint_to_ip(int(value))

    if isinstance(value, str):
        try:
            return ipaddress.ip_address(value.strip())
        except ValueError:
            logger.debug(f"Rejected address literal: {value!r}")
            raise InvalidAddressError(f"{value} is not a valid ip address") from None

    raise InvalidAddressError(f"Cannot convert type {type(value).__name__} to ip.")
