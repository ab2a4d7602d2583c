"""
Errors - Exception taxonomy for the DNS record model

Encoding failures are fatal: they mean an invalid record reached the codec.
Decoding and address coercion failures are recoverable: callers should
report them and carry on with the remaining records.
"""


class DNSModelError(Exception):
    """Base class for all DNS record model errors."""


class FatalRecordError(DNSModelError, RuntimeError):
    """A record could not be encoded; abort the enclosing operation."""


class UnknownRecordTypeError(FatalRecordError):
    """The record type has no wire-level type code."""

    def __init__(self, rtype: str):
        super().__init__(f"No such DNS type as {rtype!r}")
        self.rtype = rtype


class MalformedRecordError(FatalRecordError):
    """The synthetic zone line built from a record was rejected."""

    def __init__(self, line: str, reason):
        super().__init__(f"Zone line rejected for record: {line!r}: {reason}")
        self.line = line


class UnimplementedRecordTypeError(DNSModelError, ValueError):
    """The wire record type has no decoder."""

    def __init__(self, rtype: str, rr_text: str = ""):
        super().__init__(f"unimplemented zone record type={rtype} ({rr_text})")
        self.rtype = rtype


class InvalidAddressError(DNSModelError, ValueError):
    """The value cannot be converted into an IP address."""


class InvalidRecordError(DNSModelError, ValueError):
    """A record breaks one of its shape invariants."""


class CopyError(DNSModelError):
    """A deep copy could not be completed."""


class CorrectionError(DNSModelError, RuntimeError):
    """A correction was invoked more than once."""
