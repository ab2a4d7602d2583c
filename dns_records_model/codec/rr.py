"""
RR Codec - Conversion between RecordConfig and wire-level resource records

This module converts records to and from dnspython rdata using the dnspython
library. Encoding failures are fatal (the record was already invalid);
decoding failures are recoverable (the wire data is a fact to tolerate).
"""

import logging
from typing import Callable, Dict, Iterable, NamedTuple

import dns.exception
import dns.name
import dns.rdata
import dns.rdataclass
import dns.rdatatype
import dns.rrset
import dns.zone
from dns.rdtypes.ANY.MX import MX
from dns.rdtypes.ANY.TXT import TXT

from ..core.record import DEFAULT_TTL, RecordConfig, Records
from ..utils.errors import (
    InvalidRecordError,
    MalformedRecordError,
    UnimplementedRecordTypeError,
    UnknownRecordTypeError,
)

logger = logging.getLogger(__name__)


class ResourceRecord(NamedTuple):
    """An immutable wire-level resource record: owner, TTL and rdata."""

    name: dns.name.Name
    ttl: int
    rdata: dns.rdata.Rdata

    @property
    def rdclass(self) -> dns.rdataclass.RdataClass:
        return self.rdata.rdclass

    @property
    def rdtype(self) -> dns.rdatatype.RdataType:
        return self.rdata.rdtype

    def to_text(self) -> str:
        """Render as a zone-file line: name TTL class type rdata."""
        return (
            f"{self.name.to_text()} {self.ttl} "
            f"{dns.rdataclass.to_text(self.rdclass)} "
            f"{dns.rdatatype.to_text(self.rdtype)} {self.rdata.to_text()}"
        )

    def to_rrset(self) -> dns.rrset.RRset:
        """Wrap in a single-rdata RRset, ready for to_wire() or an update."""
        return dns.rrset.from_rdata(self.name, self.ttl, self.rdata)

    @classmethod
    def from_text(cls, line: str) -> "ResourceRecord":
        """Parse an absolute zone-file line such as 'www.example.com. 300 IN A 192.0.2.1'."""
        try:
            name, ttl, rdclass, rdtype, rest = line.split(None, 4)
            rdata = dns.rdata.from_text(
                dns.rdataclass.from_text(rdclass),
                dns.rdatatype.from_text(rdtype),
                rest,
                origin=dns.name.root,
                relativize=False,
            )
            return cls(dns.name.from_text(name), int(ttl), rdata)
        except (ValueError, dns.exception.DNSException) as e:
            raise ValueError(f"Cannot parse resource record {line!r}: {e}") from e


def _resolve_type(rtype: str) -> dns.rdatatype.RdataType:
    try:
        return dns.rdatatype.from_text(rtype)
    except (dns.rdatatype.UnknownRdatatype, ValueError):
        logger.error(f"No such DNS type as {rtype!r}")
        raise UnknownRecordTypeError(rtype) from None


def record_to_rr(record: RecordConfig) -> ResourceRecord:
    """
    Convert a RecordConfig into a wire-level resource record.

    The owner is the record's FQDN made absolute. A TTL of 0 means
    DEFAULT_TTL. MX and TXT are built directly; every other type goes
    through the zone-file text parser.

    Args:
        record: The record to encode

    Returns:
        An immutable ResourceRecord

    Raises:
        UnknownRecordTypeError: if the type has no wire type code
        MalformedRecordError: if the record cannot be expressed on the wire
    """
    rdtype = _resolve_type(record.type)
    ttl = record.ttl or DEFAULT_TTL
    line = f"{record.name_fqdn} {ttl} IN {record.type} {record.target}"

    try:
        record.validate()
        # Note: the owner is always absolute; it never holds "@".
        owner = dns.name.from_text(f"{record.name_fqdn}.")

        if rdtype == dns.rdatatype.MX:
            rdata = MX(
                dns.rdataclass.IN,
                rdtype,
                record.priority,
                dns.name.from_text(record.target),
            )
        elif rdtype == dns.rdatatype.TXT:
            # Target is stored unescaped; the rdata owns any quoting.
            rdata = TXT(dns.rdataclass.IN, rdtype, [record.target])
        else:
            rdata = dns.rdata.from_text(
                dns.rdataclass.IN,
                rdtype,
                record.target,
                origin=dns.name.root,
                relativize=False,
            )
    except (InvalidRecordError, ValueError, TypeError, dns.exception.DNSException) as e:
        logger.error(f"Zone line rejected for record: {line!r} (target={record.target!r}): {e}")
        raise MalformedRecordError(line, e) from e

    return ResourceRecord(owner, ttl, rdata)


def _address(rdata, record):
    record.target = rdata.address


def _target(rdata, record):
    record.target = rdata.target.to_text()


def _mx(rdata, record):
    record.target = rdata.exchange.to_text()
    record.priority = rdata.preference


def _soa(rdata, record):
    record.target = (
        f"{rdata.mname.to_text()} {rdata.rname.to_text()} {rdata.serial} "
        f"{rdata.refresh} {rdata.retry} {rdata.expire} {rdata.minimum}"
    )


def _txt(rdata, record):
    # Lossy: segment boundaries are not recoverable.
    record.target = " ".join(
        s.decode("utf-8", errors="backslashreplace") for s in rdata.strings
    )


DECODERS: Dict[int, Callable] = {
    dns.rdatatype.A: _address,
    dns.rdatatype.AAAA: _address,
    dns.rdatatype.CNAME: _target,
    dns.rdatatype.NS: _target,
    dns.rdatatype.MX: _mx,
    dns.rdatatype.SOA: _soa,
    dns.rdatatype.TXT: _txt,
}


def rr_to_record(rr: ResourceRecord, origin: str) -> RecordConfig:
    """
    Convert a wire-level resource record into a RecordConfig.

    Names are lowercased; the short name is the owner with the origin
    stripped. The TTL is copied verbatim.

    Args:
        rr: The resource record to decode
        origin: Zone origin the short name is relative to

    Returns:
        The decoded record

    Raises:
        UnimplementedRecordTypeError: if the rdata type has no decoder
        InvalidRecordError: if the owner is outside the origin
    """
    rtype = dns.rdatatype.to_text(rr.rdtype)
    decoder = DECODERS.get(rr.rdtype)
    if decoder is None:
        raise UnimplementedRecordTypeError(rtype, rr.to_text())

    record = RecordConfig(rtype, "", ttl=rr.ttl)
    record.set_label_from_fqdn(rr.name.to_text(), origin)
    decoder(rr.rdata, record)
    return record


def rrset_to_records(rrset: dns.rrset.RRset, origin: str) -> Records:
    """Decode every rdata of an RRset; errors propagate."""
    return Records(
        rr_to_record(ResourceRecord(rrset.name, rrset.ttl, rdata), origin)
        for rdata in rrset
    )


def _absolute_rdata(rdata, origin: dns.name.Name) -> dns.rdata.Rdata:
    # Relativized zones hold names such as "ns1" inside rdata; targets must be FQDNs.
    return dns.rdata.from_text(
        rdata.rdclass,
        rdata.rdtype,
        rdata.to_text(origin=origin, relativize=False),
        origin=dns.name.root,
        relativize=False,
    )


def zone_to_records(zone: dns.zone.Zone) -> Records:
    """
    Decode a dnspython zone (e.g. the result of a zone transfer).

    Records of unimplemented types are logged and skipped.
    """
    origin = zone.origin.to_text()
    records = Records()
    skipped = 0

    for name, node in zone.nodes.items():
        fqdn = name.derelativize(zone.origin)
        for rdataset in node.rdatasets:
            for rdata in rdataset:
                if zone.relativize:
                    rdata = _absolute_rdata(rdata, zone.origin)
                try:
                    records.append(
                        rr_to_record(ResourceRecord(fqdn, rdataset.ttl, rdata), origin)
                    )
                except UnimplementedRecordTypeError as e:
                    skipped += 1
                    logger.warning(f"Skipping record in zone {origin}: {e}")

    logger.info(f"Decoded {len(records)} records from zone {origin} ({skipped} skipped)")
    return records


def records_to_zone_text(records: Iterable[RecordConfig]) -> str:
    """Render records as zone-file lines, one per record."""
    return "\n".join(record_to_rr(record).to_text() for record in records)
