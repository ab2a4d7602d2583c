"""
Domain - Zone-level aggregates of the record model

A DomainConfig is one zone: its records, its registrar and DNS providers,
and its delegated nameservers. A DNSConfig is the whole set of domains plus
the registrar and provider definitions they refer to.
"""

import logging
from typing import Dict, Iterable, List, Optional

from .copying import copy_obj
from .record import Nameserver, RecordConfig, Records
from ..utils.errors import InvalidRecordError
from ..utils.validators import normalize_fqdn

logger = logging.getLogger(__name__)


class RegistrarConfig:
    """A named registrar and its provider-specific settings."""

    def __init__(self, name: str, rtype: str, metadata: Optional[Dict] = None):
        self.name = name
        self.type = rtype
        self.metadata = dict(metadata) if metadata else {}

    def to_dict(self) -> Dict:
        data = {"name": self.name, "type": self.type}
        if self.metadata:
            data["meta"] = dict(self.metadata)
        return data

    @classmethod
    def from_dict(cls, data: Dict):
        return cls(data["name"], data["type"], data.get("meta"))

    def __eq__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None


class DNSProviderConfig(RegistrarConfig):
    """A named DNS provider and its provider-specific settings."""


class DomainConfig:
    """One zone and the records it should contain."""

    def __init__(
        self,
        name: str,
        registrar: str = "",
        dns_providers: Optional[Dict[str, int]] = None,
        metadata: Optional[Dict[str, str]] = None,
        records: Optional[Iterable[RecordConfig]] = None,
        nameservers: Optional[List[Nameserver]] = None,
        keep_unknown: bool = False,
    ):
        # NO trailing "."
        self.name = normalize_fqdn(name)
        self.registrar = registrar
        self.dns_providers = dict(dns_providers) if dns_providers else {}
        self.metadata = dict(metadata) if metadata else {}
        self.records = Records(records or [])
        self.nameservers = list(nameservers or [])
        self.keep_unknown = keep_unknown

    def has_record_type_name(self, rtype: str, name: str) -> bool:
        """Return True if a record with exactly this type and short name exists."""
        for record in self.records:
            if record.type == rtype and record.name == name:
                return True
        return False

    def add_record(self, record: RecordConfig) -> None:
        """Append a record after checking its shape and zone membership."""
        record.validate()
        if record.name_fqdn != self.name and not record.name_fqdn.endswith("." + self.name):
            raise InvalidRecordError(
                f"Record {record.name_fqdn!r} is not within zone {self.name!r}"
            )
        self.records.append(record)
        logger.debug(f"Added record to {self.name}: {record}")

    def copy(self) -> "DomainConfig":
        return copy_obj(self)

    def to_dict(self) -> Dict:
        data = {
            "name": self.name,
            "registrar": self.registrar,
            "dnsProviders": dict(self.dns_providers),
        }
        if self.metadata:
            data["meta"] = dict(self.metadata)
        data["records"] = [record.to_dict() for record in self.records]
        if self.nameservers:
            data["nameservers"] = [ns.to_dict() for ns in self.nameservers]
        data["keepunknown"] = self.keep_unknown
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "DomainConfig":
        name = data["name"]
        return cls(
            name,
            registrar=data.get("registrar") or "",
            dns_providers={k: int(v) for k, v in (data.get("dnsProviders") or {}).items()},
            metadata={str(k): str(v) for k, v in (data.get("meta") or {}).items()},
            records=[RecordConfig.from_dict(r, name) for r in data.get("records") or []],
            nameservers=[Nameserver.from_dict(ns) for ns in data.get("nameservers") or []],
            keep_unknown=bool(data.get("keepunknown", False)),
        )

    def __eq__(self, other):
        if not isinstance(other, DomainConfig):
            return NotImplemented
        return (
            self.to_dict() == other.to_dict()
            and list(self.records) == list(other.records)
        )

    __hash__ = None

    def __repr__(self) -> str:
        return f"<DomainConfig {self.name} records={len(self.records)}>"


def find_domain(domains: Iterable[DomainConfig], name: str) -> Optional[DomainConfig]:
    """Return the first domain whose name matches exactly, or None."""
    for domain in domains:
        if domain.name == name:
            return domain
    return None


class DNSConfig:
    """All registrars, DNS providers and domains of one configuration."""

    def __init__(
        self,
        registrars: Optional[List[RegistrarConfig]] = None,
        dns_providers: Optional[List[DNSProviderConfig]] = None,
        domains: Optional[List[DomainConfig]] = None,
    ):
        self.registrars = list(registrars or [])
        self.dns_providers = list(dns_providers or [])
        self.domains = list(domains or [])

    def find_domain(self, query: str) -> Optional[DomainConfig]:
        return find_domain(self.domains, query)

    def copy(self) -> "DNSConfig":
        return copy_obj(self)

    def to_dict(self) -> Dict:
        return {
            "registrars": [r.to_dict() for r in self.registrars],
            "dns_providers": [p.to_dict() for p in self.dns_providers],
            "domains": [d.to_dict() for d in self.domains],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> "DNSConfig":
        return cls(
            registrars=[RegistrarConfig.from_dict(r) for r in data.get("registrars") or []],
            dns_providers=[
                DNSProviderConfig.from_dict(p) for p in data.get("dns_providers") or []
            ],
            domains=[DomainConfig.from_dict(d) for d in data.get("domains") or []],
        )

    def __eq__(self, other):
        if not isinstance(other, DNSConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None
