"""
Record - Canonical, provider-agnostic DNS record model

A RecordConfig stores one DNS resource record. Providers are responsible
for validating or normalizing the data that goes into it.

Names are kept in two forms that always change together:

    name       the short name, i.e. the FQDN without the origin suffix.
               Never empty (the apex is "@"), never a trailing dot, never
               ends with the origin. If the origin is "foo.com" then a name
               of "foo.com" literally means "foo.com.foo.com".
    name_fqdn  the fully qualified name, without a trailing dot.

Both are read-only; use set_label() or set_label_from_fqdn().
"""

import logging
from typing import Dict, List, NamedTuple, Optional

from .copying import copy_obj
from ..utils.errors import InvalidRecordError
from ..utils.validators import APEX, normalize_fqdn, validate_origin, validate_short_name

logger = logging.getLogger(__name__)

DEFAULT_TTL = 300

MAX_TTL = 0xFFFFFFFF
MAX_PRIORITY = 0xFFFF


class RecordKey(NamedTuple):
    """Grouping key for records sharing a type and short name."""

    type: str
    name: str


def _clean_origin(origin: str) -> str:
    if not origin or not validate_origin(origin):
        raise InvalidRecordError(f"Invalid zone origin: {origin!r}")
    return normalize_fqdn(origin)


class RecordConfig:
    """A single DNS record."""

    def __init__(
        self,
        rtype: str,
        target: str,
        name: Optional[str] = None,
        origin: Optional[str] = None,
        ttl: int = 0,
        priority: int = 0,
        metadata: Optional[Dict[str, str]] = None,
        original=None,
    ):
        self.type = rtype.strip().upper() if rtype else ""
        # If a name, must end with "."
        self.target = target
        self.ttl = ttl
        self.priority = priority
        self.metadata = dict(metadata) if metadata else {}
        # Provider-specific record object, used only in diffing.
        self.original = original

        self._name = None
        self._name_fqdn = None
        if name is not None:
            if origin is None:
                raise InvalidRecordError(f"Record name {name!r} given without an origin")
            self.set_label(name, origin)

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def name_fqdn(self) -> Optional[str]:
        return self._name_fqdn

    def set_label(self, short: str, origin: str) -> None:
        """
        Set the short name and derive the FQDN from the zone origin.

        Args:
            short: Short name; "@" or "" for the apex
            origin: Zone origin, with or without a trailing dot
        """
        origin = _clean_origin(origin)
        short = normalize_fqdn(short or "")

        if short in ("", APEX):
            self._name, self._name_fqdn = APEX, origin
        else:
            self._name, self._name_fqdn = short, f"{short}.{origin}"

    def set_label_from_fqdn(self, fqdn: str, origin: str) -> None:
        """
        Set the FQDN and derive the short name by stripping the zone origin.

        Args:
            fqdn: Fully qualified name, a trailing dot is allowed
            origin: Zone origin, with or without a trailing dot

        Raises:
            InvalidRecordError: if the name is not inside the origin
        """
        origin = _clean_origin(origin)
        fqdn = normalize_fqdn(fqdn or "")

        if fqdn == origin:
            self._name, self._name_fqdn = APEX, origin
        elif fqdn.endswith("." + origin):
            self._name, self._name_fqdn = fqdn[: -len(origin) - 1], fqdn
        else:
            raise InvalidRecordError(f"Name {fqdn!r} is not within zone {origin!r}")

    def key(self) -> RecordKey:
        return RecordKey(self.type, self._name)

    def validate(self) -> None:
        """
        Check the record's shape invariants.

        Raises:
            InvalidRecordError: describing the first broken invariant
        """
        if not self.type:
            raise InvalidRecordError("Record has no type")
        if not self.target:
            raise InvalidRecordError(f"{self.type} record {self._name_fqdn} has no target")
        if not isinstance(self.ttl, int) or not 0 <= self.ttl <= MAX_TTL:
            raise InvalidRecordError(f"TTL out of range: {self.ttl!r}")
        if not isinstance(self.priority, int) or not 0 <= self.priority <= MAX_PRIORITY:
            raise InvalidRecordError(f"Priority out of range: {self.priority!r}")
        if not validate_short_name(self._name):
            raise InvalidRecordError(f"Invalid short name: {self._name!r}")
        if not self._name_fqdn or self._name_fqdn.endswith("."):
            raise InvalidRecordError(f"Invalid FQDN: {self._name_fqdn!r}")
        if self._name != APEX and not self._name_fqdn.startswith(self._name + "."):
            raise InvalidRecordError(
                f"Name {self._name!r} does not match FQDN {self._name_fqdn!r}"
            )

    def copy(self) -> "RecordConfig":
        """Return a fully independent clone; original is shared, not cloned."""
        return copy_obj(self)

    def to_dict(self) -> Dict:
        """Serialized form; zero ttl/priority and empty metadata are omitted."""
        data = {"type": self.type, "name": self._name, "target": self.target}
        if self.ttl:
            data["ttl"] = self.ttl
        if self.metadata:
            data["meta"] = dict(self.metadata)
        if self.priority:
            data["priority"] = self.priority
        return data

    @classmethod
    def from_dict(cls, data: Dict, origin: str) -> "RecordConfig":
        """Build a record from its serialized form inside the given zone."""
        try:
            return cls(
                data["type"],
                data["target"],
                name=data.get("name") or APEX,
                origin=origin,
                ttl=int(data.get("ttl") or 0),
                priority=int(data.get("priority") or 0),
                metadata={str(k): str(v) for k, v in (data.get("meta") or {}).items()},
            )
        except KeyError as e:
            raise InvalidRecordError(f"Record is missing field {e}") from None

    def __str__(self) -> str:
        content = f"{self.type} {self._name_fqdn} {self.target} {self.ttl}"
        if self.type == "MX":
            content += f" priority={self.priority}"
        for k, v in self.metadata.items():
            content += f" {k}={v}"
        return content

    def __repr__(self) -> str:
        return f"<RecordConfig {self}>"

    def _compare_fields(self):
        return (
            self.type,
            self._name,
            self._name_fqdn,
            self.target,
            self.ttl,
            self.priority,
            self.metadata,
        )

    def __eq__(self, other):
        if not isinstance(other, RecordConfig):
            return NotImplemented
        return self._compare_fields() == other._compare_fields()

    __hash__ = None


class Records(list):
    """An ordered collection of RecordConfig."""

    def grouped(self) -> Dict[RecordKey, "Records"]:
        """
        Group records by (type, name).

        Per-key order follows input order. Nothing is deduplicated,
        sorted or checked for consistency.
        """
        groups: Dict[RecordKey, Records] = {}
        for record in self:
            groups.setdefault(record.key(), Records()).append(record)
        return groups


class Nameserver:
    """A delegated nameserver: FQDN with no trailing dot, plus optional glue."""

    def __init__(self, name: str, target: str = ""):
        self.name = normalize_fqdn(name)
        self.target = target

    def to_dict(self) -> Dict:
        data = {"name": self.name}
        if self.target:
            data["target"] = self.target
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "Nameserver":
        return cls(data["name"], data.get("target") or "")

    def __eq__(self, other):
        if not isinstance(other, Nameserver):
            return NotImplemented
        return (self.name, self.target) == (other.name, other.target)

    __hash__ = None

    def __repr__(self) -> str:
        return f"<Nameserver name={self.name!r} target={self.target!r}>"


def strings_to_nameservers(names: List[str]) -> List[Nameserver]:
    """Build nameservers from plain names; glue targets stay empty."""
    return [Nameserver(name) for name in names]
