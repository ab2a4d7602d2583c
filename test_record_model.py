#!/usr/bin/env python3
"""
Test suite for the DNS record model

Covers names, validation, grouping, domain lookups, deep copy,
address coercion, corrections and the serialized form.
"""

import ipaddress
import os
import pickle
import tempfile
import unittest
from unittest.mock import patch

from dns_records_model.cli.main import build_records_table, config_logger
from dns_records_model.core.correction import Correction
from dns_records_model.core.domain import (
    DNSConfig,
    DNSProviderConfig,
    DomainConfig,
    RegistrarConfig,
    find_domain,
)
from dns_records_model.core.record import (
    Nameserver,
    RecordConfig,
    RecordKey,
    Records,
    strings_to_nameservers,
)
from dns_records_model.parsers.dnsconfig import (
    dump_dns_config,
    load_dns_config,
    load_settings,
    parse_dns_config,
)
from dns_records_model.utils.addresses import coerce_to_ip, ip_to_uint, uint_to_ip
from dns_records_model.utils.errors import (
    CopyError,
    CorrectionError,
    InvalidAddressError,
    InvalidRecordError,
)
from dns_records_model.utils.validators import validate_origin, validate_short_name


def make_record(rtype, name, target, **kwargs):
    return RecordConfig(rtype, target, name=name, origin="example.com", **kwargs)


class TestRecordNames(unittest.TestCase):
    """Test the short name / FQDN pair."""

    def test_set_label(self):
        """Short names derive the FQDN from the origin."""
        cases = [
            ("www", "www.example.com"),
            ("WWW", "www.example.com"),
            ("a.b", "a.b.example.com"),
            ("@", "example.com"),
            ("", "example.com"),
            ("_dmarc", "_dmarc.example.com"),
        ]
        for short, fqdn in cases:
            with self.subTest(short=short):
                record = RecordConfig("A", "192.0.2.1")
                record.set_label(short, "example.com.")
                self.assertEqual(record.name_fqdn, fqdn)
                self.assertFalse(record.name.endswith("."))
                self.assertTrue(record.name)

    def test_set_label_from_fqdn(self):
        """FQDNs derive the short name by stripping the origin."""
        cases = [
            ("www.example.com.", "www"),
            ("WWW.Example.COM", "www"),
            ("example.com.", "@"),
            ("a.b.example.com", "a.b"),
        ]
        for fqdn, short in cases:
            with self.subTest(fqdn=fqdn):
                record = RecordConfig("A", "192.0.2.1")
                record.set_label_from_fqdn(fqdn, "example.com")
                self.assertEqual(record.name, short)
                self.assertFalse(record.name_fqdn.endswith("."))

    def test_name_is_not_fully_qualified(self):
        """A short name equal to the origin means origin.origin."""
        record = make_record("A", "example.com", "192.0.2.1")
        self.assertEqual(record.name, "example.com")
        self.assertEqual(record.name_fqdn, "example.com.example.com")

    def test_fqdn_outside_zone_rejected(self):
        """Names outside the origin cannot be relativized."""
        record = RecordConfig("A", "192.0.2.1")
        with self.assertRaises(InvalidRecordError):
            record.set_label_from_fqdn("www.example.org", "example.com")

    def test_names_are_read_only(self):
        """Name and FQDN can only change through the setters."""
        record = make_record("A", "www", "192.0.2.1")
        with self.assertRaises(AttributeError):
            record.name = "mail"
        with self.assertRaises(AttributeError):
            record.name_fqdn = "mail.example.com"

    def test_name_without_origin_rejected(self):
        """A name alone cannot derive its FQDN."""
        with self.assertRaises(InvalidRecordError):
            RecordConfig("A", "192.0.2.1", name="www")

    def test_invalid_origin_rejected(self):
        """Empty or malformed origins are rejected."""
        for origin in ["", ".", "bad..origin"]:
            with self.subTest(origin=origin):
                with self.assertRaises(InvalidRecordError):
                    RecordConfig("A", "192.0.2.1").set_label("www", origin)


class TestRecordValidation(unittest.TestCase):
    """Test record shape validation."""

    def test_valid_record(self):
        """A complete record validates."""
        make_record("MX", "@", "mail.example.com.", priority=10).validate()

    def test_invalid_records(self):
        """Each broken invariant is reported."""
        cases = [
            (RecordConfig("", "192.0.2.1", name="www", origin="example.com"), "no type"),
            (make_record("A", "www", ""), "no target"),
            (make_record("A", "www", "192.0.2.1", ttl=-1), "negative ttl"),
            (make_record("A", "www", "192.0.2.1", ttl=2**32), "ttl overflow"),
            (make_record("MX", "@", "mail.example.com.", priority=70000), "priority overflow"),
            (RecordConfig("A", "192.0.2.1"), "no name"),
        ]
        for record, description in cases:
            with self.subTest(description=description):
                with self.assertRaises(InvalidRecordError):
                    record.validate()

    def test_validate_short_name(self):
        """Short names follow the relative-name rules."""
        self.assertTrue(validate_short_name("@"))
        self.assertTrue(validate_short_name("www"))
        self.assertTrue(validate_short_name("*.dev"))
        self.assertTrue(validate_short_name("_sip._tcp"))
        self.assertFalse(validate_short_name(""))
        self.assertFalse(validate_short_name("www."))
        self.assertFalse(validate_short_name("a..b"))
        self.assertFalse(validate_short_name("a.*"))

    def test_validate_origin(self):
        """Origins are domain names with or without a trailing dot."""
        self.assertTrue(validate_origin("example.com"))
        self.assertTrue(validate_origin("example.com."))
        self.assertFalse(validate_origin(""))
        self.assertFalse(validate_origin("*.example.com"))

    def test_classless_reverse_zone(self):
        """Labels may carry a slash for classless reverse delegations."""
        self.assertTrue(validate_origin("0/26.2.0.192.in-addr.arpa"))
        self.assertTrue(validate_short_name("1"))
        record = RecordConfig("PTR", "host.example.com.", name="1",
                              origin="0/26.2.0.192.in-addr.arpa")
        record.validate()
        self.assertEqual(record.name_fqdn, "1.0/26.2.0.192.in-addr.arpa")
        self.assertFalse(validate_short_name("/26"))


class TestRecordRendering(unittest.TestCase):
    """Test string rendering and equality."""

    def test_str(self):
        """Rendering includes priority for MX and metadata."""
        record = make_record("MX", "@", "mail.example.com.", ttl=600, priority=10,
                             metadata={"cloudflare_proxy": "off"})
        self.assertEqual(
            str(record),
            "MX example.com mail.example.com. 600 priority=10 cloudflare_proxy=off",
        )
        self.assertEqual(str(make_record("A", "www", "192.0.2.1")), "A www.example.com 192.0.2.1 0")

    def test_equality_ignores_original(self):
        """The provider back-reference is not part of equality."""
        a = make_record("A", "www", "192.0.2.1", original=object())
        b = make_record("A", "www", "192.0.2.1", original=object())
        self.assertEqual(a, b)
        self.assertNotEqual(a, make_record("A", "www", "192.0.2.2"))


class TestGrouping(unittest.TestCase):
    """Test record keys and grouping."""

    def setUp(self):
        self.records = Records([
            make_record("A", "www", "192.0.2.1"),
            make_record("MX", "@", "mail.example.com.", priority=10),
            make_record("A", "www", "192.0.2.2", ttl=60),
            make_record("A", "@", "192.0.2.3"),
            make_record("MX", "@", "mail2.example.com.", priority=20),
        ])

    def test_grouped(self):
        """Records sharing type and name land in one group, in input order."""
        groups = self.records.grouped()
        self.assertEqual(
            list(groups.keys()),
            [RecordKey("A", "www"), RecordKey("MX", "@"), RecordKey("A", "@")],
        )
        www = groups[RecordKey("A", "www")]
        self.assertEqual([r.target for r in www], ["192.0.2.1", "192.0.2.2"])
        # Conflicting TTLs pass through untouched
        self.assertEqual([r.ttl for r in www], [0, 60])
        self.assertIsInstance(www, Records)

    def test_grouped_is_stable(self):
        """Grouping the same input twice gives identical mappings."""
        first = self.records.grouped()
        second = self.records.grouped()
        self.assertEqual(list(first.keys()), list(second.keys()))
        for key in first:
            self.assertEqual([id(r) for r in first[key]], [id(r) for r in second[key]])

    def test_no_dedup(self):
        """Identical records are kept."""
        records = Records([make_record("A", "www", "192.0.2.1")] * 2)
        self.assertEqual(len(records.grouped()[RecordKey("A", "www")]), 2)

    def test_empty(self):
        self.assertEqual(Records().grouped(), {})


class TestDomainConfig(unittest.TestCase):
    """Test domain lookups."""

    def setUp(self):
        self.domain = DomainConfig(
            "example.com",
            registrar="none",
            dns_providers={"bind": 1},
            records=[
                make_record("A", "www", "192.0.2.1"),
                make_record("CNAME", "ftp", "www.example.com."),
            ],
        )

    def test_has_record_type_name(self):
        """Only an exact (type, name) pair matches."""
        self.assertTrue(self.domain.has_record_type_name("A", "www"))
        self.assertTrue(self.domain.has_record_type_name("CNAME", "ftp"))
        self.assertFalse(self.domain.has_record_type_name("A", "ftp"))
        self.assertFalse(self.domain.has_record_type_name("A", "WWW"))
        self.assertFalse(self.domain.has_record_type_name("A", "www.example.com"))

    def test_add_record(self):
        """Records are validated and must belong to the zone."""
        self.domain.add_record(make_record("A", "mail", "192.0.2.9"))
        self.assertTrue(self.domain.has_record_type_name("A", "mail"))

        foreign = RecordConfig("A", "192.0.2.9", name="www", origin="example.org")
        with self.assertRaises(InvalidRecordError):
            self.domain.add_record(foreign)
        with self.assertRaises(InvalidRecordError):
            self.domain.add_record(make_record("A", "empty", ""))

    def test_find_domain(self):
        """Lookup is an exact, case-sensitive match."""
        other = DomainConfig("example.org")
        domains = [self.domain, other]
        self.assertIs(find_domain(domains, "example.org"), other)
        self.assertIs(find_domain(domains, "example.com"), self.domain)
        self.assertIsNone(find_domain(domains, "Example.com"))
        self.assertIsNone(find_domain(domains, "example.net"))

        config = DNSConfig(domains=domains)
        self.assertIs(config.find_domain("example.org"), other)

    def test_find_domain_first_match(self):
        """The first matching domain wins."""
        first, second = DomainConfig("example.com"), DomainConfig("example.com")
        self.assertIs(find_domain([first, second], "example.com"), first)

    def test_strings_to_nameservers(self):
        """Nameservers are normalized FQDNs with empty glue."""
        nameservers = strings_to_nameservers(["ns1.example.com.", "ns2.example.com"])
        self.assertEqual([ns.name for ns in nameservers], ["ns1.example.com", "ns2.example.com"])
        self.assertEqual([ns.target for ns in nameservers], ["", ""])


class TestCopy(unittest.TestCase):
    """Test deep copies."""

    def setUp(self):
        self.handle = {"id": "provider-123"}
        self.domain = DomainConfig(
            "example.com",
            registrar="reg",
            dns_providers={"bind": 1},
            metadata={"owner": "ops"},
            records=[
                make_record("A", "www", "192.0.2.1", metadata={"k": "v"},
                            original=self.handle),
            ],
            nameservers=[Nameserver("ns1.example.com")],
            keep_unknown=True,
        )

    def test_copy_is_equal(self):
        """The copy is field-for-field equal."""
        clone = self.domain.copy()
        self.assertIsNot(clone, self.domain)
        self.assertEqual(clone, self.domain)
        self.assertTrue(clone.keep_unknown)
        self.assertEqual(clone.records[0].name_fqdn, "www.example.com")

    def test_copy_is_independent(self):
        """Mutating nested structures of the copy leaves the source untouched."""
        clone = self.domain.copy()
        clone.metadata["owner"] = "dev"
        clone.dns_providers["cloudflare"] = 2
        clone.records[0].metadata["k"] = "changed"
        clone.records[0].set_label("mail", "example.com")
        clone.records.append(make_record("A", "new", "192.0.2.2"))
        clone.nameservers[0].target = "192.0.2.53"

        self.assertEqual(self.domain.metadata, {"owner": "ops"})
        self.assertEqual(self.domain.dns_providers, {"bind": 1})
        self.assertEqual(self.domain.records[0].metadata, {"k": "v"})
        self.assertEqual(self.domain.records[0].name, "www")
        self.assertEqual(len(self.domain.records), 1)
        self.assertEqual(self.domain.nameservers[0].target, "")

        self.domain.metadata["source"] = "changed"
        self.assertNotIn("source", clone.metadata)

    def test_original_is_shared(self):
        """The provider handle is shared, not cloned."""
        record = self.domain.records[0]
        self.assertIs(record.copy().original, self.handle)
        self.assertIs(self.domain.copy().records[0].original, self.handle)

    def test_record_copy(self):
        """Records copy independently."""
        record = self.domain.records[0]
        clone = record.copy()
        self.assertEqual(clone, record)
        clone.metadata["k"] = "other"
        self.assertEqual(record.metadata["k"], "v")

    def test_copy_failure(self):
        """Uncopyable values surface as CopyError."""
        domain = self.domain.copy()
        domain.metadata["lock"] = _Uncopyable()
        with self.assertRaises(CopyError):
            domain.copy()

    def test_copy_failure_any_error(self):
        """Any failure while copying surfaces as CopyError."""
        for error in [AttributeError("missing"), pickle.PicklingError("no reduce")]:
            with self.subTest(error=type(error).__name__):
                record = make_record("A", "www", "192.0.2.1", metadata={"k": "v"})
                record.metadata["bad"] = _FailingReduce(error)
                with self.assertRaises(CopyError) as cm:
                    record.copy()
                self.assertIs(cm.exception.__cause__, error)


class _Uncopyable:
    def __deepcopy__(self, memo):
        raise TypeError("cannot copy")


class _FailingReduce:
    def __init__(self, error):
        self.error = error

    def __reduce_ex__(self, protocol):
        raise self.error


class TestAddressCoercion(unittest.TestCase):
    """Test address coercion."""

    def test_packed_integer(self):
        self.assertEqual(str(coerce_to_ip(3232235521)), "192.168.0.1")
        self.assertEqual(str(coerce_to_ip(3232235521.0)), "192.168.0.1")
        self.assertEqual(str(coerce_to_ip(0)), "0.0.0.0")

    def test_literals(self):
        self.assertEqual(coerce_to_ip("2001:db8::1"), ipaddress.ip_address("2001:db8::1"))
        self.assertEqual(coerce_to_ip("192.0.2.1"), ipaddress.ip_address("192.0.2.1"))

    def test_invalid(self):
        """Other shapes fail, naming the received type."""
        for value in [True, None, [1], "not-an-ip", 2**32, -1, 1.5]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidAddressError):
                    coerce_to_ip(value)

        with self.assertRaises(InvalidAddressError) as cm:
            coerce_to_ip(True)
        self.assertIn("bool", str(cm.exception))

    def test_uint_round_trip(self):
        self.assertEqual(ip_to_uint(uint_to_ip(3232235521)), 3232235521)


class TestCorrection(unittest.TestCase):
    """Test the correction unit."""

    def test_run_once(self):
        calls = []
        correction = Correction("CREATE A www.example.com", lambda: calls.append(1))
        correction.run()
        self.assertEqual(calls, [1])
        self.assertTrue(correction.executed)
        with self.assertRaises(CorrectionError):
            correction.run()
        self.assertEqual(calls, [1])

    def test_error_propagates(self):
        def fail():
            raise RuntimeError("provider rejected change")

        correction = Correction("DELETE A www.example.com", fail)
        with self.assertRaises(RuntimeError):
            correction()
        self.assertTrue(correction.executed)

    def test_requires_callable(self):
        with self.assertRaises(TypeError):
            Correction("bad", None)


class TestSerializedForm(unittest.TestCase):
    """Test the YAML/JSON serialized form."""

    def setUp(self):
        self.config = DNSConfig(
            registrars=[RegistrarConfig("none", "NONE")],
            dns_providers=[DNSProviderConfig("bind", "BIND", {"directory": "zones"})],
            domains=[
                DomainConfig(
                    "example.com",
                    registrar="none",
                    dns_providers={"bind": -1},
                    records=[
                        make_record("A", "@", "192.0.2.1"),
                        make_record("MX", "@", "mail.example.com.", ttl=600, priority=10),
                    ],
                    nameservers=strings_to_nameservers(["ns1.example.com"]),
                    keep_unknown=True,
                )
            ],
        )

    def test_zero_fields_omitted(self):
        """Zero ttl/priority and empty metadata are left out."""
        data = make_record("A", "www", "192.0.2.1").to_dict()
        self.assertEqual(data, {"type": "A", "name": "www", "target": "192.0.2.1"})
        self.assertNotIn("name_fqdn", data)

    def test_yaml_round_trip(self):
        """Dumping and parsing preserves domains and keepunknown."""
        text = dump_dns_config(self.config)
        self.assertIn("keepunknown: true", text)
        parsed = parse_dns_config(text)
        self.assertEqual(parsed, self.config)
        domain = parsed.find_domain("example.com")
        self.assertTrue(domain.keep_unknown)
        self.assertEqual(domain.records[1].name_fqdn, "example.com")
        self.assertEqual(domain.records[1].priority, 10)

    def test_json_input(self):
        """JSON documents load as well."""
        text = (
            '{"domains": [{"name": "example.com", "registrar": "none",'
            ' "dnsProviders": {"bind": 1}, "keepunknown": false,'
            ' "records": [{"type": "CNAME", "name": "www", "target": "example.com."}]}]}'
        )
        domain = parse_dns_config(text).domains[0]
        self.assertFalse(domain.keep_unknown)
        self.assertEqual(domain.records[0].name_fqdn, "www.example.com")
        self.assertEqual(domain.records[0].ttl, 0)

    def test_file_round_trip(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "dnsconfig.yaml")
            dump_dns_config(self.config, path)
            self.assertEqual(load_dns_config(path), self.config)

    def test_malformed(self):
        for text in ["- a\n- b\n", "domains: [{registrar: x}]", "domains: [\n"]:
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_dns_config(text)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_dns_config("/nonexistent/dnsconfig.yaml")

    def test_default_settings(self):
        self.assertEqual(load_settings(None)["logging"]["level"], "INFO")
        self.assertEqual(load_settings("/nonexistent/settings.yaml")["logging"]["level"], "INFO")


class TestCLI(unittest.TestCase):
    """Test the CLI rendering helpers."""

    def test_example_config(self):
        """The shipped example config loads and renders."""
        path = os.path.join(os.path.dirname(__file__), "configs", "dnsconfig.example.yaml")
        config = load_dns_config(path)
        domain = config.find_domain("example.com")
        self.assertEqual(len(domain.records), 4)

        table = build_records_table(domain)
        self.assertEqual(table.row_count, 4)

    def test_config_logger(self):
        with patch("logging.basicConfig") as basic_config:
            config_logger({"logging": {"level": "DEBUG"}})
        self.assertEqual(basic_config.call_args.kwargs["level"], "DEBUG")


if __name__ == "__main__":
    unittest.main()
