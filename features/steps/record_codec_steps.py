"""
Step definitions for the record codec features.
"""

from behave import given, when, then

from dns_records_model.codec.rr import ResourceRecord, record_to_rr, rr_to_record
from dns_records_model.core.record import DEFAULT_TTL, RecordConfig
from dns_records_model.utils import errors
from dns_records_model.utils.errors import DNSModelError


@given('a "{rtype}" record named "{name}" with target "{target}" and priority {priority:d}')
def step_impl(context, rtype, name, target, priority):
    """Build a record inside the test origin."""
    context.record = RecordConfig(
        rtype, target, name=name, origin=context.origin, priority=priority
    )


@given('the wire record "{line}"')
def step_impl(context, line):
    """Parse a wire record from zone-file text."""
    context.rr = ResourceRecord.from_text(line)


@when("I encode the record to a wire record")
def step_impl(context):
    context.rr = record_to_rr(context.record)


@when("I try to encode the record")
def step_impl(context):
    try:
        context.rr = record_to_rr(context.record)
    except DNSModelError as e:
        context.error = e


@when("I decode the wire record")
def step_impl(context):
    context.decoded = rr_to_record(context.rr, context.origin)


@when("I try to decode the wire record")
def step_impl(context):
    try:
        context.decoded = rr_to_record(context.rr, context.origin)
    except DNSModelError as e:
        context.error = e


@then("the decoded record matches the original record")
def step_impl(context):
    original, decoded = context.record, context.decoded
    assert decoded.type == original.type, f"{decoded.type} != {original.type}"
    assert decoded.name == original.name, f"{decoded.name} != {original.name}"
    assert decoded.name_fqdn == original.name_fqdn
    assert decoded.target == original.target, f"{decoded.target} != {original.target}"
    assert decoded.priority == original.priority


@then("the wire record has TTL {ttl:d}")
def step_impl(context, ttl):
    assert ttl == DEFAULT_TTL
    assert context.rr.ttl == ttl
    assert context.decoded.ttl == ttl


@then('a fatal "{name}" is raised')
def step_impl(context, name):
    assert isinstance(context.error, getattr(errors, name)), repr(context.error)
    assert isinstance(context.error, errors.FatalRecordError)


@then('a recoverable "{name}" is raised')
def step_impl(context, name):
    assert isinstance(context.error, getattr(errors, name)), repr(context.error)
    assert not isinstance(context.error, errors.FatalRecordError)


@then('the decoded target is "{target}"')
def step_impl(context, target):
    assert context.decoded.target == target, context.decoded.target
