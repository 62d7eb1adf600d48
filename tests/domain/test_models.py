from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from admin_events.core.schemas.enums import APIType, EventKind, Origin
from admin_events.domain.models import EVENT_MODELS, APIEvent, AuditEvent, CallInfo, ErrorEvent


def test_tag_lookup_returns_empty_string_when_absent():
    event = ErrorEvent(tags={"pool": "0"})

    assert event.tag("pool") == "0"
    assert event.tag("set") == ""
    assert APIEvent().tag("anything") == ""


def test_events_are_immutable():
    event = AuditEvent(bucket="b1")

    with pytest.raises(ValidationError):
        event.bucket = "b2"


def test_fields_accept_wire_names_and_attribute_names():
    by_wire = APIEvent.model_validate(
        {"versionId": "v1", "object": "o", "type": "admin", "callInfo": {"rx": 3, "requestID": "r"}}
    )
    by_name = APIEvent(
        version_id="v1",
        object_name="o",
        api_type=APIType.ADMIN,
        call_info=CallInfo(input_bytes=3, request_id="r"),
    )

    assert by_wire == by_name


def test_origin_is_a_closed_set():
    assert APIEvent(origin="site-replication").origin is Origin.SITE_REPLICATION

    with pytest.raises(ValidationError):
        APIEvent(origin="somewhere-else")


def test_time_is_normalized_to_utc():
    event = AuditEvent.model_validate_json('{"time": "2024-03-01T10:00:00+01:00"}')

    assert event.time == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
    assert event.time.utcoffset().total_seconds() == 0


def test_wire_zero_time_is_absent():
    event = APIEvent.model_validate_json('{"version": "1", "time": "0001-01-01T00:00:00Z"}')

    assert event.time is None


def test_integrity_hash_must_fit_in_64_bits():
    AuditEvent(integrity_hash=2**64 - 1)

    with pytest.raises(ValidationError):
        AuditEvent(integrity_hash=2**64)
    with pytest.raises(ValidationError):
        AuditEvent(integrity_hash=-1)


def test_claims_reject_values_outside_the_union():
    with pytest.raises(ValidationError):
        AuditEvent(req_claims={"raw": object()})


def test_null_claims_are_kept():
    event = AuditEvent.model_validate_json(
        '{"apiName": "PutObject", "requestClaims": {"sub": "u1", "sessionPolicy": null}}'
    )

    assert event.req_claims == {"sub": "u1", "sessionPolicy": None}
    assert str(event) == "apiName=PutObject,requestClaims={sessionPolicy=<nil>,sub=u1}"


def test_each_kind_is_registered():
    assert EVENT_MODELS == {
        EventKind.API: APIEvent,
        EventKind.AUDIT: AuditEvent,
        EventKind.ERROR: ErrorEvent,
    }
    assert all(model.kind is kind for kind, model in EVENT_MODELS.items())
