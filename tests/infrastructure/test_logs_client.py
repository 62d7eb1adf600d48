import json
from datetime import timedelta

import httpx
import pytest
from pytest_httpx import HTTPXMock

from admin_events.core.schemas.enums import Origin
from admin_events.domain.errors import AdminErrorResponse
from admin_events.domain.log_options import APILogOpts, AuditLogOpts, ErrorLogOpts
from admin_events.domain.models import APIEvent, AuditEvent, ErrorEvent
from admin_events.infrastructure.logs_client import AdminLogsClient

BASE_URL = "http://admin.test"


@pytest.fixture
async def logs_client():
    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        yield AdminLogsClient(client=client)


def ndjson(*documents) -> bytes:
    return b"".join(
        (doc if isinstance(doc, str) else json.dumps(doc)).encode() + b"\n" for doc in documents
    )


async def test_get_api_logs_decodes_the_stream(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/api",
        content=ndjson(
            {"version": "1", "time": "2024-01-01T00:00:00Z", "origin": "client", "name": "PutObject", "bucket": "b1"},
            "",
            {"version": "1", "name": "GetObject", "callInfo": {"httpStatusCode": 200, "rx": 10}},
        ),
    )

    events = [
        event
        async for event in logs_client.get_api_logs(
            APILogOpts(bucket="b1", interval=timedelta(minutes=1), api_type="object")
        )
    ]

    assert [type(e) for e in events] == [APIEvent, APIEvent]
    assert str(events[0]) == "bucket=b1,name=PutObject,origin=client,time=2024-01-01T00:00:00Z,version=1"
    assert events[0].origin is Origin.CLIENT
    assert events[1].call_info.input_bytes == 10

    request = httpx_mock.get_request()
    assert json.loads(request.content) == {"bucket": "b1", "interval": 60_000_000_000, "type": "object"}


async def test_bad_records_are_skipped(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/api",
        content=ndjson(
            {"name": "first"},
            "not json at all",
            {"origin": "mars"},
            {"name": "last"},
        ),
    )

    names = [event.name async for event in logs_client.get_api_logs()]

    assert names == ["first", "last"]


async def test_get_audit_logs(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/audit",
        content=ndjson(
            {
                "version": "1",
                "apiName": "AddUser",
                "requestClaims": {"groups": ["admins"], "exp": 1700000000},
                "xxhash": 18446744073709551615,
            }
        ),
    )

    events = [event async for event in logs_client.get_audit_logs(AuditLogOpts(max_per_node=10))]

    assert len(events) == 1
    assert isinstance(events[0], AuditEvent)
    assert events[0].req_claims == {"groups": ["admins"], "exp": 1700000000}
    assert events[0].integrity_hash == 2**64 - 1
    assert json.loads(httpx_mock.get_request().content) == {"maxPerNode": 10}


async def test_get_error_logs(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/error",
        content=ndjson(
            {
                "version": "1",
                "node": "n1",
                "time": "2024-01-01T00:00:00Z",
                "message": "drive offline",
                "apiName": "PutObject",
                "trace": {"source": ["b.go:2", "a.go:1"]},
            }
        ),
    )

    events = [event async for event in logs_client.get_error_logs(ErrorLogOpts(node="n1"))]

    assert isinstance(events[0], ErrorEvent)
    assert str(events[0]) == (
        "apiName=PutObject,message=drive offline,node=n1,time=2024-01-01T00:00:00Z,"
        "trace={source=[a.go:1,b.go:2]},version=1"
    )


async def test_error_response_is_raised(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/api",
        status_code=403,
        json={"Code": "AccessDenied", "Message": "Access Denied.", "RequestID": "17A"},
    )

    with pytest.raises(AdminErrorResponse) as exc_info:
        async for _ in logs_client.get_api_logs():
            pass

    assert exc_info.value.code == "AccessDenied"
    assert str(exc_info.value) == "Access Denied."


async def test_custom_api_prefix(httpx_mock: HTTPXMock):
    httpx_mock.add_response(method="POST", url=f"{BASE_URL}/admin/v5/logs/api", content=b"")

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        logs_client = AdminLogsClient(client=client, api_prefix="/admin/v5/")
        events = [event async for event in logs_client.get_api_logs()]

    assert events == []


async def test_audit_record_with_null_claim_is_kept(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/audit",
        content=ndjson(
            {"version": "1", "apiName": "PutObject", "requestClaims": {"sub": "u1", "sessionPolicy": None}}
        ),
    )

    events = [event async for event in logs_client.get_audit_logs()]

    assert len(events) == 1
    assert events[0].req_claims["sessionPolicy"] is None
    assert str(events[0]) == "apiName=PutObject,requestClaims={sessionPolicy=<nil>,sub=u1},version=1"


async def test_nanosecond_timestamps_survive_decoding(logs_client: AdminLogsClient, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE_URL}/minio/admin/v4/logs/api",
        content=ndjson({"version": "1", "time": "2024-01-01T00:00:00.123456789Z", "name": "x"}),
    )

    events = [event async for event in logs_client.get_api_logs()]

    assert str(events[0]) == "name=x,time=2024-01-01T00:00:00.123456789Z,version=1"
