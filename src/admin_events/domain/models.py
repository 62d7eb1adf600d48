from datetime import datetime
from typing import Annotated, ClassVar, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, WrapValidator

from admin_events.core.schemas.enums import APIType, EventKind, Origin
from admin_events.domain.claims import ClaimValue
from admin_events.domain.timestamps import format_rfc3339_nano, parse_timestamp
from admin_events.encoding.canonical import encode

UTCTime = Annotated[
    datetime,
    WrapValidator(parse_timestamp),
    PlainSerializer(format_rfc3339_nano, return_type=str, when_used="unless-none"),
]

IntegrityHash = Annotated[int, Field(ge=0, lt=2**64)]


class CanonicalRecord(BaseModel):
    """
    Immutable record with a canonical string form.

    Fields are populated by attribute name or by their JSON wire name; the
    wire name is also the key used in the canonical encoding. New fields
    must be appended so existing canonical strings stay stable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def __str__(self) -> str:
        return encode(self)


class EventRecord(CanonicalRecord):
    """Common behaviour of the top-level event kinds."""

    kind: ClassVar[EventKind]

    def tag(self, key: str) -> str:
        """Tag value for `key`, or the empty string when absent."""
        return (self.tags or {}).get(key, "")


class CallInfo(CanonicalRecord):
    """HTTP-level detail of one call."""

    http_status_code: int = Field(0, alias="httpStatusCode")
    input_bytes: int = Field(0, alias="rx")
    output_bytes: int = Field(0, alias="tx")
    header_bytes: int = Field(0, alias="txHeaders")
    time_to_first_byte: str = Field("", alias="timeToFirstByte")
    request_read_time: str = Field("", alias="requestReadTime")
    response_write_time: str = Field("", alias="responseWriteTime")
    request_time: str = Field("", alias="requestTime")
    time_to_response: str = Field("", alias="timeToResponse")
    read_blocked: str = Field("", alias="readBlocked")
    write_blocked: str = Field("", alias="writeBlocked")
    source_host: str = Field("", alias="sourceHost")
    request_id: str = Field("", alias="requestID")
    user_agent: str = Field("", alias="userAgent")
    req_path: str = Field("", alias="requestPath")
    req_host: str = Field("", alias="requestHost")
    req_claims: Dict[str, ClaimValue] = Field(default_factory=dict, alias="requestClaims")
    req_query: Dict[str, str] = Field(default_factory=dict, alias="requestQuery")
    req_header: Dict[str, str] = Field(default_factory=dict, alias="requestHeader")
    resp_header: Dict[str, str] = Field(default_factory=dict, alias="responseHeader")
    # Service account and impersonation traceability
    access_key: str = Field("", alias="accessKey")
    parent_user: str = Field("", alias="parentUser")


class APIEvent(EventRecord):
    """One completed API call."""

    kind: ClassVar[EventKind] = EventKind.API

    version: str = ""
    time: Optional[UTCTime] = None
    node: str = ""
    origin: Optional[Origin] = None
    api_type: Optional[APIType] = Field(None, alias="type")
    name: str = ""
    bucket: str = ""
    object_name: str = Field("", alias="object")
    version_id: str = Field("", alias="versionId")
    tags: Dict[str, str] = Field(default_factory=dict)
    call_info: Optional[CallInfo] = Field(None, alias="callInfo")
    integrity_hash: IntegrityHash = Field(0, alias="xxhash")
    hash_algorithm: str = Field("", alias="hashAlgorithm")


class AuditEvent(EventRecord):
    """A user triggered action."""

    kind: ClassVar[EventKind] = EventKind.AUDIT

    version: str = ""
    time: Optional[UTCTime] = None
    node: str = ""
    api_name: str = Field("", alias="apiName")
    bucket: str = ""
    tags: Dict[str, str] = Field(default_factory=dict)
    request_id: str = Field("", alias="requestID")
    req_claims: Dict[str, ClaimValue] = Field(default_factory=dict, alias="requestClaims")
    source_host: str = Field("", alias="sourceHost")
    access_key: str = Field("", alias="accessKey")
    parent_user: str = Field("", alias="parentUser")
    integrity_hash: IntegrityHash = Field(0, alias="xxhash")
    hash_algorithm: str = Field("", alias="hashAlgorithm")


class Trace(CanonicalRecord):
    """Call trace captured at an error site."""

    source: List[str] = Field(default_factory=list)
    variables: Dict[str, str] = Field(default_factory=dict)


class ErrorEvent(EventRecord):
    kind: ClassVar[EventKind] = EventKind.ERROR

    version: str = ""
    node: str = ""
    time: Optional[UTCTime] = None
    message: str = ""
    api_name: str = Field("", alias="apiName")
    trace: Optional[Trace] = None
    tags: Dict[str, str] = Field(default_factory=dict)
    integrity_hash: IntegrityHash = Field(0, alias="xxhash")
    hash_algorithm: str = Field("", alias="hashAlgorithm")


EVENT_MODELS = {
    EventKind.API: APIEvent,
    EventKind.AUDIT: AuditEvent,
    EventKind.ERROR: ErrorEvent,
}
