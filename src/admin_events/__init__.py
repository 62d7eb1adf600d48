from admin_events.core.schemas.enums import APIType, EncodingFormat, EventKind, LogKind, LogMask, Origin
from admin_events.domain.errors import AdminErrorResponse
from admin_events.domain.log_options import APILogOpts, AuditLogOpts, ErrorLogOpts
from admin_events.domain.models import APIEvent, AuditEvent, CallInfo, ErrorEvent, Trace
from admin_events.encoding.canonical import encode
from admin_events.encoding.json_projection import to_json, to_json_dict

__all__ = [
    "APIEvent",
    "APILogOpts",
    "APIType",
    "AdminErrorResponse",
    "AuditEvent",
    "AuditLogOpts",
    "CallInfo",
    "EncodingFormat",
    "ErrorEvent",
    "ErrorLogOpts",
    "EventKind",
    "LogKind",
    "LogMask",
    "Origin",
    "Trace",
    "encode",
    "to_json",
    "to_json_dict",
]
