import json
import xml.etree.ElementTree as ET
from typing import Dict, Optional

import httpx

from admin_events.core.config import settings
from admin_events.domain.errors import REPORT_ISSUE, AdminErrorResponse, invalid_argument

# Error document field -> AdminErrorResponse attribute
_FIELDS = {
    "code": "code",
    "message": "message",
    "bucketname": "bucket_name",
    "key": "key",
    "requestid": "request_id",
    "hostid": "host_id",
    "region": "region",
}


def parse_error_body(status: str, body: bytes) -> AdminErrorResponse:
    """
    Build an AdminErrorResponse from a server error body.

    The body is tried as JSON first and as an XML ``<Error>`` document
    second. When neither parses, the raw body (hex encoded if it is not
    valid UTF-8, truncated to ``ERROR_MESSAGE_MAX`` characters) ends up in
    the message and `status` becomes the code.
    """
    try:
        return _from_fields(_json_fields(body))
    except ValueError as json_err:
        try:
            return _from_fields(_xml_fields(body))
        except ET.ParseError:
            return AdminErrorResponse(
                code=status,
                message=f"Failed to parse server response ({json_err}): {_printable(body)}",
            )


async def error_from_response(response: Optional[httpx.Response]) -> AdminErrorResponse:
    """Read at most ``ERROR_BODY_LIMIT`` bytes of a failed response and parse them."""
    if response is None:
        return invalid_argument("Response is empty. " + REPORT_ISSUE)

    status = f"{response.status_code} {response.reason_phrase}".strip()
    body = b""
    try:
        async for chunk in response.aiter_bytes():
            body += chunk
            if len(body) >= settings.ERROR_BODY_LIMIT:
                body = body[: settings.ERROR_BODY_LIMIT]
                break
    except httpx.HTTPError as exc:
        return AdminErrorResponse(code=status, message=f"Failed to read server response: {exc}.")
    finally:
        await response.aclose()
    return parse_error_body(status, body)


def _json_fields(body: bytes) -> Dict[str, str]:
    document = json.loads(body)
    if not isinstance(document, dict):
        raise ValueError(f"cannot unmarshal {type(document).__name__} into an error response")
    # Field names match case-insensitively
    return {k.lower(): v for k, v in document.items() if isinstance(v, str)}


def _xml_fields(body: bytes) -> Dict[str, str]:
    root = ET.fromstring(body)
    return {child.tag.lower(): (child.text or "") for child in root}


def _from_fields(fields: Dict[str, str]) -> AdminErrorResponse:
    return AdminErrorResponse(
        **{attr: fields[name] for name, attr in _FIELDS.items() if name in fields}
    )


def _printable(body: bytes) -> str:
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError:
        text = body.hex()
    limit = settings.ERROR_MESSAGE_MAX
    if len(text) > limit:
        text = text[: limit - 3] + "..."
    return text
