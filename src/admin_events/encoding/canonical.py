"""
Canonical string encoding of event records.

A record is rendered as comma separated ``key=value`` fragments. Maps and
nested records render as ``key={...}``, string lists as ``key=[...]``.
Fields holding their zero value contribute no fragment, and the fragment
list is sorted before joining, so the output depends only on the observable
field values and never on declaration or insertion order.
"""
from datetime import datetime
from enum import Enum
from typing import List

from pydantic import BaseModel

from admin_events.domain.claims import render_claim, render_pairs
from admin_events.domain.timestamps import format_rfc3339_nano, is_zero_time


def encode(record: BaseModel) -> str:
    """Return the canonical string for `record`; empty when every field is zero."""
    return ",".join(sorted(fragments(record)))


def fragments(record: BaseModel) -> List[str]:
    """Non-empty fragments of `record` in field declaration order."""
    out = []
    for name, field in type(record).model_fields.items():
        fragment = encode_field(field.alias or name, getattr(record, name))
        if fragment:
            out.append(fragment)
    return out


def is_zero(value: object) -> bool:
    """Whether `value` is the zero value of its type for omission purposes."""
    if value is None:
        return True
    if isinstance(value, BaseModel):
        return not fragments(value)
    if isinstance(value, datetime):
        return is_zero_time(value)
    if isinstance(value, Enum):
        value = value.value
    return not value


def encode_field(key: str, value: object) -> str:
    """Fragment for one field, or the empty string when it is omitted."""
    if is_zero(value):
        return ""
    if isinstance(value, BaseModel):
        return to_nested(key, value)
    if isinstance(value, Enum):
        return to_string(key, str(value.value))
    if isinstance(value, datetime):
        return to_time(key, value)
    if isinstance(value, dict):
        return to_map(key, value)
    if isinstance(value, (list, tuple)):
        return to_list(key, value)
    if isinstance(value, str):
        return to_string(key, value)
    if isinstance(value, int) and not isinstance(value, bool):
        return to_int(key, value)
    return f"{key}={render_claim(value)}"


def to_string(key: str, value: str) -> str:
    if value == "":
        return ""
    return f"{key}={value}"


def to_int(key: str, value: int) -> str:
    if value == 0:
        return ""
    return f"{key}={value}"


def to_time(key: str, value: datetime) -> str:
    if is_zero_time(value):
        return ""
    return f"{key}={format_rfc3339_nano(value)}"


def to_map(key: str, mapping: dict) -> str:
    if not mapping:
        return ""
    return f"{key}={{{render_pairs(mapping)}}}"


def to_list(key: str, values) -> str:
    # sorted() copies; the caller's list keeps its order
    if not values:
        return ""
    return f"{key}=[{','.join(sorted(render_claim(v) for v in values))}]"


def to_nested(key: str, record: BaseModel) -> str:
    inner = encode(record)
    if not inner:
        return ""
    return f"{key}={{{inner}}}"
