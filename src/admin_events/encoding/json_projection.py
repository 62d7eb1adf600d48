"""
JSON projection of event records.

Values are serialized by pydantic using the JSON wire names; which fields
appear is decided by the same zero-value predicate the canonical encoder
uses, so a field is absent from the JSON document exactly when it has no
canonical fragment.
"""
import json
from typing import Any, Dict

from pydantic import BaseModel

from admin_events.encoding.canonical import is_zero


def to_json_dict(record: BaseModel) -> Dict[str, Any]:
    dumped = record.model_dump(mode="json", by_alias=True)
    out: Dict[str, Any] = {}
    for name, field in type(record).model_fields.items():
        value = getattr(record, name)
        if is_zero(value):
            continue
        key = field.alias or name
        if isinstance(value, BaseModel):
            out[key] = to_json_dict(value)
        else:
            out[key] = dumped[key]
    return out


def to_json(record: BaseModel) -> str:
    """One JSON document for `record`, empty fields omitted."""
    return json.dumps(to_json_dict(record), ensure_ascii=False, separators=(",", ":"))
