from datetime import timedelta
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer

from admin_events.core.schemas.enums import APIType, Origin

# Intervals travel as integer nanoseconds
Interval = Annotated[
    timedelta,
    PlainSerializer(lambda d: (d // timedelta(microseconds=1)) * 1000, return_type=int),
]


class LogOpts(BaseModel):
    """Base for the filters sent when fetching persisted logs."""

    model_config = ConfigDict(populate_by_name=True)

    def to_request_body(self) -> Dict[str, Any]:
        """Request document with unset filters left out."""
        return {
            key: value
            for key, value in self.model_dump(mode="json", by_alias=True, exclude_none=True).items()
            if value not in ("", 0)
        }


class APILogOpts(LogOpts):
    node: str = ""
    api: str = ""
    bucket: str = ""
    prefix: str = ""
    status_code: int = Field(0, alias="statusCode")
    interval: Optional[Interval] = None
    origin: Optional[Origin] = None
    api_type: Optional[APIType] = Field(None, alias="type")
    max_per_node: int = Field(0, alias="maxPerNode")


class AuditLogOpts(LogOpts):
    node: str = ""
    api: str = ""
    bucket: str = ""
    interval: Optional[Interval] = None
    category: str = ""
    max_per_node: int = Field(0, alias="maxPerNode")


class ErrorLogOpts(LogOpts):
    node: str = ""
    api: str = ""
    bucket: str = ""
    prefix: str = ""
    interval: Optional[Interval] = None
