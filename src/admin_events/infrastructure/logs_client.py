from typing import AsyncIterator, Optional, Type, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from admin_events.core.config import settings
from admin_events.core.logging import LoggerRegistry
from admin_events.core.schemas.enums import EventKind
from admin_events.domain.log_options import APILogOpts, AuditLogOpts, ErrorLogOpts, LogOpts
from admin_events.domain.models import APIEvent, AuditEvent, ErrorEvent, EventRecord
from admin_events.infrastructure.error_response import error_from_response

E = TypeVar("E", bound=EventRecord)


class AdminLogsClient:
    """
    Fetches persisted API, audit and error logs from the admin API.

    The wrapped ``httpx.AsyncClient`` owns the base URL, request signing and
    credentials; this class only builds the log queries and decodes the
    newline-delimited JSON stream the server answers with.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_prefix: Optional[str] = None,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ):
        self.client = client
        self.api_prefix = (api_prefix or settings.ADMIN_API_PREFIX).rstrip("/")
        self.logger = logger or LoggerRegistry.get_infrastructure_logger("logs_client")

    async def get_api_logs(self, opts: Optional[APILogOpts] = None) -> AsyncIterator[APIEvent]:
        async for event in self._stream(EventKind.API, opts or APILogOpts(), APIEvent):
            yield event

    async def get_audit_logs(self, opts: Optional[AuditLogOpts] = None) -> AsyncIterator[AuditEvent]:
        async for event in self._stream(EventKind.AUDIT, opts or AuditLogOpts(), AuditEvent):
            yield event

    async def get_error_logs(self, opts: Optional[ErrorLogOpts] = None) -> AsyncIterator[ErrorEvent]:
        async for event in self._stream(EventKind.ERROR, opts or ErrorLogOpts(), ErrorEvent):
            yield event

    async def _stream(self, kind: EventKind, opts: LogOpts, model: Type[E]) -> AsyncIterator[E]:
        path = f"{self.api_prefix}/logs/{kind.value}"
        log = self.logger.bind(kind=kind.value, path=path)
        log.info("logs.request", **opts.to_request_body())

        async with self.client.stream(
            "POST",
            path,
            json=opts.to_request_body(),
            timeout=settings.LOG_REQUEST_TIMEOUT,
        ) as response:
            if response.status_code != httpx.codes.OK:
                error = await error_from_response(response)
                log.error(
                    "logs.error_response",
                    status_code=response.status_code,
                    code=error.code,
                    error=error.message,
                )
                raise error

            received = skipped = 0
            async for line in response.aiter_lines():
                if not line.strip():
                    continue
                try:
                    event = model.model_validate_json(line)
                except ValidationError as exc:
                    # A bad record does not end the stream
                    skipped += 1
                    log.warning("logs.record_skipped", error=str(exc), errors=exc.error_count())
                    continue
                received += 1
                yield event

            log.info("logs.finished", received=received, skipped=skipped)
