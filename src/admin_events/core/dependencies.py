from functools import lru_cache

import httpx

from admin_events.domain.ports.hasher import IntegrityHasher
from admin_events.infrastructure.hashing import Blake2bHasher
from admin_events.infrastructure.logs_client import AdminLogsClient
from admin_events.services.event_serializer import EventSerializationService


@lru_cache()
def get_hasher() -> IntegrityHasher:
    """Get the integrity hasher."""
    return Blake2bHasher()


@lru_cache()
def get_event_serializer() -> EventSerializationService:
    return EventSerializationService(hasher=get_hasher())


def get_logs_client(client: httpx.AsyncClient) -> AdminLogsClient:
    """Get a logs client on top of an already configured (signed) HTTP client."""
    return AdminLogsClient(client=client)
