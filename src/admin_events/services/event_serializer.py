from typing import Callable, Dict, Iterable, Optional, TypeVar

import structlog

from admin_events.core.config import settings
from admin_events.core.logging import LoggerRegistry
from admin_events.core.schemas.enums import EncodingFormat, EventKind
from admin_events.domain.models import EventRecord
from admin_events.domain.ports.hasher import IntegrityHasher
from admin_events.encoding.canonical import encode
from admin_events.encoding.json_projection import to_json

E = TypeVar("E", bound=EventRecord)


class EventSerializationService:
    """
    Turns events into the payloads handed to log shippers and sinks.

    Encoding itself is pure; this service adds the opt-in integrity hash.
    Only event kinds listed in `hashed_kinds` are stamped, every other
    kind passes through untouched.
    """

    def __init__(
        self,
        hasher: IntegrityHasher,
        hashed_kinds: Optional[Iterable[str]] = None,
        logger: Optional[structlog.stdlib.BoundLogger] = None,
    ):
        self.hasher = hasher
        kinds = settings.HASHED_EVENT_KINDS if hashed_kinds is None else hashed_kinds
        self.hashed_kinds = frozenset(EventKind(kind) for kind in kinds)
        self.logger = logger or LoggerRegistry.get_service_logger("event_serializer")
        self._encoders: Dict[EncodingFormat, Callable[[EventRecord], str]] = {
            EncodingFormat.CANONICAL: encode,
            EncodingFormat.JSON: to_json,
        }

    def serialize(self, event: EventRecord, fmt: EncodingFormat = EncodingFormat.CANONICAL) -> str:
        """
        Encode `event`, stamping its integrity hash first when its kind opts in.

        Raises:
            ValueError: If `fmt` is not a known encoding format.
        """
        encoder = self._encoders.get(fmt)
        if encoder is None:
            raise ValueError(
                f"Unknown encoding format: '{fmt}'. "
                f"Available formats: {[f.value for f in self._encoders]}"
            )
        return encoder(self.stamp(event))

    def compute_hash(self, event: EventRecord) -> int:
        """Hash of the canonical form of `event` with its own hash and hasher name cleared."""
        unhashed = event.model_copy(update={"integrity_hash": 0, "hash_algorithm": ""})
        return self.hasher.digest(encode(unhashed).encode("utf-8"))

    def stamp(self, event: E) -> E:
        """Copy of `event` carrying its integrity hash, or `event` itself when not opted in."""
        if event.kind not in self.hashed_kinds:
            return event
        return event.model_copy(
            update={"integrity_hash": self.compute_hash(event), "hash_algorithm": self.hasher.name}
        )

    def verify(self, event: EventRecord) -> bool:
        """Whether the stored integrity hash matches the event content."""
        if not event.integrity_hash:
            self.logger.warning("integrity.missing", kind=event.kind.value, hasher=self.hasher.name)
            return False
        if event.hash_algorithm and event.hash_algorithm != self.hasher.name:
            # Hashes from different algorithms are never comparable
            self.logger.warning(
                "integrity.hasher_mismatch",
                kind=event.kind.value,
                hasher=self.hasher.name,
                stamped_by=event.hash_algorithm,
            )
            return False
        expected = self.compute_hash(event)
        if expected != event.integrity_hash:
            self.logger.warning(
                "integrity.mismatch",
                kind=event.kind.value,
                hasher=self.hasher.name,
                stamped_by=event.hash_algorithm or "unknown",
                stored=event.integrity_hash,
                expected=expected,
            )
            return False
        return True
