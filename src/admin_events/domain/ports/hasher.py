from typing import Protocol


class IntegrityHasher(Protocol):
    """Port for a 64-bit content hash used for deduplication and tamper evidence."""

    name: str

    def digest(self, data: bytes) -> int:
        """Return an unsigned 64-bit hash of `data`."""
        ...
