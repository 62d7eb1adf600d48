import hashlib


class Blake2bHasher:
    """64-bit BLAKE2b integrity hasher."""

    name = "blake2b-64"

    def __init__(self, key: bytes = b""):
        self._key = key

    def digest(self, data: bytes) -> int:
        """Hash `data` to an unsigned 64-bit integer (big-endian digest)."""
        return int.from_bytes(
            hashlib.blake2b(data, digest_size=8, key=self._key).digest(), "big"
        )
