import re
from datetime import datetime, timezone
from typing import Any, Callable, Optional

# Wire form of an unset timestamp
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2}\.)(\d+)")


class Timestamp(datetime):
    """
    A datetime that also keeps the nanosecond digits of an RFC 3339 time.

    ``datetime`` stops at microseconds; `nanosecond` holds the remaining
    three digits (0-999) so server timestamps format back unchanged.
    """

    _nanosecond: int = 0

    @classmethod
    def from_datetime(cls, value: datetime, nanosecond: int = 0) -> "Timestamp":
        if not 0 <= nanosecond < 1000:
            raise ValueError(f"nanosecond must be in 0..999, got {nanosecond}")
        stamp = cls(
            value.year,
            value.month,
            value.day,
            value.hour,
            value.minute,
            value.second,
            value.microsecond,
            tzinfo=value.tzinfo,
            fold=value.fold,
        )
        stamp._nanosecond = nanosecond
        return stamp

    @property
    def nanosecond(self) -> int:
        return self._nanosecond

    def as_datetime(self) -> datetime:
        """Plain datetime without the sub-microsecond digits."""
        return datetime(
            self.year,
            self.month,
            self.day,
            self.hour,
            self.minute,
            self.second,
            self.microsecond,
            tzinfo=self.tzinfo,
            fold=self.fold,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, datetime):
            return NotImplemented
        return datetime.__eq__(self, other) and self._nanosecond == getattr(other, "nanosecond", 0)

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    __hash__ = datetime.__hash__

    def __reduce_ex__(self, protocol):
        return (Timestamp.from_datetime, (self.as_datetime(), self._nanosecond))

    def __repr__(self) -> str:
        return f"Timestamp({format_rfc3339_nano(self)!r})"


def to_utc(value: datetime, nanosecond: Optional[int] = None) -> Optional[Timestamp]:
    """Normalize to an aware UTC Timestamp; the zero time becomes None."""
    if nanosecond is None:
        nanosecond = getattr(value, "nanosecond", 0)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    else:
        value = value.astimezone(timezone.utc)
    if nanosecond == 0 and datetime.__eq__(value, ZERO_TIME):
        return None
    return Timestamp.from_datetime(value, nanosecond)


def parse_timestamp(value: Any, handler: Callable[[Any], datetime]) -> Optional[Timestamp]:
    """
    Validate a timestamp, keeping up to nine fractional digits.

    Digits past the sixth are split off before the datetime validator
    (which stops at microseconds) sees the string.
    """
    nanosecond = getattr(value, "nanosecond", 0)
    if isinstance(value, str):
        match = _FRACTION.search(value)
        if match and len(match.group(2)) > 6:
            digits = match.group(2)
            nanosecond = int(digits[6:9].ljust(3, "0"))
            value = value[: match.start(2)] + digits[:6] + value[match.end(2):]
    return to_utc(handler(value), nanosecond)


def is_zero_time(value: Optional[datetime]) -> bool:
    return value is None or to_utc(value) is None


def format_rfc3339_nano(value: datetime) -> str:
    """
    Format as RFC 3339 with nanosecond precision in UTC.

    Trailing zeros of the fraction are trimmed and the fraction is dropped
    entirely for whole seconds, e.g. ``2024-01-01T00:00:00.5Z``.
    """
    value = to_utc(value) or ZERO_TIME
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    fraction = value.microsecond * 1000 + getattr(value, "nanosecond", 0)
    if fraction:
        text += f".{fraction:09d}".rstrip("0")
    return text + "Z"
