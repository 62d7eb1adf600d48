from enum import Enum, IntFlag


class Origin(str, Enum):
    """Subsystem that triggered an API call."""

    CLIENT = "client"
    SITE_REPLICATION = "site-replication"
    ILM = "ilm"
    BATCH = "batch"
    REBALANCE = "rebalance"
    REPLICATE = "replicate"
    DECOMMISSION = "decommission"
    HEAL = "heal"


class APIType(str, Enum):
    OBJECT = "object"
    BUCKET = "bucket"
    ADMIN = "admin"
    AUTH = "auth"


class EventKind(str, Enum):
    API = "api"
    AUDIT = "audit"
    ERROR = "error"


class EncodingFormat(str, Enum):
    CANONICAL = "canonical"
    JSON = "json"


class LogMask(IntFlag):
    """Bit mask selecting console log kinds."""

    FATAL = 1
    WARNING = 2
    ERROR = 4
    EVENT = 8
    INFO = 16

    ALL = 31

    def contains(self, other: "LogMask") -> bool:
        """Whether every flag in `other` is present in this mask."""
        return self & other == other


class LogKind(str, Enum):
    FATAL = "FATAL"
    WARNING = "WARNING"
    ERROR = "ERROR"
    EVENT = "EVENT"
    INFO = "INFO"

    @property
    def mask(self) -> LogMask:
        return _KIND_MASKS.get(self, LogMask.ALL)

    def __str__(self) -> str:
        return self.value


_KIND_MASKS = {
    LogKind.FATAL: LogMask.FATAL,
    LogKind.WARNING: LogMask.WARNING,
    LogKind.ERROR: LogMask.ERROR,
    LogKind.EVENT: LogMask.EVENT,
    LogKind.INFO: LogMask.INFO,
}


def log_mask_for(kind: str) -> LogMask:
    """Mask for a raw log kind string; unknown kinds select everything."""
    try:
        return LogKind(kind).mask
    except ValueError:
        return LogMask.ALL
