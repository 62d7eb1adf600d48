from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ADMIN_EVENTS_")

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    ADMIN_API_PREFIX: str = "/minio/admin/v4"
    LOG_REQUEST_TIMEOUT: float = 60.0

    # Event kinds ("api", "audit", "error") that get an integrity hash stamped
    HASHED_EVENT_KINDS: List[str] = ["audit"]

    # Error bodies are read up to 100 KiB
    ERROR_BODY_LIMIT: int = 100 * 1024
    ERROR_MESSAGE_MAX: int = 1024

settings = Settings()
