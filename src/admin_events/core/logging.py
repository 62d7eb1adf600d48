import logging
import sys
from typing import Optional

import structlog

from admin_events.core.config import settings


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Configures and returns a structlog logger.

    Args:
        name: Hierarchical logger name (e.g., 'service.serializer', 'infrastructure.logs_client')

    Returns:
        A configured structlog BoundLogger instance
    """
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.LOG_JSON
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    return structlog.get_logger(name)


class LoggerRegistry:
    """
    Logger registry with standardized naming conventions.

    Every component asks the registry for its logger so names stay
    hierarchical (``service.*``, ``infrastructure.*``) across the package.
    """

    @staticmethod
    def get_service_logger(service_name: str) -> structlog.stdlib.BoundLogger:
        """Get a logger for services."""
        return get_logger(f"service.{service_name}")

    @staticmethod
    def get_infrastructure_logger(component: str, operation: Optional[str] = None) -> structlog.stdlib.BoundLogger:
        """Get a logger for infrastructure components."""
        if operation:
            return get_logger(f"infrastructure.{component}.{operation}")
        return get_logger(f"infrastructure.{component}")
