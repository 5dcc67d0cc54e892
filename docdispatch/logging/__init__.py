"""Structured logging for both pipeline stages."""

import logging
from typing import Optional

# Between INFO and WARNING; log with logger.log(SUCCESS, ...)
SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges a default component into every record."""

    def process(self, msg, kwargs):
        """Merge adapter extra with call extra; call extra wins."""
        extra = kwargs.get("extra", {})
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None) -> ComponentLoggerAdapter:
    """Get a logger that tags records with a component field.

    Args:
        name: Logger name (typically __name__)
        component: Optional component identifier to inject into all logs

    Example:
        >>> logger = get_logger(__name__, component="queue")
        >>> logger.log(SUCCESS, "Report written", extra={"event": "queue.report.written"})
    """
    extra = {"component": component} if component else {}
    return ComponentLoggerAdapter(logging.getLogger(name), extra)


__all__ = ["SUCCESS", "ComponentLoggerAdapter", "get_logger"]
