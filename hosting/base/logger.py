"""
Structured logging for server hosting.

Provides a pre-configured logger that emits JSON-structured log records
with request context (component, operation, instance) so CloudWatch
Logs Insights queries can filter on them directly.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

_CONTEXT_KEYS = ("request_id", "component", "operation", "instance_id")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry, default=str)


class HostingLogger:
    """Convenience wrapper around :mod:`logging` for hosting operations."""

    def __init__(self, name: str = "hosting") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)
            # The Lambda runtime installs its own root handler.
            self.logger.propagate = False

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        component: str | None = None,
        operation: str | None = None,
        instance_id: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with hosting context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            component: Emitting component (e.g. 'handler', 'resolution').
            operation: Operation name (e.g. 'start').
            instance_id: EC2 instance the record is about.
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "component": component,
            "operation": operation,
            "instance_id": instance_id,
            "request_id": request_id or uuid.uuid4().hex[:12],
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
hosting_logger = HostingLogger()
