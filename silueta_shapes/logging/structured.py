"""
Structured JSON Logger
=====================

Bounded Context: Observability Infrastructure

One JSON object per log record, with typed events and free-form metadata.

Design:
- Wraps Python's logging module (thread-safe)
- Contextual metadata (image, contour index, shape type)
- Type-safe events (LogEvent enum)

Example:
    >>> logger = StructuredLogger(component="processor")
    >>> logger.info(
    ...     event=LogEvent.SHAPE_CLASSIFIED,
    ...     message="Classified contour",
    ...     metadata={'index': 0, 'shape_type': 'circle'}
    ... )

Output:
    {
        "timestamp": "2026-10-19T15:30:45.123456",
        "level": "INFO",
        "component": "processor",
        "event": "shape.classified",
        "message": "Classified contour",
        "metadata": {"index": 0, "shape_type": "circle"}
    }
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Optional
from .events import LogEvent


class StructuredLogger:
    """
    JSON structured logger.

    Attributes:
        component: Component name (e.g., "processor", "cli")
        logger: Underlying Python logger instance

    Thread Safety:
        Thread-safe via Python's logging module.
    """

    def __init__(
        self,
        component: str,
        level: int = logging.INFO,
        logger_name: Optional[str] = None
    ):
        """
        Initialize structured logger.

        Args:
            component: Component identifier (e.g., "processor")
            level: Logging level (default: INFO)
            logger_name: Custom logger name (default: silueta.<component>)
        """
        self.component = component
        self.logger_name = logger_name or f"silueta.{component}"
        self.logger = logging.getLogger(self.logger_name)
        self.logger.setLevel(level)

        # Records propagate to root; a handler of our own is only needed
        # when the application has not configured logging
        if not self.logger.handlers and not logging.getLogger().handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JSONFormatter())
            self.logger.addHandler(handler)

    def _log(
        self,
        level: str,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': level,
            'component': self.component,
            'event': event.value,
            'message': message,
        }

        if metadata:
            log_entry['metadata'] = metadata

        if exc_info:
            log_entry['exception'] = {
                'type': type(exc_info).__name__,
                'message': str(exc_info)
            }

        self.logger.log(
            getattr(logging, level),
            json.dumps(log_entry, default=str),
            exc_info=exc_info if level == 'ERROR' else None
        )

    def debug(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log DEBUG level message."""
        self._log('DEBUG', event, message, metadata)

    def info(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Log INFO level message.

        Example:
            >>> logger.info(
            ...     event=LogEvent.IMAGE_PROCESSED,
            ...     message="Classified 3 contours",
            ...     metadata={'image': 'shapes.png'}
            ... )
        """
        self._log('INFO', event, message, metadata)

    def warning(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None
    ) -> None:
        """Log WARNING level message."""
        self._log('WARNING', event, message, metadata)

    def error(
        self,
        event: LogEvent,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        exc_info: Optional[Exception] = None
    ) -> None:
        """
        Log ERROR level message.

        Example:
            >>> try:
            ...     ProcessorConfig.from_yaml(path)
            ... except ValueError as e:
            ...     logger.error(
            ...         event=LogEvent.CONFIG_ERROR,
            ...         message="Invalid configuration",
            ...         exc_info=e,
            ...     )
        """
        self._log('ERROR', event, message, metadata, exc_info)

    def set_level(self, level: int) -> None:
        """Change logging level dynamically."""
        self.logger.setLevel(level)


class JSONFormatter(logging.Formatter):
    """
    Pass-through formatter: StructuredLogger messages are already JSON.
    """

    def format(self, record: logging.LogRecord) -> str:
        return record.getMessage()


def create_logger(
    component: str,
    level: int = logging.INFO
) -> StructuredLogger:
    """
    Factory function to create configured StructuredLogger.

    Example:
        >>> logger = create_logger("processor", level=logging.DEBUG)
    """
    return StructuredLogger(component=component, level=level)
