"""Structured logging infrastructure for the API layer.

Provides JSON-formatted logging for production and human-readable
logging for development, plus a TaleLogger helper for tale lifecycle
and generation events.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

# Extra record attributes copied into JSON output when present
EXTRA_FIELDS = (
    "tale_id", "user", "action", "duration", "error_type", "liked", "likes", "model",
)


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        for field in EXTRA_FIELDS:
            if hasattr(record, field):
                log_data[field] = getattr(record, field)

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(json_format: bool = True, level: int | str = logging.INFO) -> None:
    """Configure structured logging for the application."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create console handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)

    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )

    root_logger.addHandler(handler)


class TaleLogger:
    """Logger for tale events with structured fields."""

    def __init__(self):
        self.logger = logging.getLogger("tales")

    def tale_created(self, tale_id: str, user: str) -> None:
        self.logger.info(
            "Tale created",
            extra={"tale_id": tale_id, "user": user, "action": "create"},
        )

    def tale_updated(self, tale_id: str, user: str, fields: list[str]) -> None:
        self.logger.info(
            f"Tale updated: {', '.join(fields) or 'no changes'}",
            extra={"tale_id": tale_id, "user": user, "action": "update"},
        )

    def tale_deleted(self, tale_id: str, user: str) -> None:
        self.logger.info(
            "Tale deleted",
            extra={"tale_id": tale_id, "user": user, "action": "delete"},
        )

    def like_toggled(self, tale_id: str, user: str, liked: bool, likes: int) -> None:
        self.logger.info(
            "Tale liked" if liked else "Tale unliked",
            extra={
                "tale_id": tale_id,
                "user": user,
                "action": "like" if liked else "unlike",
                "liked": liked,
                "likes": likes,
            },
        )

    def access_denied(self, tale_id: str, user: Optional[str], action: str) -> None:
        self.logger.warning(
            f"Access denied: {action}",
            extra={"tale_id": tale_id, "user": user, "action": action},
        )

    def generation_started(self, age_range: str, topic: str, model: str) -> None:
        self.logger.info(
            f"Tale generation started: ages {age_range}, topic {topic}",
            extra={"action": "generate", "model": model},
        )

    def generation_completed(self, title: str, duration: float) -> None:
        self.logger.info(
            f"Tale generation completed: {title!r}",
            extra={"action": "generate", "duration": round(duration, 2)},
        )

    def generation_failed(self, error: Exception, duration: float) -> None:
        self.logger.error(
            f"Tale generation failed: {error}",
            extra={
                "action": "generate",
                "duration": round(duration, 2),
                "error_type": type(error).__name__,
            },
            exc_info=True,
        )


# Global tale logger instance
tale_logger = TaleLogger()
