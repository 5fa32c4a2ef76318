"""
JSON logging for the gateway.
One JSON object per line; only whitelisted `extra=` fields are emitted.
"""
import json
import logging
from logging.handlers import RotatingFileHandler
from datetime import datetime, timezone

from app.core.config import settings

# httpx logs every request line at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class JsonFormatter(logging.Formatter):
    """Renders ts/level/logger/message plus known extra fields and exception text."""

    EXTRA_FIELDS = frozenset({
        "request_id", "path", "method", "status_code", "latency_ms",
        "model", "provider", "error_code", "error", "http_status",
        "finish_reason", "block_reason", "has_image", "aspect_ratio",
    })

    def format(self, record: logging.LogRecord) -> str:
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key in self.EXTRA_FIELDS and value is not None
        }
        payload = {
            "ts": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **extra,
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def _build_handlers(formatter: logging.Formatter) -> list[logging.Handler]:
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    handlers: list[logging.Handler] = [stream]
    if settings.log_file:
        rotating = RotatingFileHandler(
            settings.log_file,
            maxBytes=settings.log_max_bytes,
            backupCount=settings.log_backup_count,
        )
        rotating.setFormatter(formatter)
        handlers.append(rotating)
    return handlers


def configure_logging() -> None:
    """Replace root handlers with JSON ones; level from settings."""
    root = logging.getLogger()
    root.setLevel(settings.log_level)
    root.handlers = _build_handlers(JsonFormatter())
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
