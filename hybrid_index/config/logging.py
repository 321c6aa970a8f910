"""Structured logging setup. Read-only config; no business logic."""

import logging
import sys

from hybrid_index.config.settings import get_settings

# Attributes every LogRecord has; anything else arrived through extra={...}.
_RESERVED = set(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}

_QUIET_LOGGERS = ("urllib3", "httpx", "opensearch", "botocore", "google_genai", "sentence_transformers")


class ContextFormatter(logging.Formatter):
    """Appends extra={...} fields to the line as key=value pairs, in insertion order."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        if not context:
            return line
        return line + " | " + " ".join(f"{k}={v}" for k, v in context.items())


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once at startup. level defaults to settings.log_level."""
    level_name = (level or get_settings().log_level).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(resolved)
    handler.setFormatter(
        ContextFormatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolved)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name."""
    return logging.getLogger(name)
