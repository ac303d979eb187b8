from __future__ import annotations

import logging
import time
from logging.config import dictConfig
from typing import Iterable, Sequence

from .config import DEFAULT_LOG_LEVEL

_DEFAULT_EXTRA_KEYS = (
    "sequence",
    "step",
    "mode",
    "temperature",
    "battery_charge",
    "iterations",
)

_configured = False


class ContextualFormatter(logging.Formatter):
    """Formatter that appends selected ``extra`` fields as ``key=value`` pairs."""

    # Timestamps are rendered in UTC to match the trailing Z in the format
    converter = time.gmtime

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: str = "%",
        extra_keys: Iterable[str] | None = None,
    ) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt, style=style)
        self._extra_keys: Sequence[str] = tuple(extra_keys or _DEFAULT_EXTRA_KEYS)

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context_parts: list[str] = []
        for key in self._extra_keys:
            value = getattr(record, key, None)
            if value is None:
                continue
            if isinstance(value, float):
                value = f"{value:.3f}"
            context_parts.append(f"{key}={value}")
        if context_parts:
            return f"{message} | {' '.join(context_parts)}"
        return message


def configure_logging(level: str | int | None = None, *, force: bool = False) -> None:
    """Configure package-wide logging with contextual formatting."""
    global _configured
    if _configured and not force:
        return

    log_level = level if level is not None else DEFAULT_LOG_LEVEL

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "contextual": {
                    "()": ContextualFormatter,
                    "fmt": "%(asctime)sZ | %(levelname)s | %(name)s | %(message)s",
                    "datefmt": "%Y-%m-%dT%H:%M:%S",
                    "style": "%",
                    "extra_keys": list(_DEFAULT_EXTRA_KEYS),
                }
            },
            "handlers": {
                "default": {
                    "class": "logging.StreamHandler",
                    "level": log_level,
                    "formatter": "contextual",
                }
            },
            "loggers": {
                "thermocharge": {
                    "handlers": ["default"],
                    "level": log_level,
                    "propagate": False,
                }
            },
        }
    )

    _configured = True
