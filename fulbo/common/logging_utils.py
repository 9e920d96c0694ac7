"""Central logging utilities for Fulbo Data.

Goals:
- Single place to configure logging for the scrape CLI, collectors and the API.
- Provide structured JSON logging option (LOG_FORMAT=json) and colored human-readable output (default).
- Respect environment variables when no explicit value is passed:
    LOG_LEVEL=INFO|DEBUG|... (default: INFO)
    LOG_FORMAT=console|json (default: console)
    LOG_NO_COLOR=1 to disable color output even on console format.
    LOG_TIMEZONE=utc|local (default: local)
- Allow reusable per-module loggers via get_logger(name) without re-configuring root handlers.

Usage:
    from fulbo.common.logging_utils import configure_logging, get_logger
    configure_logging(service="scraper")  # idempotent
    logger = get_logger(__name__)
    logger.info("Hello")

Calling configure_logging() multiple times is safe – subsequent calls become no-ops unless
`force=True` is passed.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

_CONFIG_LOCK = threading.Lock()
_ALREADY_CONFIGURED = False

_RESERVED_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {
    "message",
    "asctime",
}


class ColorFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\x1b[38;5;245m",  # grey
        "INFO": "\x1b[38;5;39m",  # blue
        "WARNING": "\x1b[38;5;214m",  # orange
        "ERROR": "\x1b[38;5;196m",  # red
        "CRITICAL": "\x1b[48;5;196m\x1b[38;5;231m",  # white on red
    }
    RESET = "\x1b[0m"

    def __init__(self, tz_local: bool):
        super().__init__()
        self.tz_local = tz_local

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        ts = _timestamp(record, self.tz_local).strftime("%Y-%m-%d %H:%M:%S")
        line = f"{ts} | {record.levelname:<8} | {record.name} | {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        color = self.COLORS.get(record.levelname)
        return f"{color}{line}{self.RESET}" if color else line


class JsonFormatter(logging.Formatter):
    def __init__(self, tz_local: bool):
        super().__init__()
        self.tz_local = tz_local

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "ts": _timestamp(record, self.tz_local).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        # extra={"team": ..., "attempt": ...} ends up as record attributes
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key in payload or key.startswith("_"):
                continue
            try:
                json.dumps(value)
                payload[key] = value
            except (TypeError, ValueError):
                payload[key] = repr(value)
        return json.dumps(payload, ensure_ascii=False)


def _timestamp(record: logging.LogRecord, tz_local: bool) -> datetime:
    ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return ts.astimezone() if tz_local else ts


def configure_logging(
    service: str | None = None,
    *,
    level: str | None = None,
    fmt: str | None = None,
    log_file: str | None = None,
    force: bool = False,
) -> None:
    """Configure root logging once.

    Parameters
    ----------
    service: Optional logical service/app name (added as 'service' field in JSON mode)
    level: Log level name; falls back to LOG_LEVEL.
    fmt: ``console`` or ``json``; falls back to LOG_FORMAT.
    log_file: Optional path of an additional plain-text file handler.
    force: If True, reconfigure even if already configured.
    """
    global _ALREADY_CONFIGURED
    with _CONFIG_LOCK:
        if _ALREADY_CONFIGURED and not force:
            return

        log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
        log_format = (fmt or os.getenv("LOG_FORMAT", "console")).lower()
        tz_local = os.getenv("LOG_TIMEZONE", "local").lower() != "utc"
        no_color = os.getenv("LOG_NO_COLOR") == "1"

        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)

        plain = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        if log_format == "json":
            formatter: logging.Formatter = JsonFormatter(tz_local=tz_local)
        elif sys.stderr.isatty() and not no_color:
            formatter = ColorFormatter(tz_local=tz_local)
        else:
            formatter = plain

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        root.addHandler(handler)

        if log_file:
            Path(log_file).parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
            file_handler.setFormatter(JsonFormatter(tz_local) if log_format == "json" else plain)
            root.addHandler(file_handler)

        root.setLevel(getattr(logging, log_level, logging.INFO))
        # urllib3 is chatty at DEBUG about every pooled connection
        logging.getLogger("urllib3").setLevel(logging.WARNING)

        _ServiceLoggerAdapter.BASE_SERVICE = service
        _ALREADY_CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    base = logging.getLogger(name)
    if _ServiceLoggerAdapter.BASE_SERVICE:
        return _ServiceLoggerAdapter(base, {"service": _ServiceLoggerAdapter.BASE_SERVICE})  # type: ignore[return-value]
    return base


class _ServiceLoggerAdapter(logging.LoggerAdapter):
    # Set by configure_logging when a service name is given
    BASE_SERVICE: Optional[str] = None

    def process(self, msg: Any, kwargs: Dict[str, Any]):  # noqa: D401
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("service", self.extra["service"])
        kwargs["extra"] = extra
        return msg, kwargs


__all__ = [
    "configure_logging",
    "get_logger",
    "ColorFormatter",
    "JsonFormatter",
]
