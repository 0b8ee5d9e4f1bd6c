"""
Centralized logging configuration for the backend.

Provides structured JSON logging with correlation ID support,
redaction of LLM provider credentials, environment-aware formatting,
and an optional log file with time-based retention.

All backend modules should use:
    from backend.logging_config import get_logger
    logger = get_logger(__name__)
"""

import json
import logging
import os
import re
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path

ROOT_LOGGER_NAME = "drafting_app"

# ---------------------------------------------------------------------------
# Correlation ID context (one per review event / request)
# ---------------------------------------------------------------------------
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def get_correlation_id() -> str:
    """Return the current correlation ID, or empty string if none set."""
    return _correlation_id.get()


def set_correlation_id(cid: str) -> None:
    """Set the correlation ID for the current context."""
    _correlation_id.set(cid)


def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


# ---------------------------------------------------------------------------
# Environment detection
# ---------------------------------------------------------------------------
def _get_environment() -> str:
    """Detect the current environment from APP_ENV or ENV."""
    return os.environ.get("APP_ENV", os.environ.get("ENV", "development")).lower()


def is_production() -> bool:
    return _get_environment() == "production"


# ---------------------------------------------------------------------------
# Credential redaction
# ---------------------------------------------------------------------------
_SECRET_PATTERNS = [
    re.compile(r"(api[_-]?key\s*[:=]\s*)['\"]?[\w\-]{10,}['\"]?", re.IGNORECASE),
    re.compile(r"(x-api-key\s*[:=]\s*)['\"]?[\w\-]{10,}['\"]?", re.IGNORECASE),
    re.compile(r"(token\s*[:=]\s*)['\"]?[\w\-]{10,}['\"]?", re.IGNORECASE),
    re.compile(r"(Bearer\s+)[\w\-\.]{10,}", re.IGNORECASE),
    re.compile(r"(sk-(?:ant-)?)[\w\-]{10,}"),
]

# Provider keys the drafting assistant reads from .env
_SECRET_ENV_KEYS = {
    "ANTHROPIC_API_KEY", "OPENAI_API_KEY", "GEMINI_API_KEY",
    "GROK_API_KEY", "XAI_API_KEY",
}


def redact_secrets(message: str) -> str:
    """Remove credential values from a log message."""
    result = message
    for pattern in _SECRET_PATTERNS:
        result = pattern.sub(r"\1[REDACTED]", result)
    for key in _SECRET_ENV_KEYS:
        val = os.environ.get(key)
        if val and len(val) > 4 and val in result:
            result = result.replace(val, "[REDACTED]")
    return result


# ---------------------------------------------------------------------------
# Formatters
# ---------------------------------------------------------------------------
class StructuredJsonFormatter(logging.Formatter):
    """Formats log records as one JSON object per line.

    Every entry includes timestamp, level, service, context and correlationId.
    Structured payloads passed as ``extra={"data": {...}}`` are kept under "data".
    """

    LEVEL_MAP = {
        "DEBUG": "debug",
        "INFO": "info",
        "WARNING": "warn",
        "ERROR": "error",
        "CRITICAL": "fatal",
    }

    def __init__(self, service: str = ROOT_LOGGER_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": self.LEVEL_MAP.get(record.levelname, record.levelname.lower()),
            "service": self.service,
            "context": record.name,
            "correlationId": get_correlation_id() or None,
            "message": redact_secrets(record.getMessage()),
        }

        if record.exc_info and record.exc_info[1] is not None:
            entry["stackTrace"] = redact_secrets(self.formatException(record.exc_info))

        if isinstance(getattr(record, "data", None), dict):
            entry["data"] = record.data

        return json.dumps(entry, default=str, ensure_ascii=False)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for local development."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S"
        )
        cid = get_correlation_id()
        cid_str = f" [{cid[:8]}]" if cid else ""
        base = f"{record.levelname}:\t{ts}\t{record.name}{cid_str}\t{redact_secrets(record.getMessage())}"

        if record.exc_info and record.exc_info[1] is not None:
            base += "\n" + redact_secrets(self.formatException(record.exc_info))

        return base


# ---------------------------------------------------------------------------
# File handler with retention
# ---------------------------------------------------------------------------
LOG_DIR = Path(os.environ.get("LOG_DIR", "logs"))


class RetentionFileHandler(logging.FileHandler):
    """File handler writing to <log_dir>/drafting.log.

    The file is emptied once its last write is older than the retention window.
    """

    def __init__(self, log_dir: Path = LOG_DIR, retention_hours: int = 48):
        log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = log_dir / "drafting.log"
        self.retention_hours = retention_hours
        self._last_cleanup = 0.0
        self._cleanup_interval = 3600
        super().__init__(str(self.log_file), mode="a", encoding="utf-8")
        self._enforce_retention()

    def emit(self, record: logging.LogRecord) -> None:
        if time.time() - self._last_cleanup > self._cleanup_interval:
            self._enforce_retention()
        super().emit(record)

    def _enforce_retention(self) -> None:
        self._last_cleanup = time.time()
        cutoff = self._last_cleanup - self.retention_hours * 3600
        try:
            if self.log_file.exists() and self.log_file.stat().st_mtime < cutoff:
                self.log_file.write_text("")
        except OSError:
            pass


# ---------------------------------------------------------------------------
# Logger factory
# ---------------------------------------------------------------------------
_configured = False


def configure_logging(
    log_level: str = "INFO",
    service: str = ROOT_LOGGER_NAME,
    enable_file_logging: bool = False,
    retention_hours: int = 48,
) -> None:
    """Configure the centralized logging system.

    Call once at application startup. All subsequent get_logger() calls
    inherit this config.

    Args:
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service: Service name included in every structured log entry.
        enable_file_logging: Whether to also write JSON lines to disk.
        retention_hours: Retention window for the log file.
    """
    global _configured

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if is_production():
        formatter: logging.Formatter = StructuredJsonFormatter(service=service)
    else:
        formatter = DevelopmentFormatter()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root_logger.addHandler(console)

    if enable_file_logging:
        try:
            file_handler = RetentionFileHandler(retention_hours=retention_hours)
            file_handler.setFormatter(StructuredJsonFormatter(service=service))
            root_logger.addHandler(file_handler)
        except OSError:
            root_logger.warning("Could not initialize file logging")

    root_logger.propagate = False
    _configured = True


def configure_logging_from_config() -> None:
    """Configure logging from the [app] table of drafting.toml."""
    from backend.config import get_table

    app = get_table("app")
    configure_logging(
        log_level=app.get("log_level", "INFO"),
        service=app.get("service", ROOT_LOGGER_NAME),
        enable_file_logging=bool(app.get("enable_file_logging", False)),
        retention_hours=int(app.get("log_retention_hours", 48)),
    )


def get_logger(name: str = ROOT_LOGGER_NAME) -> logging.Logger:
    """Get a logger that routes through the centralized configuration.

    All loggers are children of the 'drafting_app' root logger so they
    inherit its handlers and formatting.
    """
    if not _configured:
        configure_logging()

    if name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)

    logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    logger.propagate = True
    return logger
