"""JSON logging for the vehicle service.

Every record is written as one JSON object per line and carries the
correlation ID of the HTTP request it was emitted under, so all lines
belonging to one request can be grepped together.
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, List, Optional


_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)

# Attributes present on every LogRecord; anything else came in through `extra`
_STANDARD_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "correlation_id"}


class CorrelationIdFilter(logging.Filter):
    """Stamp records with the correlation ID bound to the current request."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get()
        return True


class JsonLineFormatter(logging.Formatter):
    """Render a record as a single JSON line."""

    def __init__(self, service_name: str):
        super().__init__()
        self._service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": self._service_name,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id:
            entry["correlation_id"] = correlation_id

        for key, value in record.__dict__.items():
            if key not in _STANDARD_RECORD_ATTRS:
                entry.setdefault(key, value)

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class LoggingConfig:
    """Root logger setup for the service.

    Args:
        log_level: Name of the root level (DEBUG, INFO, ...)
        service_name: Value of the "service" key on every line
        log_file: Path of a rotating log file; no file logging when None
        max_bytes: Size at which the log file is rotated
        backup_count: Number of rotated files kept
        enable_console: Whether to also log to stdout
    """

    def __init__(self,
                 log_level: str = "INFO",
                 service_name: str = "vehicle-service",
                 log_file: Optional[str] = None,
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 5,
                 enable_console: bool = True):
        self.log_level = logging.getLevelName(log_level.upper())
        if not isinstance(self.log_level, int):
            raise ValueError(f"Unknown log level: {log_level}")

        self.service_name = service_name
        self.log_file = Path(log_file) if log_file else None
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self.enable_console = enable_console

    def setup_logging(self) -> None:
        """Replace the root handlers with JSON handlers."""
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        root_logger.setLevel(self.log_level)

        formatter = JsonLineFormatter(self.service_name)
        for handler in self._build_handlers():
            handler.addFilter(CorrelationIdFilter())
            handler.setFormatter(formatter)
            root_logger.addHandler(handler)

        # Request lines already come from the request logging middleware
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    def _build_handlers(self) -> List[logging.Handler]:
        handlers: List[logging.Handler] = []

        if self.enable_console:
            handlers.append(logging.StreamHandler(sys.stdout))

        if self.log_file is not None:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(RotatingFileHandler(
                self.log_file,
                maxBytes=self.max_bytes,
                backupCount=self.backup_count,
                encoding="utf-8"
            ))

        return handlers


def new_correlation_id() -> str:
    return uuid.uuid4().hex


def bind_correlation_id(correlation_id: str) -> Token:
    """Bind a correlation ID to the current context; pass the token to reset it."""
    return _correlation_id.set(correlation_id)


def reset_correlation_id(token: Token) -> None:
    _correlation_id.reset(token)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_database_operation(logger: logging.Logger, operation: str, table: str, **extra) -> None:
    """Log a statement issued against a table, at DEBUG."""
    logger.debug(
        f"Database {operation}: {table}",
        extra={"db_operation": operation, "db_table": table, **extra}
    )


def log_business_rule_violation(logger: logging.Logger, rule: str, details: str, **extra) -> None:
    """Log a rejected request that broke a business rule, at WARNING."""
    logger.warning(
        f"Business rule violation: {rule} - {details}",
        extra={"business_rule": rule, "violation_details": details, **extra}
    )
