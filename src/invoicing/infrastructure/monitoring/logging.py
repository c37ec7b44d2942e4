"""
Structured Logging for the Invoicing System

JSON structured logs with correlation IDs, tracing context and
invoice-specific log fields.
"""

import json
import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from decimal import Decimal
from typing import Any

from opentelemetry import trace

from invoicing.application.config import LoggingConfig

# Context variables for correlation tracking
correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

INVOICE_FIELDS = ("invoice_id", "customer_id", "line_item_id", "payment_id", "error_code")

STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "message",
        "correlation_id",
        "trace_id",
        "span_id",
        *INVOICE_FIELDS,
    }
)


class InvoicingLogRecord(logging.LogRecord):
    """Log record carrying correlation and tracing context."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)

        self.correlation_id = correlation_id_var.get()

        span = trace.get_current_span()
        if span.is_recording():
            span_context = span.get_span_context()
            self.trace_id = format(span_context.trace_id, "032x") if span_context.trace_id else None
            self.span_id = format(span_context.span_id, "016x") if span_context.span_id else None
        else:
            self.trace_id = None
            self.span_id = None


class InvoicingJSONFormatter(logging.Formatter):
    """JSON formatter for structured invoicing logs."""

    def __init__(self, include_extra: bool = True, sort_keys: bool = True) -> None:
        super().__init__()
        self.include_extra = include_extra
        self.sort_keys = sort_keys

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr in ("correlation_id", "trace_id", "span_id"):
            value = getattr(record, attr, None)
            if value:
                log_entry[attr] = value

        invoice_fields = {
            name: getattr(record, name) for name in INVOICE_FIELDS if getattr(record, name, None)
        }
        if invoice_fields:
            log_entry["invoice"] = invoice_fields

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        if self.include_extra:
            extra = {
                key: self._serialize_value(value)
                for key, value in record.__dict__.items()
                if key not in STANDARD_FIELDS and not key.startswith("_")
            }
            if extra:
                log_entry["extra"] = extra

        return json.dumps(log_entry, sort_keys=self.sort_keys, default=self._serialize_value)

    def _serialize_value(self, value: Any) -> Any:
        """Serialize complex values for JSON output."""
        if isinstance(value, Decimal):
            # Keep money exact in logs
            return str(value)
        elif isinstance(value, (set, frozenset)):
            return sorted(value)
        elif isinstance(value, (str, int, float, bool)) or value is None:
            return value
        return str(value)


# Correlation ID management
def generate_correlation_id() -> str:
    """Generate a new correlation ID."""
    return str(uuid.uuid4())


def get_correlation_id() -> str | None:
    """Get current correlation ID."""
    return correlation_id_var.get()


@contextmanager
def correlation_context(correlation_id: str | None = None) -> Generator[str, None, None]:
    """Context manager for correlation ID scope."""
    if correlation_id is None:
        correlation_id = generate_correlation_id()

    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


def setup_structured_logging(
    level: str = "INFO",
    format_type: str = "json",
    log_file: str | None = None,
    text_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """
    Setup logging for the invoicing system.

    Args:
        level: Logging level
        format_type: Formatter type ('json' or 'text')
        log_file: Optional log file path
        text_format: Format string used when format_type is 'text'
    """
    # Clear any existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter: logging.Formatter
    if format_type == "json":
        formatter = InvoicingJSONFormatter()
    else:
        formatter = logging.Formatter(text_format)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    root_logger.setLevel(getattr(logging, level.upper()))

    logging.setLogRecordFactory(InvoicingLogRecord)

    logging.getLogger(__name__).info("Structured logging configured successfully")


def configure_logging(config: LoggingConfig) -> None:
    """Setup logging from a LoggingConfig."""
    setup_structured_logging(
        level=config.level,
        format_type=config.format_type,
        log_file=config.file,
        text_format=config.format,
    )
