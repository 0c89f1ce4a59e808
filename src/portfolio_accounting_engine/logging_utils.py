# src/portfolio_accounting_engine/logging_utils.py
import logging
import sys
import uuid
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from . import config

# Holds the correlation ID of the portfolio recalculation currently being logged.
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="<not-set>")


class CorrelationIdFilter(logging.Filter):
    """
    A logging filter that injects the current correlation ID and the
    service identity into every log record.
    """
    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        record.service = config.SERVICE_NAME
        record.environment = config.ENVIRONMENT
        return True


def setup_logging(level: str | None = None):
    """
    Configures the root logger for structured JSON logging.
    All module loggers of the engine inherit this configuration.
    """
    root_logger = logging.getLogger()

    # Clear any existing handlers to prevent duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    root_logger.setLevel(getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    formatter = JsonFormatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s %(service)s %(environment)s %(correlation_id)s",
        rename_fields={
            "asctime": "timestamp",
            "levelname": "level",
            "name": "logger"
        }
    )
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())
    root_logger.addHandler(handler)


def generate_correlation_id(prefix: str) -> str:
    """
    Generates a new correlation ID with a caller-specific prefix.
    Args:
        prefix: A short code for the caller (e.g., 'PRT' for a portfolio refresh).
    Returns:
        A formatted correlation ID string.
    """
    return f"{prefix}:{uuid.uuid4()}"
