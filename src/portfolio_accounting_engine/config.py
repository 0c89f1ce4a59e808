# src/portfolio_accounting_engine/config.py
import os
from decimal import Decimal, InvalidOperation

from dotenv import load_dotenv

from .exceptions import MissingConfigurationError

# Load environment variables from a .env file for local development.
load_dotenv()


def _decimal_env(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise MissingConfigurationError(f"Environment variable {name} must be a decimal number, got '{raw}'.")


def _int_env(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise MissingConfigurationError(f"Environment variable {name} must be an integer, got '{raw}'.")


# Logging Configurations
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SERVICE_NAME = os.getenv("SERVICE_NAME", "portfolio-accounting-engine")
ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

# Position Engine Configurations
OVERSELL_POLICY = os.getenv("OVERSELL_POLICY", "REJECT").upper()
POSITION_EPSILON = _decimal_env("POSITION_EPSILON", "0.0001")

# Report Enrichment Configurations
DEFAULT_SEGMENT = os.getenv("DEFAULT_SEGMENT", "Geral")
SEGMENT_MAX_LENGTH = _int_env("SEGMENT_MAX_LENGTH", "20")
