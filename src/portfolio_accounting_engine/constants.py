# src/portfolio_accounting_engine/constants.py
from decimal import Decimal

# --- Arithmetic ---
ARITHMETIC_PLACES = Decimal("0.0001")
REPORTING_PLACES = Decimal("0.01")
ZERO = Decimal(0)

# --- Tickers ---
FRACTIONAL_SUFFIX = "F"
FRACTIONAL_MAX_LENGTH = 6

# --- Dates ---
DATE_SEPARATOR = "-"
LOCAL_ANCHOR_HOUR = 12

# --- Report enrichment ---
SEGMENT_PREFIX = "Seg: "
SEGMENT_ELLIPSIS = "..."

# --- Statement import (B3) ---
FUND_TICKER_ENDINGS = ("11", "11B", "33", "34")
INCOME_MOVEMENT_KEYWORDS = ("dividendo", "juros", "rendimento", "jcp")
