# src/portfolio_accounting_engine/logic/tickers.py
from ..constants import FRACTIONAL_MAX_LENGTH, FRACTIONAL_SUFFIX


def normalize_ticker(raw: str | None) -> str:
    """
    Canonicalizes an asset symbol so whole-lot and fractional-lot trades of the
    same asset share one key.

    B3 fractional tickers append an `F` to the root code (PETR4F -> PETR4).
    Only short codes whose `F` follows a digit are stripped, which leaves
    longer codes such as HGLG11F untouched and keeps the function idempotent.
    """
    if not raw:
        return ""
    symbol = raw.strip().upper()
    if (
        symbol.endswith(FRACTIONAL_SUFFIX)
        and len(symbol) <= FRACTIONAL_MAX_LENGTH
        and len(symbol) >= 2
        and symbol[-2].isdigit()
    ):
        return symbol[:-1]
    return symbol

