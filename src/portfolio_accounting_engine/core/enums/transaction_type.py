# src/portfolio_accounting_engine/core/enums/transaction_type.py
from enum import Enum


class TransactionType(str, Enum):
    """Trade direction of a transaction."""
    BUY = "BUY"
    SELL = "SELL"


class AssetType(str, Enum):
    """Informational asset category; never affects arithmetic."""
    STOCK = "STOCK"
    FUND = "FUND"

    @classmethod
    def _missing_(cls, value):
        # Cloud rows written by older clients use the Portuguese labels.
        if isinstance(value, str):
            legacy = {"ACAO": cls.STOCK, "AÇÃO": cls.STOCK, "FII": cls.FUND}
            return legacy.get(value.strip().upper())
        return None
