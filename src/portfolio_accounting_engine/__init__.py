# src/portfolio_accounting_engine/__init__.py
"""
Portfolio accounting engine for Brazilian real-estate funds and stocks.

Turns BUY/SELL transactions and declared income events into positions,
average cost, realized gains, dividend receipts and portfolio totals.
"""
from .core.enums.oversell_policy import OversellPolicy
from .core.enums.transaction_type import AssetType, TransactionType
from .core.models.dividend import DividendEvent, DividendReceipt
from .core.models.position import AssetFundamentals, AssetMetadata, AssetPosition, PositionState, Quote
from .core.models.response import (
    ErroredTransaction,
    PortfolioReport,
    PortfolioTotals,
    PositionEngineResult,
    ReceiptsResult,
)
from .core.models.transaction import Transaction
from .logic.arithmetic import add, div, mul, round2, sub, to_decimal
from .logic.dates import is_today, parse_local_date, safe_timestamp, today_iso
from .logic.holdings import holdings_as_of, shares_held_on
from .logic.income_calculator import IncomeCalculator, compute_receipts
from .logic.position_engine import PositionEngine, compute_positions
from .logic.tickers import normalize_ticker
from .services.portfolio_assembler import PortfolioAssembler, assemble

__all__ = [
    "AssetFundamentals",
    "AssetMetadata",
    "AssetPosition",
    "AssetType",
    "DividendEvent",
    "DividendReceipt",
    "ErroredTransaction",
    "IncomeCalculator",
    "OversellPolicy",
    "PortfolioAssembler",
    "PortfolioReport",
    "PortfolioTotals",
    "PositionEngine",
    "PositionEngineResult",
    "PositionState",
    "Quote",
    "ReceiptsResult",
    "Transaction",
    "TransactionType",
    "add",
    "assemble",
    "compute_positions",
    "compute_receipts",
    "div",
    "holdings_as_of",
    "is_today",
    "mul",
    "normalize_ticker",
    "parse_local_date",
    "round2",
    "safe_timestamp",
    "shares_held_on",
    "sub",
    "to_decimal",
    "today_iso",
]
