# src/portfolio_accounting_engine/logic/holdings.py
from collections import defaultdict
from decimal import Decimal
from typing import Iterable

from ..constants import ZERO
from ..core.enums.transaction_type import TransactionType
from ..core.models.transaction import Transaction
from .arithmetic import add, fixed, sub
from .dates import parse_local_date
from .tickers import normalize_ticker


def shares_held_on(ticker: str, as_of_date: str, transactions: Iterable[Transaction]) -> Decimal:
    """
    Returns how many shares of `ticker` were held at the end of `as_of_date`.

    `transactions` must already be sorted ascending by date: the walk stops at
    the first transaction dated after `as_of_date`. Trades on `as_of_date`
    itself count. Transactions with malformed dates are ignored, and an invalid
    ticker or date yields zero. The result is not floored.
    """
    target = normalize_ticker(ticker)
    cutoff = parse_local_date(as_of_date)
    if not target or cutoff is None:
        return ZERO

    held = ZERO
    for txn in transactions:
        trade_date = parse_local_date(txn.transaction_date)
        if trade_date is None:
            continue
        if trade_date > cutoff:
            break
        if normalize_ticker(txn.ticker) != target:
            continue
        if txn.transaction_type == TransactionType.BUY:
            held = add(held, fixed(txn.quantity))
        elif txn.transaction_type == TransactionType.SELL:
            held = sub(held, fixed(txn.quantity))
    return held


def holdings_as_of(as_of_date: str, transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Applies the same walk as `shares_held_on` to every ticker at once and
    returns the non-zero holdings on `as_of_date`, keyed by normalized ticker.
    """
    cutoff = parse_local_date(as_of_date)
    if cutoff is None:
        return {}

    held: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for txn in transactions:
        trade_date = parse_local_date(txn.transaction_date)
        if trade_date is None:
            continue
        if trade_date > cutoff:
            break
        key = normalize_ticker(txn.ticker)
        if not key:
            continue
        if txn.transaction_type == TransactionType.BUY:
            held[key] = add(held[key], fixed(txn.quantity))
        elif txn.transaction_type == TransactionType.SELL:
            held[key] = sub(held[key], fixed(txn.quantity))
    return {ticker: quantity for ticker, quantity in held.items() if quantity != ZERO}
