# src/portfolio_accounting_engine/logic/income_calculator.py
import logging
from datetime import date
from decimal import Decimal

from ..constants import ZERO
from ..core.models.dividend import DividendEvent, DividendReceipt
from ..core.models.response import ReceiptsResult
from ..core.models.transaction import Transaction
from .arithmetic import add, mul
from .dates import parse_local_date, to_iso
from .holdings import shares_held_on
from .sorter import TransactionSorter
from .tickers import normalize_ticker

logger = logging.getLogger(__name__)


class IncomeCalculator:
    """
    A stateless calculator that resolves declared income events into the
    amounts this portfolio is entitled to, based on the shares held on each
    event's record date.
    """
    def __init__(self, sorter: TransactionSorter | None = None):
        self._sorter = sorter or TransactionSorter()

    def compute_receipts(
        self,
        events: list[DividendEvent],
        transactions: list[Transaction],
        today: date | str | None = None
    ) -> ReceiptsResult:
        """
        Events without entitlement (nothing held on the record date, or a
        non-positive rate) produce no receipt. Receipts whose payment date is
        after `today`, or not a valid date, are returned but not counted as paid.
        """
        reference = parse_local_date(to_iso(today))
        timeline = self._sorter.sort_transactions(list(transactions))

        receipts: list[DividendReceipt] = []
        paid_by_ticker: dict[str, Decimal] = {}
        total_paid = ZERO

        for event in events:
            ticker = normalize_ticker(event.ticker)
            if not ticker:
                continue

            quantity_owned = max(ZERO, shares_held_on(ticker, event.date_com, timeline))
            total_received = mul(quantity_owned, event.rate)
            if total_received <= ZERO:
                continue

            receipt = DividendReceipt.model_validate({
                **event.model_dump(),
                "ticker": ticker,
                "quantity_owned": quantity_owned,
                "total_received": total_received,
            })
            receipts.append(receipt)

            paid_on = parse_local_date(receipt.payment_date)
            if paid_on is not None and reference is not None and paid_on <= reference:
                paid_by_ticker[ticker] = add(paid_by_ticker.get(ticker, ZERO), total_received)
                total_paid = add(total_paid, total_received)

        logger.debug(f"Resolved {len(receipts)} receipts from {len(events)} income events; paid to date {total_paid}.")
        return ReceiptsResult(receipts=receipts, paid_by_ticker=paid_by_ticker, total_paid=total_paid)


def compute_receipts(
    events: list[DividendEvent],
    transactions: list[Transaction],
    today: date | str | None = None
) -> ReceiptsResult:
    return IncomeCalculator().compute_receipts(events, transactions, today)
