# src/portfolio_accounting_engine/logic/sorter.py
from datetime import datetime

from ..core.models.transaction import Transaction
from .dates import parse_local_date


class TransactionSorter:
    """
    Responsible for putting transactions in processing order.
    """
    def sort_transactions(self, transactions: list[Transaction]) -> list[Transaction]:
        """
        Returns a new list in processing order.
        Sorting Rules:
        1. Primary sort: trade date ascending.
        2. Secondary sort: transactions carrying a sequence number, by that number.
        3. Tertiary sort: input order.
        Transactions whose date does not parse sort first; callers filter them out.
        """
        indexed = list(enumerate(transactions))
        indexed.sort(key=lambda item: self._sort_key(item[0], item[1]))
        return [txn for _, txn in indexed]

    @staticmethod
    def _sort_key(index: int, txn: Transaction) -> tuple:
        trade_date = parse_local_date(txn.transaction_date) or datetime.min
        has_no_sequence = txn.sequence is None
        return (trade_date, has_no_sequence, txn.sequence or 0, index)
