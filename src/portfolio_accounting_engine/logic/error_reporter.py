# src/portfolio_accounting_engine/logic/error_reporter.py
from collections import Counter

from ..core.models.response import ErroredTransaction
from ..monitoring import REJECTED_TRANSACTIONS_TOTAL


class ErrorReporter:
    """
    Collects the transactions excluded from processing, the distinct reasons
    each one was excluded for, and the category of every rejection.
    """
    def __init__(self):
        self._reasons: dict[str, list[str]] = {}
        self._categories: Counter[str] = Counter()

    def add_error(self, transaction_id: str, error_reason: str, category: str = "invalid"):
        REJECTED_TRANSACTIONS_TOTAL.labels(reason=category).inc()
        self._categories[category] += 1

        reasons = self._reasons.setdefault(transaction_id, [])
        if error_reason not in reasons:
            reasons.append(error_reason)

    def get_errors(self) -> list[ErroredTransaction]:
        return [
            ErroredTransaction(transaction_id=transaction_id, error_reason="; ".join(reasons))
            for transaction_id, reasons in self._reasons.items()
        ]

    def counts_by_category(self) -> dict[str, int]:
        return dict(self._categories)

    def has_errors(self) -> bool:
        return bool(self._reasons)

    def has_errors_for(self, transaction_id: str) -> bool:
        return transaction_id in self._reasons

    def clear(self):
        self._reasons = {}
        self._categories = Counter()
