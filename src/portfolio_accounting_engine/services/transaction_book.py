# src/portfolio_accounting_engine/services/transaction_book.py
import logging
from typing import Optional, Protocol

from pydantic import BaseModel

from ..core.models.transaction import Transaction

logger = logging.getLogger(__name__)


class WriteResult(BaseModel):
    """Outcome of a remote write: ok, or the reason it failed."""
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "WriteResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, reason: str) -> "WriteResult":
        return cls(ok=False, reason=reason)


class TransactionRepository(Protocol):
    async def insert(self, transaction: Transaction) -> WriteResult: ...
    async def update(self, transaction: Transaction) -> WriteResult: ...
    async def delete(self, transaction_id: str) -> WriteResult: ...
    async def replace_all(self, transactions: list[Transaction]) -> WriteResult: ...


class TransactionBook:
    """
    Local copy of a user's transactions kept in sync with a remote store.

    Every change is applied locally first, then committed through the
    repository; when the commit fails the local change is reverted and the
    failing WriteResult is returned. Without a repository changes stay local.
    """
    def __init__(self, transactions: list[Transaction] | None = None, repository: TransactionRepository | None = None):
        self._transactions: list[Transaction] = list(transactions or [])
        self._repository = repository

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._transactions)

    def find(self, transaction_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.transaction_id == transaction_id), None)

    def _next_sequence(self) -> int:
        sequences = [t.sequence for t in self._transactions if t.sequence is not None]
        return max(sequences) + 1 if sequences else 0

    async def add(self, transaction: Transaction) -> WriteResult:
        if transaction.sequence is None:
            transaction = transaction.model_copy(update={"sequence": self._next_sequence()})
        snapshot = self.transactions
        self._transactions.append(transaction)
        return await self._commit(
            lambda repo: repo.insert(transaction), snapshot, f"add {transaction.transaction_id}"
        )

    async def update(self, transaction_id: str, updated: Transaction) -> WriteResult:
        original = self.find(transaction_id)
        if original is None:
            return WriteResult.failure(f"Transaction {transaction_id} not found.")

        replacement = updated.model_copy(update={
            "transaction_id": transaction_id,
            "sequence": updated.sequence if updated.sequence is not None else original.sequence,
        })
        snapshot = self.transactions
        self._transactions = [replacement if t.transaction_id == transaction_id else t for t in self._transactions]
        return await self._commit(
            lambda repo: repo.update(replacement), snapshot, f"update {transaction_id}"
        )

    async def delete(self, transaction_id: str) -> WriteResult:
        if self.find(transaction_id) is None:
            return WriteResult.failure(f"Transaction {transaction_id} not found.")

        snapshot = self.transactions
        self._transactions = [t for t in self._transactions if t.transaction_id != transaction_id]
        return await self._commit(
            lambda repo: repo.delete(transaction_id), snapshot, f"delete {transaction_id}"
        )

    async def import_transactions(self, transactions: list[Transaction]) -> WriteResult:
        """Replaces the whole book, e.g. when restoring a backup or a statement import."""
        snapshot = self.transactions
        self._transactions = list(transactions)
        return await self._commit(
            lambda repo: repo.replace_all(list(transactions)), snapshot, f"import of {len(transactions)} transactions"
        )

    async def _commit(self, write, snapshot: list[Transaction], description: str) -> WriteResult:
        if self._repository is None:
            return WriteResult.success()

        try:
            result: WriteResult = await write(self._repository)
        except Exception as e:
            logger.error(f"Remote {description} failed: {e}", exc_info=True)
            result = WriteResult.failure(str(e))

        if not result.ok:
            logger.warning(f"Rolling back local {description}: {result.reason}")
            self._transactions = snapshot
        return result
