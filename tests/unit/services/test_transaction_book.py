# tests/unit/services/test_transaction_book.py
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from portfolio_accounting_engine.services.transaction_book import TransactionBook, WriteResult


@pytest.fixture
def mock_repository():
    repository = AsyncMock()
    repository.insert.return_value = WriteResult.success()
    repository.update.return_value = WriteResult.success()
    repository.delete.return_value = WriteResult.success()
    repository.replace_all.return_value = WriteResult.success()
    return repository


@pytest.fixture
def book(make_txn, mock_repository):
    return TransactionBook(
        transactions=[make_txn("T1", "HGLG11", "BUY", 10, "160", "2024-01-10", sequence=0)],
        repository=mock_repository,
    )


@pytest.mark.asyncio
async def test_add_assigns_the_next_sequence(book, make_txn, mock_repository):
    result = await book.add(make_txn("T2", "MXRF11", "BUY", 100, "10", "2024-01-10"))

    assert result.ok
    added = book.find("T2")
    assert added.sequence == 1
    mock_repository.insert.assert_awaited_once_with(added)


@pytest.mark.asyncio
async def test_failed_add_is_rolled_back(book, make_txn, mock_repository):
    mock_repository.insert.return_value = WriteResult.failure("permission denied")

    result = await book.add(make_txn("T2", "MXRF11", "BUY", 100, "10", "2024-01-10"))

    assert not result.ok
    assert result.reason == "permission denied"
    assert [t.transaction_id for t in book.transactions] == ["T1"]


@pytest.mark.asyncio
async def test_raising_repository_is_rolled_back(book, make_txn, mock_repository):
    mock_repository.update.side_effect = ConnectionError("offline")

    result = await book.update("T1", make_txn("ignored", "HGLG11", "BUY", 20, "150", "2024-01-10"))

    assert not result.ok
    assert "offline" in result.reason
    assert book.find("T1").quantity == Decimal("10")


@pytest.mark.asyncio
async def test_update_keeps_id_and_sequence(book, make_txn, mock_repository):
    result = await book.update("T1", make_txn("ignored", "HGLG11", "BUY", 20, "150", "2024-01-10"))

    assert result.ok
    updated = book.find("T1")
    assert updated.quantity == Decimal("20")
    assert updated.sequence == 0
    assert book.find("ignored") is None
    mock_repository.update.assert_awaited_once_with(updated)


@pytest.mark.asyncio
async def test_unknown_ids_fail_without_a_remote_call(book, make_txn, mock_repository):
    assert not (await book.delete("missing")).ok
    assert not (await book.update("missing", make_txn("x", "A", "BUY", 1, 1, "2024-01-10"))).ok
    mock_repository.delete.assert_not_awaited()
    mock_repository.update.assert_not_awaited()


@pytest.mark.asyncio
async def test_delete(book, mock_repository):
    mock_repository.delete.return_value = WriteResult.failure("conflict")
    assert not (await book.delete("T1")).ok
    assert book.find("T1") is not None

    mock_repository.delete.return_value = WriteResult.success()
    assert (await book.delete("T1")).ok
    assert book.transactions == []


@pytest.mark.asyncio
async def test_import_replaces_the_book(book, make_txn, mock_repository):
    imported = [make_txn("I1", "VISC11", "BUY", 3, "110", "2024-01-31", sequence=0)]

    result = await book.import_transactions(imported)

    assert result.ok
    assert [t.transaction_id for t in book.transactions] == ["I1"]
    mock_repository.replace_all.assert_awaited_once_with(imported)


@pytest.mark.asyncio
async def test_without_repository_changes_stay_local(make_txn):
    book = TransactionBook()

    result = await book.add(make_txn("T1", "HGLG11", "BUY", 1, "160", "2024-01-10"))

    assert result.ok
    assert book.find("T1").sequence == 0


def test_transactions_property_returns_a_copy(book):
    book.transactions.clear()
    assert len(book.transactions) == 1
