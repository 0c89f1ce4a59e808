# tests/unit/logic/test_parser.py
from decimal import Decimal

import pytest

from portfolio_accounting_engine.core.enums.transaction_type import AssetType, TransactionType
from portfolio_accounting_engine.logic.error_reporter import ErrorReporter
from portfolio_accounting_engine.logic.parser import TransactionParser


@pytest.fixture
def error_reporter():
    return ErrorReporter()


@pytest.fixture
def parser(error_reporter):
    return TransactionParser(error_reporter)


def test_parses_camel_case_payloads(parser, error_reporter):
    transactions = parser.parse_transactions([
        {"id": "T1", "ticker": "HGLG11", "type": "BUY", "quantity": "10", "price": "160.5", "date": "2024-01-10", "assetType": "FUND"},
        {"id": "T2", "ticker": "PETR4", "type": "SELL", "quantity": 5, "price": 38.2, "date": "2024-01-11", "assetType": "STOCK", "sequence": 3},
    ])

    assert [t.transaction_id for t in transactions] == ["T1", "T2"]
    assert transactions[0].price == Decimal("160.5")
    assert transactions[1].transaction_type == TransactionType.SELL
    assert transactions[1].sequence == 3
    assert not error_reporter.has_errors()


@pytest.mark.parametrize("payload", [
    {"id": "BAD", "ticker": "HGLG11", "type": "BUY", "quantity": "0", "price": "10", "date": "2024-01-10"},
    {"id": "BAD", "ticker": "HGLG11", "type": "TRANSFER", "quantity": "1", "price": "10", "date": "2024-01-10"},
    {"id": "BAD", "ticker": "HGLG11", "type": "BUY", "quantity": "1", "price": "-1", "date": "2024-01-10"},
    {"id": "BAD", "type": "BUY", "quantity": "1", "price": "10", "date": "2024-01-10"},
])
def test_invalid_payloads_are_reported_and_skipped(parser, error_reporter, payload):
    assert parser.parse_transactions([payload]) == []
    assert error_reporter.has_errors_for("BAD")
    assert error_reporter.get_errors()[0].error_reason.startswith("Validation error")


def test_store_record_defaults_to_fund(parser):
    txn = parser.from_store_record(
        {"id": 42, "ticker": "MXRF11", "type": "BUY", "quantity": 100, "price": "10.05", "date": "2024-01-10"}
    )

    assert txn.transaction_id == "42"
    assert txn.asset_type == AssetType.FUND
    assert txn.sequence is None


def test_store_record_accepts_legacy_asset_labels(parser):
    txn = parser.from_store_record(
        {"id": "1", "ticker": "ITSA4", "type": "BUY", "quantity": 1, "price": 10, "date": "2024-01-10", "asset_type": "ACAO"}
    )

    assert txn.asset_type == AssetType.STOCK


def test_parse_store_records_skips_broken_rows(parser, error_reporter):
    transactions = parser.parse_store_records([
        {"id": "1", "ticker": "ITSA4", "type": "BUY", "quantity": 1, "price": 10, "date": "2024-01-10"},
        {"id": "2", "ticker": "ITSA4", "type": "BUY", "price": 10, "date": "2024-01-10"},
    ])

    assert [t.transaction_id for t in transactions] == ["1"]
    assert error_reporter.has_errors_for("2")


def test_parse_dividend_events(parser):
    events = parser.parse_dividend_events([
        {"ticker": "HGLG11", "type": "RENDIMENTO", "dateCom": "2024-01-31", "paymentDate": "2024-02-14", "rate": "1.10"},
        {"ticker": "HGLG11", "type": "RENDIMENTO", "dateCom": "2024-02-29"},
    ])

    assert len(events) == 1
    assert events[0].rate == Decimal("1.10")
    assert events[0].date_com == "2024-01-31"
