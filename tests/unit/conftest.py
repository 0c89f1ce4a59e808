# tests/unit/conftest.py
from decimal import Decimal

import pytest

from portfolio_accounting_engine.core.models.dividend import DividendEvent
from portfolio_accounting_engine.core.models.transaction import Transaction


@pytest.fixture
def make_txn():
    """Factory for transactions; quantity and price accept strings to keep Decimals exact."""
    def _make(txn_id, ticker, txn_type, quantity, price, trade_date, sequence=None, asset_type="FUND"):
        return Transaction(
            transaction_id=txn_id,
            ticker=ticker,
            transaction_type=txn_type,
            quantity=Decimal(str(quantity)),
            price=Decimal(str(price)),
            transaction_date=trade_date,
            asset_type=asset_type,
            sequence=sequence,
        )
    return _make


@pytest.fixture
def make_event():
    def _make(ticker, date_com, payment_date, rate, income_type="DIVIDENDO", event_id=None):
        return DividendEvent(
            event_id=event_id,
            ticker=ticker,
            income_type=income_type,
            date_com=date_com,
            payment_date=payment_date,
            rate=Decimal(str(rate)),
        )
    return _make
