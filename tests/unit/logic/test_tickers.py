# tests/unit/logic/test_tickers.py
import pytest

from portfolio_accounting_engine.logic.tickers import normalize_ticker


@pytest.mark.parametrize("raw, expected", [
    ("PETR4", "PETR4"),
    ("petr4f", "PETR4"),
    (" ABCD3F ", "ABCD3"),
    ("HGLG11", "HGLG11"),
    ("HGLG11F", "HGLG11F"),
    ("ABCF", "ABCF"),
    ("F", "F"),
    ("", ""),
    (None, ""),
])
def test_normalize_ticker(raw, expected):
    assert normalize_ticker(raw) == expected


@pytest.mark.parametrize("raw", ["PETR4F", "ABCD3F", "HGLG11F", "MXRF11", "ITSA4", "x"])
def test_normalize_ticker_is_idempotent(raw):
    once = normalize_ticker(raw)
    assert normalize_ticker(once) == once
