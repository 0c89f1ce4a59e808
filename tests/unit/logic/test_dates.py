# tests/unit/logic/test_dates.py
from datetime import date, datetime

import pytest

from portfolio_accounting_engine.logic.dates import is_today, parse_local_date, safe_timestamp, to_iso, today_iso


def test_parse_local_date_anchors_at_local_noon():
    assert parse_local_date("2024-03-10") == datetime(2024, 3, 10, 12)


@pytest.mark.parametrize("raw", [None, "", "2024-13-01", "2024-02-30", "10/03/2024", "2024-03", "abcd-ef-gh"])
def test_parse_local_date_rejects_malformed_input(raw):
    assert parse_local_date(raw) is None


def test_safe_timestamp_matches_local_noon():
    assert safe_timestamp("2024-03-10") == int(datetime(2024, 3, 10, 12).timestamp() * 1000)
    assert safe_timestamp("not-a-date") is None


def test_is_today():
    reference = date(2024, 3, 10)
    assert is_today("2024-03-10", today=reference)
    assert not is_today("2024-03-11", today=reference)
    assert not is_today("garbage", today=reference)
    assert is_today(date.today().isoformat())


def test_reference_date_normalization():
    assert today_iso(date(2024, 1, 2)) == "2024-01-02"
    assert to_iso(datetime(2024, 1, 2, 18, 30)) == "2024-01-02"
    assert to_iso("2024-01-02") == "2024-01-02"
    assert to_iso(None) == date.today().isoformat()
