# tests/unit/logic/test_arithmetic.py
from decimal import Decimal

import pytest

from portfolio_accounting_engine.logic.arithmetic import add, div, fixed, mul, round2, sub, to_decimal


def test_add_avoids_binary_float_drift():
    assert add(0.1, 0.2) == Decimal("0.3000")


def test_results_are_fixed_to_four_places():
    assert mul("33.3333", "0.0521") == Decimal("1.7367")
    assert sub("10", "3.33335") == Decimal("6.6667")
    assert add("1", "2").as_tuple().exponent == -4


def test_div_rounds_to_four_places():
    assert div(10, 3) == Decimal("3.3333")
    assert div(1700, 150) == Decimal("11.3333")


@pytest.mark.parametrize("denominator", [0, "0", Decimal("0.0000"), 0.0])
def test_div_by_zero_returns_zero(denominator):
    assert div(100, denominator) == Decimal("0")


def test_round2_rounds_half_up():
    assert round2("2.675") == Decimal("2.68")
    assert round2("2.665") == Decimal("2.67")
    assert round2("-1.005") == Decimal("-1.01")


def test_round2_uses_the_shortest_repr_of_floats():
    # 2.675 is stored as 2.67499999... in binary.
    assert round2(2.675) == Decimal("2.68")


@pytest.mark.parametrize("raw", [None, "", "abc", "NaN", "Infinity"])
def test_to_decimal_treats_unusable_values_as_zero(raw):
    assert to_decimal(raw) == Decimal("0")


def test_to_decimal_keeps_decimals_untouched():
    value = Decimal("1.23456789")
    assert to_decimal(value) is value


def test_fixed_puts_raw_inputs_on_the_four_place_grid():
    assert fixed("10.12345") == Decimal("10.1235")
    assert fixed(10.12344) == Decimal("10.1234")
    assert fixed(None) == Decimal("0")
