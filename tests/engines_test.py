from decimal import Decimal

import pytest

import engines
from currency import CurrencyFormatter, formatter_for
from engines import TipCalculatorEngine, TipOptions, compute_tip, tip_amount

US = CurrencyFormatter()

BILLS = [0, 0.01, 9.99, 28, 57.5, 100, 1234.56]
PERCENTS = [0, 5, 12.5, 15, 18.3, 33.333]


def test_zero_bill_is_zero_tip():
    assert compute_tip(0, 20, False, formatter=US) == "$0.00"
    assert compute_tip(0, 20, True, formatter=US) == "$0.00"


def test_zero_percent_is_zero_tip():
    assert compute_tip(250, 0, True, formatter=US) == "$0.00"


def test_fifteen_percent_of_hundred():
    assert compute_tip(100, 15, False, formatter=US) == "$15.00"


def test_round_up_keeps_exact_tip():
    # 0.15 * 100 is 15.000000000000002 in binary floating point
    assert tip_amount(100, 15, True) == Decimal(15)
    assert compute_tip(100, 15, True, formatter=US) == "$15.00"


def test_round_up_fractional_tip():
    assert compute_tip(100, 18.3, True, formatter=US) == "$19.00"
    assert compute_tip(28, 15, True, formatter=US) == "$5.00"  # 4.20 -> 5, never 4


def test_default_percent_and_round_up():
    assert compute_tip(57.5, formatter=US) == compute_tip(57.5, 15.0, False, formatter=US)
    assert compute_tip(57.5, formatter=US) == "$8.62"


@pytest.mark.parametrize("bill", BILLS)
@pytest.mark.parametrize("pct", PERCENTS)
def test_round_up_never_lowers_tip(bill, pct):
    raw = tip_amount(bill, pct, False)
    rounded = tip_amount(bill, pct, True)
    assert raw >= 0
    assert raw <= rounded < raw + 1


def test_formatting_is_repeatable():
    assert compute_tip(42.42, 17, formatter=US) == compute_tip(42.42, 17, formatter=US)


def test_non_finite_input_raises():
    with pytest.raises(ValueError):
        tip_amount(float("inf"), 15)
    with pytest.raises(ValueError):
        compute_tip(100, float("nan"), formatter=US)


def test_default_formatter_comes_from_active_locale(monkeypatch):
    monkeypatch.setattr(engines, "active_formatter", lambda: formatter_for("de_DE"))
    assert compute_tip(100) == "15,00 €"


def test_engine_applies_options_when_args_omitted():
    eng = TipCalculatorEngine(US, TipOptions(tip_percent=20, round_up=True))
    assert eng.calculate(42) == "$9.00"
    assert eng.calculate(42, 10, False) == "$4.20"
    assert eng.amount(42, round_up=False) == Decimal("8.40")


def test_options_defaults():
    opts = TipOptions()
    assert opts.tip_percent == 15.0
    assert opts.round_up is False
