# engines.py - tip formula (pure) + the calculator engine the form calls
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_CEILING
from typing import Any, Optional

from currency import CurrencyFormatter, active_formatter, to_decimal
from settings import DEFAULT_TIP_PERCENT


@dataclass(frozen=True)
class TipOptions:
    """Named defaults for a calculation.

    tip_percent: used when the caller supplies no percent (15.0)
    round_up:    round the tip up to a whole currency unit (False)
    """
    tip_percent: float = DEFAULT_TIP_PERCENT
    round_up: bool = False


def tip_amount(bill_amount: Any, tip_percent: Any = DEFAULT_TIP_PERCENT, round_up: bool = False) -> Decimal:
    """tip_percent / 100 * bill_amount, ceiling'd when ``round_up``.

    Decimal arithmetic keeps 15% of 100 at exactly 15 so rounding up
    does not turn it into 16.
    """
    tip = to_decimal(tip_percent) / 100 * to_decimal(bill_amount)
    if round_up:
        tip = tip.to_integral_value(rounding=ROUND_CEILING)
    return tip


def compute_tip(
    bill_amount: Any,
    tip_percent: Any = DEFAULT_TIP_PERCENT,
    round_up: bool = False,
    *,
    formatter: Optional[CurrencyFormatter] = None,
) -> str:
    """Tip for the bill as a currency string, e.g. ``"$4.20"``."""
    fmt = formatter or active_formatter()
    return fmt.format(tip_amount(bill_amount, tip_percent, round_up))


class TipCalculatorEngine:
    """
    Pure function of inputs -> formatted tip.
    Arguments left as None take their value from ``options``:
      bill_amount: float   # already sanitized, >= 0
      tip_percent: float   # default options.tip_percent
      round_up: bool       # default options.round_up
    """
    def __init__(self, formatter: Optional[CurrencyFormatter] = None, options: Optional[TipOptions] = None):
        self.formatter = formatter or active_formatter()
        self.options = options or TipOptions()

    def amount(self, bill_amount: Any, tip_percent: Any = None, round_up: Optional[bool] = None) -> Decimal:
        pct = self.options.tip_percent if tip_percent is None else tip_percent
        ru = self.options.round_up if round_up is None else round_up
        return tip_amount(bill_amount, pct, ru)

    def calculate(self, bill_amount: Any, tip_percent: Any = None, round_up: Optional[bool] = None) -> str:
        return self.formatter.format(self.amount(bill_amount, tip_percent, round_up))
