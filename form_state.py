# form_state.py - view-model, input events, reducer and render step for the tip form
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from currency import CurrencyFormatter
from engines import TipCalculatorEngine, TipOptions
from settings import FormVariant

logger = logging.getLogger(__name__)

# "1,200" or "12,345.67"; other comma use ("12,50") is not a number here
_GROUPED = re.compile(r"\d{1,3}(,\d{3})+(\.\d*)?")

# Which optional fields each draft of the form offers
VARIANT_FIELDS: Dict[FormVariant, Dict[str, bool]] = {
    FormVariant.BASIC:      {"tip": False, "round_up": False},
    FormVariant.CUSTOM_TIP: {"tip": True,  "round_up": False},
    FormVariant.ROUND_UP:   {"tip": True,  "round_up": True},
}

STRINGS = {
    "calculate_tip": "Calculate Tip",
    "bill_amount": "Bill Amount",
    "how_was_the_service": "How was the service?",
    "round_up_tip": "Round up tip?",
    "tip_amount": "Tip Amount: {}",
}


def variant_fields(variant: str) -> Dict[str, bool]:
    try:
        return VARIANT_FIELDS[FormVariant(variant)]
    except ValueError:
        raise ValueError(f"Unknown form variant {variant!r}") from None


def parse_number(text: Any, default: float = 0.0) -> float:
    """Free text -> non-negative finite float; anything else -> ``default``.

    Currency symbols and percent signs are stripped, so "$1,200" and "18%"
    parse. Commas are accepted only as thousands separators.
    """
    if text is None:
        return default
    s = str(text).replace("$", "").replace("%", "").strip()
    if s == "":
        return default
    if "," in s:
        if not _GROUPED.fullmatch(s):
            logger.debug("Unparsable number %r; using %s", text, default)
            return default
        s = s.replace(",", "")
    try:
        value = float(s)
    except ValueError:
        logger.debug("Unparsable number %r; using %s", text, default)
        return default
    if not math.isfinite(value) or value < 0:
        logger.debug("Out-of-range number %r; using %s", text, default)
        return default
    return value


@dataclass(frozen=True)
class TipForm:
    amount_input: str = ""
    tip_input: str = ""
    round_up: bool = False


# ---- events ----------------------------------------------------------------
@dataclass(frozen=True)
class AmountChanged:
    text: str


@dataclass(frozen=True)
class TipChanged:
    text: str


@dataclass(frozen=True)
class RoundUpToggled:
    on: bool


def reduce(form: TipForm, event: Any, variant: str = "round_up") -> TipForm:
    """New form for ``event``. Events for fields the variant lacks are ignored."""
    available = variant_fields(variant)
    if isinstance(event, AmountChanged):
        return replace(form, amount_input=event.text)
    if isinstance(event, TipChanged):
        return replace(form, tip_input=event.text) if available["tip"] else form
    if isinstance(event, RoundUpToggled):
        return replace(form, round_up=bool(event.on)) if available["round_up"] else form
    raise TypeError(f"Unknown form event: {event!r}")


@dataclass(frozen=True)
class TipView:
    title: str
    amount_label: str
    tip_label: Optional[str]       # None when the variant has no tip field
    round_up_label: Optional[str]  # None when the variant has no toggle
    tip_text: str


def render(
    form: TipForm,
    variant: str = "round_up",
    options: Optional[TipOptions] = None,
    formatter: Optional[CurrencyFormatter] = None,
) -> TipView:
    """Everything the page draws, as a pure function of the form."""
    available = variant_fields(variant)
    options = options or TipOptions()
    engine = TipCalculatorEngine(formatter, options)

    amount = parse_number(form.amount_input, 0.0)
    percent = parse_number(form.tip_input, options.tip_percent) if available["tip"] else None
    round_up = form.round_up if available["round_up"] else None

    return TipView(
        title=STRINGS["calculate_tip"],
        amount_label=STRINGS["bill_amount"],
        tip_label=STRINGS["how_was_the_service"] if available["tip"] else None,
        round_up_label=STRINGS["round_up_tip"] if available["round_up"] else None,
        tip_text=STRINGS["tip_amount"].format(engine.calculate(amount, percent, round_up)),
    )
