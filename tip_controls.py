# tip_controls.py - form widgets; each change becomes an event for the reducer
from __future__ import annotations

import streamlit as st

from form_state import AmountChanged, RoundUpToggled, TipChanged, TipView
from ui_helpers import dispatch

# Widget keys; the widgets own these, the view-model lives under ui_helpers.FORM_KEY
AMOUNT_KEY = "amount_input"
TIP_KEY = "tip_input"
ROUND_UP_KEY = "round_up_toggle"


def _on_text(event_type, key: str, variant: str) -> None:
    dispatch(event_type(st.session_state.get(key, "")), variant)


def _on_toggle(variant: str) -> None:
    dispatch(RoundUpToggled(bool(st.session_state.get(ROUND_UP_KEY, False))), variant)


def render_amount_field(view: TipView, variant: str) -> None:
    st.text_input(
        view.amount_label,
        key=AMOUNT_KEY,
        on_change=_on_text,
        args=(AmountChanged, AMOUNT_KEY, variant),
    )


def render_tip_field(view: TipView, variant: str) -> None:
    """Tip percentage input; absent in the basic variant."""
    if view.tip_label is None:
        return
    st.text_input(
        view.tip_label,
        key=TIP_KEY,
        on_change=_on_text,
        args=(TipChanged, TIP_KEY, variant),
    )


def render_round_up(view: TipView, variant: str) -> None:
    if view.round_up_label is None:
        return
    st.toggle(
        view.round_up_label,
        key=ROUND_UP_KEY,
        on_change=_on_toggle,
        args=(variant,),
    )


def render_tip_display(view: TipView) -> None:
    st.subheader(view.tip_text)
