# ui_helpers.py - session state and event dispatch for the tip form

from __future__ import annotations
from typing import Any
import streamlit as st

from form_state import TipForm, reduce

FORM_KEY = "tip_form"


def use_state(key: str, default):
    """Get or set a default value in session_state."""
    if key not in st.session_state:
        st.session_state[key] = default
    return st.session_state[key]


def current_form(initial: TipForm) -> TipForm:
    return use_state(FORM_KEY, initial)


def dispatch(event: Any, variant: str) -> TipForm:
    """Run ``event`` through the reducer and store the new form."""
    form = reduce(use_state(FORM_KEY, TipForm()), event, variant)
    st.session_state[FORM_KEY] = form
    return form
