# app.py - Streamlit entry point: streamlit run app.py
from __future__ import annotations
import logging
import streamlit as st

from currency import active_formatter
from engines import TipOptions
from form_state import TipForm, render
from settings import SETTINGS
from tip_controls import render_amount_field, render_round_up, render_tip_display, render_tip_field
from ui_helpers import current_form

logging.basicConfig(level=SETTINGS.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def main() -> None:
    st.set_page_config(page_title="Tip Calculator", layout="centered")

    variant = SETTINGS.form_variant
    options = TipOptions(tip_percent=SETTINGS.default_tip_percent)
    form = current_form(TipForm(round_up=options.round_up))
    view = render(form, variant, options, active_formatter(SETTINGS))
    logger.debug("render %s -> %s", form, view.tip_text)

    st.header(view.title)
    render_amount_field(view, variant)
    render_tip_field(view, variant)
    render_round_up(view, variant)
    render_tip_display(view)


if __name__ == "__main__":
    main()
