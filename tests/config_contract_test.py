# Run with: python -m pytest -q
import json, pathlib
from dataclasses import fields

from currency import CurrencyFormatter, LOCALE_FORMATS
from form_state import VARIANT_FIELDS
from settings import FormVariant

BASE = pathlib.Path(__file__).resolve().parents[1]
cfg = json.loads((BASE / "config" / "currency_formats.json").read_text(encoding="utf-8"))


def test_variant_alignment():
    assert set(VARIANT_FIELDS) == set(FormVariant), f"Mismatch: {set(VARIANT_FIELDS) ^ set(FormVariant)}"
    for name, flags in VARIANT_FIELDS.items():
        assert set(flags) == {"tip", "round_up"}, name


def test_config_keys_are_formatter_fields():
    known = {f.name for f in fields(CurrencyFormatter)}
    for name, entry in cfg["locales"].items():
        assert set(entry) <= known, f"{name}: {set(entry) - known}"
        assert name in LOCALE_FORMATS


def test_every_locale_formats_zero():
    for name, fmt in LOCALE_FORMATS.items():
        text = fmt.format(0)
        assert fmt.symbol in text, name
        assert "0" in text, name
