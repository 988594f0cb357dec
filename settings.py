# settings.py - runtime configuration for the tip form (environment driven)
from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_TIP_PERCENT = 15.0


class FormVariant(str, Enum):
    """Drafts of the form, from bill-only to tip field plus round-up toggle."""
    BASIC = "basic"
    CUSTOM_TIP = "custom_tip"
    ROUND_UP = "round_up"


@dataclass(frozen=True)
class AppSettings:
    """Immutable container for the page's runtime parameters."""

    # Locale name for currency formatting; None means the process locale
    locale: Optional[str] = None
    form_variant: FormVariant = FormVariant.ROUND_UP
    default_tip_percent: float = DEFAULT_TIP_PERCENT
    log_level: str = "WARNING"


def _percent(raw: Optional[str]) -> float:
    if raw is None or raw.strip() == "":
        return DEFAULT_TIP_PERCENT
    try:
        value = float(raw.replace("%", "").strip())
    except ValueError:
        logger.warning("TIP_DEFAULT_PERCENT=%r is not a number; using %s", raw, DEFAULT_TIP_PERCENT)
        return DEFAULT_TIP_PERCENT
    if not math.isfinite(value) or value < 0:
        logger.warning("TIP_DEFAULT_PERCENT=%r is out of range; using %s", raw, DEFAULT_TIP_PERCENT)
        return DEFAULT_TIP_PERCENT
    return value


def _log_level(raw: Optional[str]) -> str:
    level = (raw or "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("TIP_LOG_LEVEL=%r is not a logging level; using WARNING", raw)
        return "WARNING"
    return level


def load_settings(environ: Optional[Mapping[str, str]] = None) -> AppSettings:
    """Build settings from ``environ`` (defaults to ``os.environ``) at call time."""
    env = os.environ if environ is None else environ

    raw_variant = (env.get("TIP_FORM_VARIANT") or "round_up").strip().lower()
    try:
        variant = FormVariant(raw_variant)
    except ValueError:
        choices = ", ".join(v.value for v in FormVariant)
        raise ValueError(f"TIP_FORM_VARIANT must be one of {choices}; got {raw_variant!r}") from None

    return AppSettings(
        locale=(env.get("TIP_LOCALE") or "").strip() or None,
        form_variant=variant,
        default_tip_percent=_percent(env.get("TIP_DEFAULT_PERCENT")),
        log_level=_log_level(env.get("TIP_LOG_LEVEL")),
    )


# Singleton used by most callers
SETTINGS = load_settings()
