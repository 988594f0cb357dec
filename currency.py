# currency.py - locale money formatting behind a single formatter value
from __future__ import annotations

import functools
import json
import locale
import logging
import pathlib
from dataclasses import dataclass, fields
from decimal import Decimal, ROUND_HALF_EVEN, localcontext
from typing import Any, Dict, Iterator, Optional, Sequence

from settings import SETTINGS, AppSettings

logger = logging.getLogger(__name__)


def to_decimal(value: Any) -> Decimal:
    """Exact decimal for ``value``; floats go through ``str`` so 18.3 stays 18.3."""
    d = value if isinstance(value, Decimal) else Decimal(str(value))
    if not d.is_finite():
        raise ValueError(f"Amount must be finite, got {value!r}")
    return d


def _grouping_intervals(grouping: Sequence[int]) -> Iterator[int]:
    # localeconv() semantics: 0 repeats the previous size, CHAR_MAX stops grouping
    last = None
    for interval in grouping:
        if interval == locale.CHAR_MAX:
            return
        if interval == 0:
            if last is None:
                raise ValueError(f"Invalid grouping {list(grouping)!r}")
            while True:
                yield last
        yield interval
        last = interval


def _group(digits: str, grouping: Sequence[int], sep: str) -> str:
    if not sep:
        return digits
    groups = []
    rest = digits
    for interval in _grouping_intervals(grouping):
        if interval <= 0 or len(rest) <= interval:
            break
        groups.append(rest[-interval:])
        rest = rest[:-interval]
    groups.append(rest)
    return sep.join(reversed(groups))


@dataclass(frozen=True)
class CurrencyFormatter:
    """Monetary conventions of one locale.

    Field names follow ``locale.localeconv()`` loosely so a formatter can be
    built from the process locale or from a JSON table.
    """
    symbol: str = "$"
    symbol_first: bool = True
    sep_by_space: bool = False
    decimal_point: str = "."
    thousands_sep: str = ","
    grouping: tuple = (3, 3, 0)
    frac_digits: int = 2

    def format(self, value: Any) -> str:
        amount = to_decimal(value)
        # quantize needs every integer digit plus the fraction digits in precision
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, amount.adjusted() + self.frac_digits + 2)
            amount = amount.quantize(
                Decimal(1).scaleb(-self.frac_digits), rounding=ROUND_HALF_EVEN
            )
        negative = amount < 0
        whole, _, frac = f"{abs(amount):f}".partition(".")
        number = _group(whole, self.grouping, self.thousands_sep)
        if self.frac_digits:
            number += self.decimal_point + frac

        space = " " if self.sep_by_space else ""
        if self.symbol_first:
            text = f"{self.symbol}{space}{number}"
        else:
            text = f"{number}{space}{self.symbol}"
        return f"-{text}" if negative else text


# ---- Built-in conventions; config/currency_formats.json may add or override ----
_BUILTIN_FORMATS: Dict[str, CurrencyFormatter] = {
    "en_US": CurrencyFormatter(),
    "en_GB": CurrencyFormatter(symbol="£"),
    "en_IN": CurrencyFormatter(symbol="Rs", grouping=(3, 2, 0)),
    "de_DE": CurrencyFormatter(symbol="€", symbol_first=False, sep_by_space=True,
                               decimal_point=",", thousands_sep="."),
    "fr_FR": CurrencyFormatter(symbol="€", symbol_first=False, sep_by_space=True,
                               decimal_point=",", thousands_sep="\u202f"),
    "ja_JP": CurrencyFormatter(symbol="¥", frac_digits=0),
}

CONFIG_PATH = pathlib.Path(__file__).parent / "config" / "currency_formats.json"
_FIELDS = {f.name for f in fields(CurrencyFormatter)}


def _from_entry(entry: Dict[str, Any]) -> CurrencyFormatter:
    unknown = set(entry) - _FIELDS
    if unknown:
        raise ValueError(f"unknown keys {sorted(unknown)}")
    kwargs = dict(entry)
    if "grouping" in kwargs:
        kwargs["grouping"] = tuple(int(g) for g in kwargs["grouping"])
    if "frac_digits" in kwargs:
        kwargs["frac_digits"] = int(kwargs["frac_digits"])
    return CurrencyFormatter(**kwargs)


def load_locale_formats(path: Optional[pathlib.Path] = None) -> Dict[str, CurrencyFormatter]:
    """Built-in table merged with the JSON config at ``path`` when it exists.

    A config file that cannot be read or parsed is logged and ignored.
    The file is read from the source checkout; a wheel install does not
    carry it and gets the built-ins only.
    """
    path = CONFIG_PATH if path is None else path
    table = dict(_BUILTIN_FORMATS)
    if not path.exists():
        logger.info("No currency config at %s; using built-in locales", path)
        return table
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        extra = {name: _from_entry(entry) for name, entry in raw.get("locales", {}).items()}
    except (OSError, ValueError, TypeError, AttributeError) as e:
        logger.warning("Ignoring currency config %s: %s", path, e)
        return table
    table.update(extra)
    return table


LOCALE_FORMATS = load_locale_formats()


def _normalize(name: str) -> str:
    # "en-US.UTF-8@euro" -> "en_US"
    return name.split(".")[0].split("@")[0].replace("-", "_").strip()


def formatter_for(locale_name: Optional[str],
                  table: Optional[Dict[str, CurrencyFormatter]] = None) -> CurrencyFormatter:
    """Exact locale match, then (for a bare language like "de") the first
    locale of that language, then en_US.

    A language with an unknown country ("es_ES") goes to en_US: the table's
    other countries for that language may use a different currency.
    """
    table = LOCALE_FORMATS if table is None else table
    name = _normalize(locale_name or "")
    if name in table:
        return table[name]
    lang, _, country = name.partition("_")
    if lang and not country:
        for key, fmt in table.items():
            if key.split("_")[0].lower() == lang.lower():
                logger.debug("No currency format for %r; using %s", locale_name, key)
                return fmt
    logger.debug("No currency format for %r; using en_US", locale_name)
    return table.get("en_US", CurrencyFormatter())


@functools.lru_cache(maxsize=1)
def system_formatter() -> CurrencyFormatter:
    """Formatter for the process locale's monetary conventions.

    The C locale carries no currency symbol, so it falls back to en_US.
    """
    try:
        locale.setlocale(locale.LC_MONETARY, "")
    except locale.Error as e:
        logger.warning("Could not apply the process locale: %s", e)
    conv = locale.localeconv()
    if not conv.get("currency_symbol"):
        logger.debug("Process locale has no currency symbol; using en_US")
        return formatter_for("en_US")

    digits = conv.get("frac_digits", 2)
    return CurrencyFormatter(
        symbol=conv["currency_symbol"],
        symbol_first=bool(conv.get("p_cs_precedes", 1)),
        sep_by_space=bool(conv.get("p_sep_by_space", 0)),
        decimal_point=conv.get("mon_decimal_point") or ".",
        thousands_sep=conv.get("mon_thousands_sep", ""),
        grouping=tuple(conv.get("mon_grouping", ())),
        frac_digits=digits if 0 <= digits < locale.CHAR_MAX else 2,
    )


def active_formatter(settings: Optional[AppSettings] = None) -> CurrencyFormatter:
    """Formatter for the configured TIP_LOCALE, else the process locale."""
    settings = SETTINGS if settings is None else settings
    if settings.locale:
        return formatter_for(settings.locale)
    return system_formatter()
