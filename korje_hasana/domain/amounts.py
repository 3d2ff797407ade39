"""
Best-effort numeric parsing for loosely typed spreadsheet cells.

Sheet cells come back as whatever a human typed: ``"৳1,200.50"``, ``"1,000 টাকা"``,
``"৫০০"``. Everything here reduces such text to a Decimal by transliterating
Bengali digits and dropping every character except digits, ``.`` and ``-``.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

_BENGALI_DIGITS = str.maketrans("০১২৩৪৫৬৭৮৯", "0123456789")
_NON_NUMERIC = re.compile(r"[^0-9.\-]")
# "Tk. 500" would otherwise strip to ".500".
_CURRENCY_PREFIX = re.compile(r"^\s*(?:tk|taka|bdt|rs)\.?\s*", re.IGNORECASE)

ZERO = Decimal(0)


def strip_numeric(text: str) -> str:
    """Transliterate Bengali digits and keep only digits, '.' and '-'."""
    return _NON_NUMERIC.sub("", text.translate(_BENGALI_DIGITS))


def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse a cell value into a Decimal.

    Returns None when the value is absent, empty, or does not parse once
    decoration has been stripped (e.g. ``"N/A"``, ``"1.2.3"``, ``"--"``).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        parsed = Decimal(repr(value))
        return parsed if parsed.is_finite() else None
    if not isinstance(value, str):
        return None

    cleaned = strip_numeric(value)
    if not cleaned:
        return None
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def to_decimal(value: Any) -> Decimal:
    """Like parse_amount, but unparseable or absent values count as zero."""
    parsed = parse_amount(value)
    return ZERO if parsed is None else parsed


def parse_entered_amount(value: Any) -> Optional[Decimal]:
    """
    Parse an amount typed into a form.

    Stricter than parse_amount: a leading currency abbreviation is dropped
    first, and text that would only parse by borrowing a stray dot (".500")
    is refused.
    """
    if isinstance(value, str):
        value = _CURRENCY_PREFIX.sub("", value)
        if strip_numeric(value).lstrip("-").startswith("."):
            return None
    return parse_amount(value)


__all__ = ["ZERO", "parse_amount", "parse_entered_amount", "strip_numeric", "to_decimal"]
