"""
validation/type_validators.py

Stateless cell-level predicates for numeric and date values.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime

# Characters removed before numeric parsing: thousands separators,
# currency symbols and all whitespace.
_NUMBER_NOISE = re.compile(r"[,$€£¥₹\s]")
_NUMBER_SHAPE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)

# Ordered by priority: the first pattern that matches decides the format,
# even when a later pattern would also match the same string.
DATE_FORMAT_PATTERNS: tuple[tuple[re.Pattern[str], str, str], ...] = (
    (re.compile(r"^\d{4}-\d{2}-\d{2}$", re.ASCII), "%Y-%m-%d", "YYYY-MM-DD (ISO)"),
    (re.compile(r"^\d{2}/\d{2}/\d{4}$", re.ASCII), "%m/%d/%Y", "MM/DD/YYYY (US)"),
    (re.compile(r"^\d{2}-\d{2}-\d{4}$", re.ASCII), "%m-%d-%Y", "MM-DD-YYYY"),
    (re.compile(r"^\d{4}/\d{2}/\d{2}$", re.ASCII), "%Y/%m/%d", "YYYY/MM/DD"),
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$", re.ASCII), "%m/%d/%Y", "M/D/YYYY"),
    (re.compile(r"^\d{1,2}-\d{1,2}-\d{4}$", re.ASCII), "%m-%d-%Y", "M-D-YYYY"),
    (re.compile(r"^\d{2}/\d{2}/\d{2}$", re.ASCII), "%m/%d/%y", "MM/DD/YY"),
    (re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$", re.ASCII), "%Y-%m-%d", "YYYY-M-D"),
    (re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$", re.ASCII), "%m/%d/%y", "M/D/YY"),
    (re.compile(r"^\d{2}\.\d{2}\.\d{4}$", re.ASCII), "%d.%m.%Y", "DD.MM.YYYY (European)"),
    (re.compile(r"^\d{1,2}\.\d{1,2}\.\d{4}$", re.ASCII), "%d.%m.%Y", "D.M.YYYY"),
)

# Exclusive bounds on the parsed calendar year.
MIN_YEAR_EXCLUSIVE = 1900
MAX_YEAR_EXCLUSIVE = 2100


@dataclass(frozen=True)
class DateCheck:
    """
    Outcome of a date validation.

    ``detected_format`` and ``parsed`` are populated only when valid.
    """

    is_valid: bool
    detected_format: str | None = None
    parsed: date | None = None


def parse_number(raw: str | None) -> float | None:
    """
    Parse a locale-tolerant numeric cell (``"$1,234.50"`` -> ``1234.5``).

    Returns ``None`` when the cleaned text is empty, is not a plain decimal
    or scientific literal, or is not finite.
    """

    if raw is None:
        return None
    cleaned = _NUMBER_NOISE.sub("", str(raw))
    if not cleaned or not _NUMBER_SHAPE.match(cleaned):
        return None
    value = float(cleaned)
    if not math.isfinite(value):
        return None
    return value


def is_valid_number(raw: str | None) -> bool:
    return parse_number(raw) is not None


def is_valid_date(raw: str | None) -> DateCheck:
    """
    Check ``raw`` against the ordered date patterns and parse it.

    A string that matches no pattern, names an impossible calendar day, or
    falls outside the supported year window is invalid.
    """

    if raw is None:
        return DateCheck(is_valid=False)
    text = str(raw).strip()
    if not text:
        return DateCheck(is_valid=False)

    for pattern, strptime_format, name in DATE_FORMAT_PATTERNS:
        if not pattern.match(text):
            continue
        try:
            parsed = datetime.strptime(text, strptime_format).date()
        except ValueError:
            return DateCheck(is_valid=False)
        if not MIN_YEAR_EXCLUSIVE < parsed.year < MAX_YEAR_EXCLUSIVE:
            return DateCheck(is_valid=False)
        return DateCheck(is_valid=True, detected_format=name, parsed=parsed)

    return DateCheck(is_valid=False)
