"""Locale-tolerant coercion of scraped text into decimals and dates.

Every parser here returns ``None`` when the token carries no usable value.
Sources print dashes, ``N/A`` or blanks for missing quotes, and Thai pages use
the Buddhist calendar (Gregorian year + 543), frequently with two-digit years
where ``69`` stands for 2569.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

MISSING_TOKENS = frozenset({"", "-", "N/A"})

BUDDHIST_ERA_OFFSET = 543
BUDDHIST_CENTURY = 2500
# Full years from here on are read as Buddhist years.
BUDDHIST_YEAR_FLOOR = 2400

THAI_SHORT_MONTHS = {
    "ม.ค.": 1,
    "ก.พ.": 2,
    "มี.ค.": 3,
    "เม.ย.": 4,
    "พ.ค.": 5,
    "มิ.ย.": 6,
    "ก.ค.": 7,
    "ส.ค.": 8,
    "ก.ย.": 9,
    "ต.ค.": 10,
    "พ.ย.": 11,
    "ธ.ค.": 12,
}

THAI_FULL_MONTHS = {
    "มกราคม": 1,
    "กุมภาพันธ์": 2,
    "มีนาคม": 3,
    "เมษายน": 4,
    "พฤษภาคม": 5,
    "มิถุนายน": 6,
    "กรกฎาคม": 7,
    "สิงหาคม": 8,
    "กันยายน": 9,
    "ตุลาคม": 10,
    "พฤศจิกายน": 11,
    "ธันวาคม": 12,
}

_NUMERIC_DATE_RE = re.compile(r"(\d{1,2})[/.\-](\d{1,2})[/.\-](\d{4}|\d{2})")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})")

_ENGLISH_TEXT_FORMATS = (
    "%d %b %Y",
    "%d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d-%b-%Y",
)

_EN_US_FORMATS = (
    ("%m/%d/%Y", "%m/%d/%y")
    + _ENGLISH_TEXT_FORMATS
    + ("%b %d, %y", "%d %b %y", "%Y-%m-%d")
)


def _clean(text: Optional[str]) -> str:
    if text is None:
        return ""
    return " ".join(str(text).split())


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    if text is None:
        return None
    value = str(text).strip()
    if value in MISSING_TOKENS:
        return None
    value = value.replace(",", "")
    if value.startswith("+"):
        value = value[1:]
    try:
        number = Decimal(value)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def or_zero(value: Optional[Decimal]) -> Decimal:
    return value if value is not None else Decimal(0)


def parse_percent(text: Optional[str]) -> Optional[Decimal]:
    if text is None:
        return None
    return parse_decimal(str(text).replace("%", ""))


def parse_exact_date(text: Optional[str], fmt: str) -> Optional[date]:
    value = _clean(text)
    if not value:
        return None
    try:
        return datetime.strptime(value, fmt).date()
    except ValueError:
        return None


def buddhist_short_year(yy: int) -> int:
    """``69`` -> 2569 BE -> 2026 CE."""
    return BUDDHIST_CENTURY + yy - BUDDHIST_ERA_OFFSET


def to_gregorian_year(year: int) -> int:
    if year < 100:
        return buddhist_short_year(year)
    if year >= BUDDHIST_YEAR_FLOOR:
        return year - BUDDHIST_ERA_OFFSET
    return year


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_thai_short_date(text: Optional[str]) -> Optional[date]:
    """Parse ``"13 ม.ค. 69"`` (day, Thai month abbreviation, two-digit BE year)."""
    parts = _clean(text).split(" ")
    if len(parts) != 3:
        return None

    day_text, month_text, year_text = parts
    month = THAI_SHORT_MONTHS.get(month_text)
    if month is None:
        return None
    if len(year_text) != 2:
        return None
    try:
        day = int(day_text)
        yy = int(year_text)
    except ValueError:
        return None
    return _build_date(buddhist_short_year(yy), month, day)


def _parse_thai_month_text(value: str) -> Optional[date]:
    parts = value.split(" ")
    if len(parts) != 3:
        return None
    day_text, month_text, year_text = parts
    month = THAI_SHORT_MONTHS.get(month_text) or THAI_FULL_MONTHS.get(month_text)
    if month is None:
        return None
    try:
        day = int(day_text)
        year = int(year_text)
    except ValueError:
        return None
    return _build_date(to_gregorian_year(year), month, day)


def parse_calendar_date(text: Optional[str]) -> Optional[date]:
    """Calendar-aware parse using Thai conventions.

    Numeric dates are day-first. Two-digit years and years from 2400 up are
    Buddhist and converted to Gregorian; Thai and English month names are
    accepted as well.
    """
    value = _clean(text)
    if not value:
        return None

    match = _NUMERIC_DATE_RE.fullmatch(value)
    if match:
        day, month, year = (int(group) for group in match.groups())
        return _build_date(to_gregorian_year(year), month, day)

    match = _ISO_DATE_RE.fullmatch(value)
    if match:
        year, month, day = (int(group) for group in match.groups())
        return _build_date(to_gregorian_year(year), month, day)

    thai = _parse_thai_month_text(value)
    if thai is not None:
        return thai

    for fmt in _ENGLISH_TEXT_FORMATS:
        parsed = parse_exact_date(value, fmt)
        if parsed is not None:
            return _build_date(to_gregorian_year(parsed.year), parsed.month, parsed.day)
    return None


def parse_locale_date(text: Optional[str]) -> Optional[date]:
    """English (en-US) conventions first, then Thai."""
    value = _clean(text)
    if not value:
        return None
    for fmt in _EN_US_FORMATS:
        parsed = parse_exact_date(value, fmt)
        if parsed is not None and parsed.year < BUDDHIST_YEAR_FLOOR:
            return parsed
    return parse_calendar_date(value)
