from datetime import date
from decimal import Decimal

import pytest

from nav_scraping.extractors.normalizers import (
    or_zero,
    parse_calendar_date,
    parse_decimal,
    parse_exact_date,
    parse_locale_date,
    parse_percent,
    parse_thai_short_date,
    to_gregorian_year,
)


@pytest.mark.parametrize("text", [None, "", "  ", "-", "N/A", "abc", "NaN", "Infinity"])
def test_parse_decimal_returns_none_for_missing_values(text):
    assert parse_decimal(text) is None


def test_parse_decimal_handles_thousands_and_sign():
    assert parse_decimal("1,744,337,477.40") == Decimal("1744337477.40")
    assert parse_decimal("+0.0521") == Decimal("0.0521")
    assert parse_decimal(" -0.0100 ") == Decimal("-0.0100")


def test_or_zero_keeps_real_zero():
    assert or_zero(None) == Decimal(0)
    value = Decimal("0.00")
    assert or_zero(value) is value


def test_parse_percent_strips_sign():
    assert parse_percent("1.23%") == Decimal("1.23")
    assert parse_percent("-0.58 %") == Decimal("-0.58")
    assert parse_percent("-") is None
    assert parse_percent(None) is None


def test_parse_exact_date():
    assert parse_exact_date("13-01-2026", "%d-%m-%Y") == date(2026, 1, 13)
    assert parse_exact_date("2026-01-13", "%d-%m-%Y") is None
    assert parse_exact_date("", "%d/%m/%Y") is None


def test_to_gregorian_year():
    assert to_gregorian_year(69) == 2026
    assert to_gregorian_year(2569) == 2026
    assert to_gregorian_year(2026) == 2026


def test_parse_thai_short_date():
    assert parse_thai_short_date("13 ม.ค. 69") == date(2026, 1, 13)
    assert parse_thai_short_date(" 1  ธ.ค.  68 ") == date(2025, 12, 1)


@pytest.mark.parametrize(
    "text",
    [None, "", "13 Jan 69", "13 ม.ค. 2569", "13 ม.ค.", "31 ก.พ. 69", "xx ม.ค. 69"],
)
def test_parse_thai_short_date_rejects_invalid(text):
    assert parse_thai_short_date(text) is None


def test_parse_calendar_date_formats():
    assert parse_calendar_date("12/01/69") == date(2026, 1, 12)
    assert parse_calendar_date("13/01/2569") == date(2026, 1, 13)
    assert parse_calendar_date("13/01/2026") == date(2026, 1, 13)
    assert parse_calendar_date("2569-01-13") == date(2026, 1, 13)
    assert parse_calendar_date("13 มกราคม 2569") == date(2026, 1, 13)
    assert parse_calendar_date("13 ม.ค. 2569") == date(2026, 1, 13)
    assert parse_calendar_date("13 Jan 2026") == date(2026, 1, 13)
    assert parse_calendar_date("30/02/2026") is None
    assert parse_calendar_date("not a date") is None


def test_parse_locale_date_prefers_month_first():
    assert parse_locale_date("01/13/2026") == date(2026, 1, 13)
    assert parse_locale_date("02/03/2026") == date(2026, 2, 3)
    assert parse_locale_date("Jan 13, 2026") == date(2026, 1, 13)
    assert parse_locale_date("1/5/26") == date(2026, 1, 5)
    assert parse_locale_date("01/13/26") == date(2026, 1, 13)
    assert parse_locale_date("Jan 13, 26") == date(2026, 1, 13)
    assert parse_locale_date("13 Jan 26") == date(2026, 1, 13)


def test_parse_locale_date_falls_back_to_thai_calendar():
    assert parse_locale_date("13/01/2569") == date(2026, 1, 13)
    assert parse_locale_date("01/13/2569") is None
    assert parse_locale_date("13 ม.ค. 69") == date(2026, 1, 13)
    assert parse_locale_date("-") is None


def test_two_digit_years_stay_buddhist_on_calendar_path():
    assert parse_calendar_date("1/5/26") == date(1983, 5, 1)
    assert parse_calendar_date("12/01/69") == date(2026, 1, 12)
