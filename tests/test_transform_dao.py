import logging
from datetime import date
from decimal import Decimal

from nav_scraping.extractors.dao import transform_dao_html


def test_transform_dao_tables(read_fixture):
    logger = logging.getLogger("test.dao")

    records = transform_dao_html(read_fixture("dao.html"), logger)

    assert [r.short_code for r in records] == ["DAOFI", "DAOST", "DAOEQ"]
    assert [r.category for r in records] == ["กองทุนตราสารหนี้", "กองทุนตราสารหนี้", "กองทุนหุ้น"]

    first = records[0]
    assert first.fund_name == "Dao Fixed Income Fund"
    assert first.nav == Decimal("10.1234")
    assert first.as_of_date == date(2026, 1, 13)
    assert first.offer_price == Decimal("10.1300")
    assert first.bid_price == Decimal("10.1200")
    assert first.total_net_assets == Decimal("1250000.50")
    assert first.change == Decimal("0.0100")


def test_transform_dao_nav_cell_order_and_missing_values(read_fixture):
    logger = logging.getLogger("test.dao")

    record = transform_dao_html(read_fixture("dao.html"), logger)[1]

    assert record.nav == Decimal("9.8765")
    assert record.as_of_date == date(2026, 1, 12)
    assert record.change == Decimal(0)
    assert record.offer_price is None
    assert record.total_net_assets is None


def test_transform_dao_change_percent_mirrors_change(read_fixture):
    logger = logging.getLogger("test.dao")

    records = transform_dao_html(read_fixture("dao.html"), logger)

    assert all(r.change_percent == r.change for r in records)
    assert records[2].change_percent == Decimal("-0.2500")


def test_transform_dao_without_tables_returns_empty():
    logger = logging.getLogger("test.dao")

    assert transform_dao_html("<html><body></body></html>", logger) == []
