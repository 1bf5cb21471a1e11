import logging
from datetime import date
from decimal import Decimal

from nav_scraping.extractors.asset_plus import transform_asset_plus_html


def test_transform_asset_plus_sections(read_fixture):
    logger = logging.getLogger("test.asset_plus")

    records = transform_asset_plus_html(read_fixture("asset_plus.html"), logger)

    assert [r.short_code for r in records] == ["ASP-DIGI", "ASP-SME", "ASP-FIXED"]
    assert [r.category for r in records] == ["Equity Fund", "Equity Fund", "Fixed Income Fund"]
    assert {r.source for r in records} == {"Asset Plus"}

    digi = records[0]
    assert digi.fund_name == "Asset Plus Digital Transformation Fund"
    assert digi.as_of_date == date(2026, 1, 12)
    assert digi.total_net_assets == Decimal("3643223619.94")
    assert digi.nav == Decimal("10.6527")
    assert digi.offer_price == Decimal("10.7060")
    assert digi.bid_price == Decimal("10.6527")
    assert digi.change == Decimal("0.0521")
    assert digi.change_percent == Decimal("0.49")


def test_transform_asset_plus_missing_values():
    logger = logging.getLogger("test.asset_plus")
    html = """
    <table class="table border-white">
      <thead><tr><th>Equity Fund</th></tr></thead>
      <tbody>
        <tr><td>ASP-SME</td><td>SME</td><td></td><td>12/01/69</td><td>-</td>
            <td>8.12</td><td>N/A</td><td>N/A</td><td>-</td><td>-</td></tr>
      </tbody>
    </table>
    """

    (record,) = transform_asset_plus_html(html, logger)

    assert record.currency == "THB"
    assert record.nav == Decimal("8.12")
    assert record.total_net_assets is None
    assert record.offer_price is None
    assert record.bid_price is None
    assert record.change == Decimal(0)
    assert record.change_percent == Decimal(0)


def test_transform_asset_plus_without_table_returns_empty():
    logger = logging.getLogger("test.asset_plus")

    assert transform_asset_plus_html("<html><body><p>Maintenance</p></body></html>", logger) == []
