import logging
from typing import List, Union

from bs4 import Tag

from ..models import DEFAULT_CURRENCY, FundRecord
from .base import Extractor
from .html import clean_text, direct_cells, fetch_page, parse_html, previous_tag
from .normalizers import or_zero, parse_calendar_date, parse_decimal

SOURCE_NAME = "Asset Plus"
ASSET_PLUS_URL = "https://www.assetfund.co.th/home/funds-price.aspx"
DEFAULT_CATEGORY = "General"
MIN_CELLS = 10


def _section_category(tbody: Tag) -> str:
    # Each <tbody> is labelled by the <th> of the <thead> just before it.
    thead = previous_tag(tbody, "thead")
    if thead is None:
        return DEFAULT_CATEGORY
    th = thead.find("th")
    if th is None:
        return DEFAULT_CATEGORY
    return clean_text(th)


def _build_record(cells: List[Tag], category: str, source: str) -> FundRecord:
    values = [clean_text(cell) for cell in cells]
    return FundRecord(
        source=source,
        category=category,
        short_code=values[0],
        fund_name=values[1],
        currency=values[2] or DEFAULT_CURRENCY,
        as_of_date=parse_calendar_date(values[3]),
        total_net_assets=parse_decimal(values[4]),
        nav=parse_decimal(values[5]),
        offer_price=parse_decimal(values[6]),
        bid_price=parse_decimal(values[7]),
        change=or_zero(parse_decimal(values[8])),
        change_percent=or_zero(parse_decimal(values[9])),
    )


def transform_asset_plus_html(
    content: Union[str, bytes],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    soup = parse_html(content)
    table = soup.select_one('table[class*="table border-white"]')
    if table is None:
        logger.warning("%s: data table not found.", source)
        return []

    tbodies = table.find_all("tbody")
    if not tbodies:
        logger.warning("%s: no tbody sections found.", source)
        return []

    records: List[FundRecord] = []
    for tbody in tbodies:
        category = _section_category(tbody)
        for row in tbody.find_all("tr"):
            cells = direct_cells(row)
            if len(cells) < MIN_CELLS:
                continue
            try:
                records.append(_build_record(cells, category, source))
            except Exception as exc:
                logger.warning("%s: skipping row %s: %s", source, clean_text(cells[0]), exc)
    return records


class AssetPlusExtractor(Extractor):
    name = SOURCE_NAME
    url = ASSET_PLUS_URL
    logger_name = "nav.asset_plus"

    def fetch(self, session):
        return fetch_page(session, self.url, self.settings, self.logger)

    def transform(self, raw) -> List[FundRecord]:
        return transform_asset_plus_html(raw, self.logger, source=self.name)
