import logging
from typing import List, Union

from bs4 import Tag

from ..models import FundRecord
from .base import Extractor
from .html import clean_text, direct_cells, fetch_page, has_class_marker, parse_html
from .normalizers import or_zero, parse_decimal, parse_exact_date, parse_percent

SOURCE_NAME = "LH Fund"
LH_FUND_URL = "https://www.lhfund.co.th/MutualFund/FundNav"
DEFAULT_CATEGORY = "General"
CAPTION_MARKER = "captions"
MIN_CELLS = 8
DATE_FORMAT = "%d/%m/%Y"


def _section_category(tbody: Tag) -> str:
    heading = tbody.select_one(f'tr[class*="{CAPTION_MARKER}"] h3')
    if heading is None:
        return DEFAULT_CATEGORY
    return clean_text(heading)


def _is_data_row(row: Tag) -> bool:
    if row.find("th", recursive=False) is not None:
        return False
    return not has_class_marker(row, CAPTION_MARKER)


def _names(cell: Tag):
    link = cell.find("a")
    short_code = clean_text(link if link is not None else cell)
    title = link.get("title") if link is not None else None
    fund_name = clean_text(title) if title is not None else short_code
    return short_code, fund_name


def _build_record(cells: List[Tag], category: str, source: str) -> FundRecord:
    short_code, fund_name = _names(cells[0])
    values = [clean_text(cell) for cell in cells]
    return FundRecord(
        source=source,
        category=category,
        fund_name=fund_name,
        short_code=short_code,
        nav=parse_decimal(values[1]),
        total_net_assets=parse_decimal(values[2]),
        offer_price=parse_decimal(values[3]),
        bid_price=parse_decimal(values[4]),
        change=or_zero(parse_decimal(values[5])),
        change_percent=or_zero(parse_percent(values[6])),
        as_of_date=parse_exact_date(values[7], DATE_FORMAT),
    )


def transform_lh_fund_html(
    content: Union[str, bytes],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    soup = parse_html(content)
    table = soup.select_one('table[class*="table-nav"]')
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
            if not _is_data_row(row):
                continue
            cells = direct_cells(row)
            if len(cells) < MIN_CELLS:
                continue
            try:
                records.append(_build_record(cells, category, source))
            except Exception as exc:
                logger.warning("%s: skipping row %s: %s", source, clean_text(cells[0]), exc)
    return records


class LHFundExtractor(Extractor):
    name = SOURCE_NAME
    url = LH_FUND_URL
    logger_name = "nav.lh_fund"

    def fetch(self, session):
        return fetch_page(session, self.url, self.settings, self.logger)

    def transform(self, raw) -> List[FundRecord]:
        return transform_lh_fund_html(raw, self.logger, source=self.name)
