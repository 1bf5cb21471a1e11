import logging
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple, Union

from bs4 import Tag

from ..models import FundRecord
from .base import Extractor
from .html import (
    clean_text,
    fetch_page,
    first_decimal,
    parse_html,
    select_by_class,
    select_one_by_class,
    text_fragments,
)
from .normalizers import or_zero, parse_decimal, parse_thai_short_date

SOURCE_NAME = "Dao Investment"
DAO_URL = "https://www.daolinvestment.co.th/mutual-fund/info/nav"
DEFAULT_CATEGORY = "Mutual Fund"

TABLE_MARKER = "MuiTable-root"
ROW_MARKER = "MuiTableRow-root"
HEADER_MARKER = "MuiTypography-header2"
CODE_MARKER = "css-vxcmzt"
NAME_MARKER = "css-1kxrhf3"


def _table_category(table: Tag) -> str:
    # table -> box -> container; the header box is a sibling of the table box.
    parent = table.parent
    container = parent.parent if parent is not None else None
    if container is None:
        return DEFAULT_CATEGORY
    header = select_one_by_class(container, "span", HEADER_MARKER)
    if header is None:
        return DEFAULT_CATEGORY
    return clean_text(header)


def _fund_cell(row: Tag) -> Optional[Tag]:
    cell = select_one_by_class(row, "td", "fundName")
    if cell is None or cell.find("h6") is None:
        return None
    return cell


def _names(cell: Tag) -> Tuple[str, str]:
    link = cell.find("a")
    if link is None:
        return "", ""
    code = link.select_one(f'div[class*="{CODE_MARKER}"] span') or link.find("span")
    name = select_one_by_class(link, "div", NAME_MARKER)
    return clean_text(code), clean_text(name)


def _nav_and_date(cell: Optional[Tag]) -> Tuple[Optional[Decimal], Optional[date]]:
    """The NAV cell mixes a number and a Thai short date in either order."""
    nav = None
    as_of = None
    for fragment in text_fragments(cell):
        if nav is None:
            value = parse_decimal(fragment)
            if value is not None:
                nav = value
                continue
        if as_of is None:
            as_of = parse_thai_short_date(fragment)
    return nav, as_of


def _build_record(row: Tag, fund_cell: Tag, category: str, source: str) -> FundRecord:
    short_code, fund_name = _names(fund_cell)
    nav, as_of = _nav_and_date(select_one_by_class(row, "td", "nav"))
    change = or_zero(first_decimal(select_one_by_class(row, "td", "changes")))
    return FundRecord(
        source=source,
        category=category,
        fund_name=fund_name,
        short_code=short_code,
        nav=nav,
        as_of_date=as_of,
        offer_price=first_decimal(select_one_by_class(row, "td", "sellPrice")),
        bid_price=first_decimal(select_one_by_class(row, "td", "buyPrice")),
        total_net_assets=first_decimal(select_one_by_class(row, "td", "totalNav")),
        change=change,
        # The page only shows a currency change; it is mirrored here as-is.
        change_percent=change,
    )


def transform_dao_html(
    content: Union[str, bytes],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    soup = parse_html(content)
    tables = select_by_class(soup, "table", TABLE_MARKER)
    if not tables:
        logger.warning("%s: no tables found.", source)
        return []

    records: List[FundRecord] = []
    for table in tables:
        category = _table_category(table)
        for row in select_by_class(table, "tr", ROW_MARKER):
            fund_cell = _fund_cell(row)
            if fund_cell is None:
                continue
            try:
                records.append(_build_record(row, fund_cell, category, source))
            except Exception as exc:
                logger.warning("%s: skipping row: %s", source, exc)
    return records


class DaoExtractor(Extractor):
    name = SOURCE_NAME
    url = DAO_URL
    logger_name = "nav.dao"

    def fetch(self, session):
        return fetch_page(session, self.url, self.settings, self.logger)

    def transform(self, raw) -> List[FundRecord]:
        return transform_dao_html(raw, self.logger, source=self.name)
