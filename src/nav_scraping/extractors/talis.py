"""Talis AM NAV summary.

The JSP page sits behind a session check: the site root has to be visited
first so the server issues its cookies, and while the backend is busy it
answers ``423 Locked``. Each run therefore owns a fresh cookie-carrying
session, pre-warms it, then fetches the summary with a cache-busting query
parameter, retrying a locked response a bounded number of times.

The summary holds several tables whose column order is not stable, so every
table gets its own column map built from its header labels.
"""

import logging
import time
from typing import Callable, List, Optional, Union

import requests

from ..core import HttpSettings, request
from ..models import FundRecord
from .base import Extractor
from .html import (
    build_header_map,
    clean_text,
    direct_cells,
    find_nearest_category,
    header_row,
    parse_html,
    read_row,
)
from .normalizers import parse_decimal, parse_locale_date, parse_percent

SOURCE_NAME = "Talis AM"
TALIS_BASE_URL = "https://nav.talisam.co.th/"
TALIS_URL = "https://nav.talisam.co.th/index_NAV_Sum.jsp?p_lang=EN"
TALIS_REFERER = "https://www.talisam.co.th/nav/"

LOCKED_STATUS = 423
MAX_ATTEMPTS = 3
UPGRADE_HEADERS = {"Upgrade-Insecure-Requests": "1"}

CATEGORY_KEYWORDS = (
    "Money Market",
    "Mixed Fund",
    "Equity Fund",
    "Foreign Investment Fund",
    "Retirement Mutual Fund",
    "Super Saving Fund",
    "Thai ESG",
    "กองทุนรวมตลาดเงิน",
    "กองทุนรวมผสม",
    "กองทุนหุ้น",
    "กองทุนรวมที่ลงทุนในต่างประเทศ",
    "กองทุนรวมเพื่อการเลี้ยงชีพ",
    "กองทุนรวมเพื่อการออม",
    "กองทุนรวมไทยเพื่อความยั่งยืน",
)

# Order matters: "%Change" must win over "Change", "Short Name" over "Fund Name".
HEADER_LABELS = (
    ("short_code", ("Short Name", "ชื่อย่อ")),
    ("fund_name", ("Fund Name", "กองทุน")),
    ("change_percent", ("%Change", "% Change", "%เปลี่ยนแปลง")),
    ("change", ("Change", "เปลี่ยนแปลง")),
    ("total_net_assets", ("Total Net Asset Value", "มูลค่าทรัพย์สินสุทธิ")),
    ("nav", ("NAV", "มูลค่าหน่วยลงทุน")),
    ("offer_price", ("Offer", "ราคาขาย")),
    ("bid_price", ("Bid", "ราคาซื้อคืน")),
    ("as_of_date", ("Date", "วันที่")),
)


def append_cache_buster(url: str, attempt: int, timestamp_ms: int) -> str:
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}_={timestamp_ms}_{attempt}"


def prewarm(
    session: requests.Session,
    settings: HttpSettings,
    logger: logging.Logger,
    *,
    delay_s: float,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Visit the site root for cookies; the body is discarded."""
    logger.info("%s: pre-warming session.", SOURCE_NAME)
    response = request(
        session, "GET", TALIS_BASE_URL, settings=settings, logger=logger, headers=UPGRADE_HEADERS
    )
    if response.status_code == LOCKED_STATUS:
        sleep(delay_s)


def fetch_with_lock_retry(
    session: requests.Session,
    url: str,
    settings: HttpSettings,
    logger: logging.Logger,
    *,
    referer: Optional[str] = None,
    delay_s: float = 2.0,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.time,
) -> Optional[bytes]:
    """Return the page body, or ``None`` once every attempt came back locked.

    Any other non-success status raises ``requests.HTTPError``.
    """
    headers = dict(UPGRADE_HEADERS)
    if referer:
        headers["Referer"] = referer

    for attempt in range(1, MAX_ATTEMPTS + 1):
        target = append_cache_buster(url, attempt, int(clock() * 1000))
        response = request(session, "GET", target, settings=settings, logger=logger, headers=headers)
        if response.status_code == LOCKED_STATUS:
            logger.warning("%s: locked (attempt %s/%s).", SOURCE_NAME, attempt, MAX_ATTEMPTS)
            if attempt < MAX_ATTEMPTS:
                sleep(delay_s)
            continue
        response.raise_for_status()
        return response.content
    return None


def _build_record(values, category: str, source: str) -> FundRecord:
    return FundRecord(
        source=source,
        category=category,
        fund_name=values.get("fund_name", ""),
        short_code=values.get("short_code", ""),
        nav=parse_decimal(values.get("nav")),
        total_net_assets=parse_decimal(values.get("total_net_assets")),
        offer_price=parse_decimal(values.get("offer_price")),
        bid_price=parse_decimal(values.get("bid_price")),
        change=parse_decimal(values.get("change")),
        change_percent=parse_percent(values.get("change_percent")),
        as_of_date=parse_locale_date(values.get("as_of_date")),
    )


def transform_talis_html(
    content: Union[str, bytes],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    soup = parse_html(content)
    tables = soup.find_all("table")
    if not tables:
        logger.warning("%s: no tables found.", source)
        return []

    records: List[FundRecord] = []
    for table in tables:
        header = header_row(table)
        if header is None:
            continue
        header_map = build_header_map(direct_cells(header, ("th", "td")), HEADER_LABELS)
        if not header_map:
            continue

        category = find_nearest_category(table, CATEGORY_KEYWORDS)
        for row in table.select("tbody > tr"):
            if row is header:
                continue
            cells = direct_cells(row, ("td", "th"))
            if not cells:
                continue
            try:
                values = read_row(cells, header_map)
                if not values.get("short_code") and not values.get("fund_name"):
                    continue
                records.append(_build_record(values, category, source))
            except Exception as exc:
                logger.warning("%s: skipping row %s: %s", source, clean_text(row), exc)
    return records


class TalisExtractor(Extractor):
    name = SOURCE_NAME
    url = TALIS_URL
    logger_name = "nav.talis"

    def __init__(
        self,
        settings: HttpSettings,
        *,
        lock_retry_delay_s: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        super().__init__(settings, session=session, logger=logger)
        self.lock_retry_delay_s = lock_retry_delay_s
        self._sleep = sleep
        self._clock = clock

    def fetch(self, session):
        prewarm(session, self.settings, self.logger, delay_s=self.lock_retry_delay_s, sleep=self._sleep)
        return fetch_with_lock_retry(
            session,
            self.url,
            self.settings,
            self.logger,
            referer=TALIS_REFERER,
            delay_s=self.lock_retry_delay_s,
            sleep=self._sleep,
            clock=self._clock,
        )

    def transform(self, raw) -> List[FundRecord]:
        return transform_talis_html(raw, self.logger, source=self.name)
