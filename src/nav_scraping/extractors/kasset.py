"""Kasikorn Asset publishes its NAV table as JSON inside a hidden form field.

The ``hdnxx`` input carries an HTML-encoded JSON list of categories, each
with a ``table_fund`` list of raw items. The page gives today's and the
previous NAV, so change and percent change are computed here.
"""

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple, Union

from ..models import DEFAULT_CURRENCY, FundRecord
from .base import Extractor
from .html import fetch_page, parse_html
from .normalizers import parse_decimal, parse_exact_date

SOURCE_NAME = "Kasikorn Asset"
KASSET_URL = "https://www.kasikornasset.com/kasset/th/mutual-fund/investment-policy/Pages/index.aspx"
HIDDEN_INPUT_ID = "hdnxx"
DATE_FORMAT = "%d-%m-%Y"


def _plain_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return number if number.is_finite() else None


def compute_change(
    nav: Optional[Decimal], previous_nav: Optional[Decimal]
) -> Tuple[Decimal, Decimal]:
    """Return ``(change, change_percent)``; both are zero without a usable previous NAV."""
    if nav is None or previous_nav is None or previous_nav == 0:
        return Decimal(0), Decimal(0)
    change = nav - previous_nav
    return change, change / previous_nav * 100


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _build_record(item: Dict[str, Any], category: str, source: str) -> FundRecord:
    nav = _plain_decimal(item.get("R18_NAV"))
    previous_nav = _plain_decimal(item.get("R18_NAV_PAST"))
    change, change_percent = compute_change(nav, previous_nav)
    return FundRecord(
        source=source,
        category=category,
        fund_name=_text(item.get("FND_DSC_TH")),
        short_code=_text(item.get("FND_CD")),
        as_of_date=parse_exact_date(item.get("R18_NAV_DATE"), DATE_FORMAT),
        nav=nav,
        change=change,
        change_percent=change_percent,
        offer_price=parse_decimal(item.get("R18_NAV_OFFER")),
        bid_price=parse_decimal(item.get("R18_NAV_BID")),
        total_net_assets=parse_decimal(item.get("R18_TODAY_NET_ASSET")),
        currency=_text(item.get("Currency")) or DEFAULT_CURRENCY,
    )


def transform_kasset_payload(
    payload: List[Dict[str, Any]],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    logger.info("%s: %s categories.", source, len(payload))
    records: List[FundRecord] = []
    for group in payload:
        if not isinstance(group, dict):
            continue
        items = group.get("table_fund")
        if not items:
            continue
        category = _text(group.get("category_id"))
        for item in items:
            try:
                records.append(_build_record(item, category, source))
            except Exception as exc:
                logger.warning("%s: skipping item %s: %s", source, item, exc)
    return records


def extract_embedded_json(content: Union[str, bytes], logger: logging.Logger, source: str = SOURCE_NAME):
    soup = parse_html(content)
    hidden = soup.find(id=HIDDEN_INPUT_ID)
    if hidden is None:
        logger.warning("%s: hidden input %s not found.", source, HIDDEN_INPUT_ID)
        return None

    # The parser has already decoded the entities in the attribute value.
    value = (hidden.get("value") or "").strip()
    if not value:
        logger.warning("%s: hidden input %s is empty.", source, HIDDEN_INPUT_ID)
        return None

    try:
        payload = json.loads(value)
    except ValueError as exc:
        logger.error("%s: invalid embedded JSON: %s", source, exc)
        return None
    if not isinstance(payload, list):
        logger.warning("%s: unexpected JSON root %s.", source, type(payload).__name__)
        return None
    return payload


def transform_kasset_html(
    content: Union[str, bytes],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    payload = extract_embedded_json(content, logger, source)
    if payload is None:
        return []
    return transform_kasset_payload(payload, logger, source)


class KAssetExtractor(Extractor):
    name = SOURCE_NAME
    url = KASSET_URL
    logger_name = "nav.kasset"

    def fetch(self, session):
        return fetch_page(session, self.url, self.settings, self.logger)

    def transform(self, raw) -> List[FundRecord]:
        return transform_kasset_html(raw, self.logger, source=self.name)
