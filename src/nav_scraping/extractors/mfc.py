import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from ..core import request
from ..models import FundRecord
from .base import Extractor
from .normalizers import parse_decimal, parse_exact_date

SOURCE_NAME = "MFC Fund"
MFC_URL = "https://mfcfund.com/unit-value/"
MFC_API_URL = (
    "https://did-web.mfcfund.com/webservice_app/api/nav/GetNAV_FundType/Fund/Mobile%20App?_type=All"
)
DEFAULT_CATEGORY = "Mutual Fund"
DATE_FORMAT = "%d/%m/%Y"


def fetch_mfc_json(session, settings, logger: logging.Logger) -> bytes:
    # The endpoint only answers POST, even without a body.
    response = request(
        session,
        "POST",
        MFC_API_URL,
        settings=settings,
        logger=logger,
        data=b"",
        headers={"Content-Type": "application/json"},
    )
    response.raise_for_status()
    return response.content


def _number(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, str):
        return parse_decimal(value)
    return None


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def _build_record(item: Dict[str, Any], source: str) -> FundRecord:
    return FundRecord(
        source=source,
        category=DEFAULT_CATEGORY,
        fund_name=_text(item.get("FundNameTH")),
        short_code=_text(item.get("FundCode")),
        as_of_date=parse_exact_date(item.get("NAVDate"), DATE_FORMAT),
        nav=_number(item.get("NAV")),
        offer_price=_number(item.get("NAV_Buy")),
        bid_price=_number(item.get("NAV_Sell")),
        change=_number(item.get("NAV_Change")),
        change_percent=_number(item.get("NAV_Percent_Change")),
        total_net_assets=_number(item.get("Total_AssetSize")),
    )


def transform_mfc_json(
    content: Union[str, bytes],
    logger: logging.Logger,
    source: str = SOURCE_NAME,
) -> List[FundRecord]:
    try:
        payload = json.loads(content, parse_float=Decimal)
    except ValueError as exc:
        logger.error("%s: invalid JSON response: %s", source, exc)
        return []

    items = payload.get("NAVFund") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        logger.warning("%s: API returned no NAVFund list.", source)
        return []

    records: List[FundRecord] = []
    for item in items:
        try:
            records.append(_build_record(item, source))
        except Exception as exc:
            logger.warning("%s: skipping item %s: %s", source, item, exc)
    return records


class MFCExtractor(Extractor):
    name = SOURCE_NAME
    url = MFC_URL
    logger_name = "nav.mfc"

    def fetch(self, session):
        return fetch_mfc_json(session, self.settings, self.logger)

    def transform(self, raw) -> List[FundRecord]:
        return transform_mfc_json(raw, self.logger, source=self.name)
