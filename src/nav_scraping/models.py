"""Unified record shape shared by every NAV source."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional

DEFAULT_CURRENCY = "THB"


@dataclass(frozen=True)
class FundRecord:
    source: str
    category: str = ""
    fund_name: str = ""
    short_code: str = ""
    nav: Optional[Decimal] = None
    total_net_assets: Optional[Decimal] = None
    offer_price: Optional[Decimal] = None
    bid_price: Optional[Decimal] = None
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    as_of_date: Optional[date] = None
    currency: str = DEFAULT_CURRENCY

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
