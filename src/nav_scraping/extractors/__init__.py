from typing import List, Optional

from ..core import Settings, load_settings
from .asset_plus import AssetPlusExtractor
from .base import Extractor
from .dao import DaoExtractor
from .kasset import KAssetExtractor
from .lh_fund import LHFundExtractor
from .mfc import MFCExtractor
from .talis import TalisExtractor


def build_extractors(settings: Optional[Settings] = None) -> List[Extractor]:
    """Every configured source, in registration order."""
    settings = settings or load_settings()
    http = settings.http
    return [
        TalisExtractor(http, lock_retry_delay_s=settings.scrape.lock_retry_delay_s),
        KAssetExtractor(http),
        AssetPlusExtractor(http),
        LHFundExtractor(http),
        MFCExtractor(http),
        DaoExtractor(http),
    ]


__all__ = [
    "Extractor",
    "AssetPlusExtractor",
    "DaoExtractor",
    "KAssetExtractor",
    "LHFundExtractor",
    "MFCExtractor",
    "TalisExtractor",
    "build_extractors",
]
