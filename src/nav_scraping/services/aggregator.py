from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional, Sequence, Tuple

from ..extractors import Extractor
from ..models import FundRecord

logger = logging.getLogger("nav.service")


class NavService:
    """Runs every extractor concurrently and concatenates their records.

    Results are merged only after all extractors have finished, in the order
    the extractors were registered.
    """

    def __init__(self, extractors: Sequence[Extractor], max_workers: Optional[int] = None) -> None:
        self.extractors = list(extractors)
        self.max_workers = max_workers or None

    @staticmethod
    def _run_one(extractor: Extractor) -> List[FundRecord]:
        try:
            return list(extractor.run())
        except Exception:
            logger.exception("%s: run() raised; treating as empty.", extractor.name)
            return []

    def collect(self) -> List[Tuple[Extractor, List[FundRecord]]]:
        if not self.extractors:
            return []
        workers = self.max_workers or len(self.extractors)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="nav") as executor:
            futures = [executor.submit(self._run_one, extractor) for extractor in self.extractors]
            results = [future.result() for future in futures]
        return list(zip(self.extractors, results))

    def get_all_navs(self) -> List[FundRecord]:
        combined: List[FundRecord] = []
        for extractor, records in self.collect():
            logger.info("%s contributed %s records.", extractor.name, len(records))
            combined.extend(records)
        logger.info("Aggregated %s records from %s sources.", len(combined), len(self.extractors))
        return combined

    def get_source_summary(self) -> List[Dict[str, object]]:
        return [
            {"name": extractor.name, "url": extractor.url, "records": len(records)}
            for extractor, records in self.collect()
        ]
