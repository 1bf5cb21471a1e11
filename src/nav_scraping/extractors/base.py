import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional

import requests

from ..core import HttpSettings, create_session
from ..models import FundRecord


class Extractor(ABC):
    """Base contract for NAV sources.

    ``run`` is the only entry point callers use. It never raises: transport
    and structural failures are logged and turn into an empty list.
    """

    name: str
    url: str
    logger_name: str = "nav.extractor"

    def __init__(
        self,
        settings: HttpSettings,
        *,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings
        self._session = session
        self.logger = logger or logging.getLogger(self.logger_name)

    @abstractmethod
    def fetch(self, session: requests.Session) -> Any:
        """Fetch the raw payload. ``None`` means the source gave no content."""

    @abstractmethod
    def transform(self, raw: Any) -> List[FundRecord]:
        """Normalize the raw payload into records."""

    def new_session(self) -> requests.Session:
        return create_session(self.settings)

    def run(self) -> List[FundRecord]:
        owns_session = self._session is None
        session = self.new_session() if owns_session else self._session
        try:
            raw = self.fetch(session)
            if raw is None:
                self.logger.warning("%s: no content received.", self.name)
                return []
            records = self.transform(raw)
        except Exception:
            self.logger.exception("%s: extraction failed.", self.name)
            return []
        finally:
            if owns_session:
                session.close()

        self.logger.info("%s: %s records.", self.name, len(records))
        return records
