import logging
import time
from pathlib import Path

import pytest
import requests

from nav_scraping.core import HttpSettings
from nav_scraping.extractors import Extractor

DATA_DIR = Path(__file__).resolve().parent / "data"


class FakeResponse:
    def __init__(self, status_code=200, content=b"", payload=None):
        self.status_code = status_code
        self.content = content
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Replays canned responses and records every call."""

    def __init__(self, responses=()):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        return self.responses.pop(0)

    def close(self):
        self.closed = True


class StaticExtractor(Extractor):
    """Extractor whose fetch returns fixed records, optionally after a delay or error."""

    def __init__(self, name, records=(), delay=0.0, error=None):
        super().__init__(
            HttpSettings(timeout_s=5, retries=0, backoff_factor=0.0, user_agent="test"),
            session=FakeSession(),
            logger=logging.getLogger("test.extractor"),
        )
        self.name = name
        self.url = f"https://example.com/{name.lower().replace(' ', '-')}"
        self.records = list(records)
        self.delay = delay
        self.error = error

    def fetch(self, session):
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.records

    def transform(self, raw):
        return list(raw)


@pytest.fixture
def http_settings():
    return HttpSettings(timeout_s=5, retries=0, backoff_factor=0.0, user_agent="test")


@pytest.fixture
def read_fixture():
    def _read(name):
        return (DATA_DIR / name).read_bytes()

    return _read
