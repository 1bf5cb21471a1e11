from decimal import Decimal

import requests

from conftest import FakeSession, StaticExtractor
from nav_scraping.models import FundRecord
from nav_scraping.services import NavService


def _records(source, count):
    return [
        FundRecord(source=source, short_code=f"{source[:3].upper()}{i}", nav=Decimal(i))
        for i in range(count)
    ]


class ExplodingExtractor(StaticExtractor):
    def run(self):
        raise RuntimeError("run() should never raise")


def test_get_all_navs_keeps_registration_order():
    service = NavService(
        [
            StaticExtractor("Slow", _records("Slow", 2), delay=0.05),
            StaticExtractor("Fast", _records("Fast", 3)),
            StaticExtractor("Mid", _records("Mid", 1), delay=0.01),
        ]
    )

    records = service.get_all_navs()

    assert len(records) == 6
    assert [r.source for r in records] == ["Slow"] * 2 + ["Fast"] * 3 + ["Mid"]


def test_failing_sources_do_not_affect_others():
    service = NavService(
        [
            StaticExtractor("Broken", error=ValueError("layout changed")),
            StaticExtractor("Offline", error=requests.ConnectionError("refused")),
            ExplodingExtractor("Exploding"),
            StaticExtractor("Healthy", _records("Healthy", 2)),
        ],
        max_workers=2,
    )

    records = service.get_all_navs()

    assert [r.source for r in records] == ["Healthy", "Healthy"]


def test_no_content_is_empty():
    class NoContent(StaticExtractor):
        def fetch(self, session):
            return None

    assert NoContent("Empty").run() == []


def test_empty_registry():
    assert NavService([]).get_all_navs() == []


def test_source_summary_counts():
    service = NavService(
        [
            StaticExtractor("Alpha", _records("Alpha", 2)),
            StaticExtractor("Beta", error=requests.Timeout("slow")),
        ]
    )

    summary = service.get_source_summary()

    assert summary == [
        {"name": "Alpha", "url": "https://example.com/alpha", "records": 2},
        {"name": "Beta", "url": "https://example.com/beta", "records": 0},
    ]


def test_extractor_run_owns_and_closes_its_session():
    created = []

    class OwnSession(StaticExtractor):
        def new_session(self):
            session = FakeSession()
            created.append(session)
            return session

    extractor = OwnSession("Own", _records("Own", 1))
    extractor._session = None

    assert len(extractor.run()) == 1
    assert len(created) == 1
    assert created[0].closed is True
