from pathlib import Path

from nav_scraping.core import create_session, load_settings
from nav_scraping.core.config import DEFAULT_USER_AGENT
from nav_scraping.extractors import TalisExtractor, build_extractors
from nav_scraping.extractors.contracts import FUND_RECORD_SCHEMA, SOURCE_CONTRACTS_BY_NAME

ENV_VARS = (
    "NAV_HTTP_TIMEOUT",
    "NAV_HTTP_RETRIES",
    "NAV_HTTP_BACKOFF",
    "NAV_HTTP_USER_AGENT",
    "NAV_LOG_LEVEL",
    "NAV_MAX_WORKERS",
    "NAV_LOCK_RETRY_DELAY",
    "NAV_EXPORT_DIR",
    "NAV_API_URL",
    "NAV_API_HOST",
    "NAV_API_PORT",
)


def test_load_settings_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    settings = load_settings()

    assert settings.http.timeout_s == 30
    assert settings.http.retries == 0
    assert settings.http.user_agent == DEFAULT_USER_AGENT
    assert settings.scrape.max_workers == 0
    assert settings.scrape.lock_retry_delay_s == 2.0
    assert settings.paths.export_dir == Path("exports")
    assert settings.log_level == "INFO"
    assert settings.api_url == "http://localhost:8000"
    assert settings.api_host == "0.0.0.0"
    assert settings.api_port == 8000


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("NAV_HTTP_TIMEOUT", "10")
    monkeypatch.setenv("NAV_HTTP_RETRIES", "3")
    monkeypatch.setenv("NAV_HTTP_BACKOFF", "1.5")
    monkeypatch.setenv("NAV_MAX_WORKERS", "4")
    monkeypatch.setenv("NAV_LOCK_RETRY_DELAY", "0.25")
    monkeypatch.setenv("NAV_EXPORT_DIR", "/tmp/nav")
    monkeypatch.setenv("NAV_API_PORT", "9000")

    settings = load_settings()

    assert settings.http.timeout_s == 10
    assert settings.http.retries == 3
    assert settings.http.backoff_factor == 1.5
    assert settings.scrape.max_workers == 4
    assert settings.scrape.lock_retry_delay_s == 0.25
    assert settings.paths.export_dir == Path("/tmp/nav")
    assert settings.api_port == 9000


def test_create_session_applies_retry_and_user_agent(monkeypatch):
    monkeypatch.setenv("NAV_HTTP_RETRIES", "2")
    settings = load_settings()

    session = create_session(settings.http)

    assert session.headers["User-Agent"] == settings.http.user_agent
    assert session.get_adapter("https://example.com").max_retries.total == 2
    session.close()


def test_registry_order_and_contracts(monkeypatch):
    monkeypatch.setenv("NAV_LOCK_RETRY_DELAY", "0.5")

    extractors = build_extractors(load_settings())

    assert [e.name for e in extractors] == [
        "Talis AM",
        "Kasikorn Asset",
        "Asset Plus",
        "LH Fund",
        "MFC Fund",
        "Dao Investment",
    ]
    for extractor in extractors:
        assert SOURCE_CONTRACTS_BY_NAME[extractor.name].url == extractor.url
    assert isinstance(extractors[0], TalisExtractor)
    assert extractors[0].lock_retry_delay_s == 0.5


def test_export_schema_labels_are_unique():
    labels = [column.label for column in FUND_RECORD_SCHEMA.columns]
    assert len(labels) == len(set(labels)) == 11
