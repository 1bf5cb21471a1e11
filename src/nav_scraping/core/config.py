from dataclasses import dataclass
import os
from pathlib import Path

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclass(frozen=True)
class HttpSettings:
    timeout_s: int
    retries: int
    backoff_factor: float
    user_agent: str


@dataclass(frozen=True)
class ScrapeSettings:
    max_workers: int
    lock_retry_delay_s: float


@dataclass(frozen=True)
class PathsSettings:
    export_dir: Path


@dataclass(frozen=True)
class Settings:
    http: HttpSettings
    scrape: ScrapeSettings
    paths: PathsSettings
    log_level: str
    api_url: str
    api_host: str = "0.0.0.0"
    api_port: int = 8000


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "")
    return int(value) if value else default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name, "")
    return float(value) if value else default


def load_settings() -> Settings:
    http = HttpSettings(
        timeout_s=_env_int("NAV_HTTP_TIMEOUT", 30),
        retries=_env_int("NAV_HTTP_RETRIES", 0),
        backoff_factor=_env_float("NAV_HTTP_BACKOFF", 0.5),
        user_agent=os.getenv("NAV_HTTP_USER_AGENT", DEFAULT_USER_AGENT),
    )
    scrape = ScrapeSettings(
        max_workers=_env_int("NAV_MAX_WORKERS", 0),
        lock_retry_delay_s=_env_float("NAV_LOCK_RETRY_DELAY", 2.0),
    )
    paths = PathsSettings(export_dir=Path(os.getenv("NAV_EXPORT_DIR", "exports")))
    return Settings(
        http=http,
        scrape=scrape,
        paths=paths,
        log_level=os.getenv("NAV_LOG_LEVEL", "INFO"),
        api_url=os.getenv("NAV_API_URL", "http://localhost:8000"),
        api_host=os.getenv("NAV_API_HOST", "0.0.0.0"),
        api_port=_env_int("NAV_API_PORT", 8000),
    )
