from .config import HttpSettings, PathsSettings, ScrapeSettings, Settings, load_settings
from .http import create_session, request

__all__ = [
    "HttpSettings",
    "PathsSettings",
    "ScrapeSettings",
    "Settings",
    "load_settings",
    "create_session",
    "request",
]
