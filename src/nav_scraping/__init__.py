"""Daily NAV aggregation for Thai mutual funds."""

__version__ = "0.1.0"
