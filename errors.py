"""Exception types shared across the scraper."""
from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Required settings are missing or invalid; the process cannot start."""


class SearchError(RuntimeError):
    """The search API could not be reached or returned an unusable response."""


class StoreError(RuntimeError):
    """A read or write against the candidate store failed."""
