"""Scrape LinkedIn profiles with a session cookie.

The package is split into small modules (browser lifecycle, page setup,
session check, content loading, extraction, normalization) so that a
LinkedIn markup change only touches the module that reads the markup.
"""
from .errors import (
    ConfigurationError,
    InvalidProfileUrl,
    NavigationTimeout,
    ScraperError,
    SessionExpired,
    SetupError,
    TeardownFailure,
)
from .profile_scraper import LinkedInProfileScraper

__all__ = [
    "LinkedInProfileScraper",
    "ScraperError",
    "ConfigurationError",
    "InvalidProfileUrl",
    "SetupError",
    "SessionExpired",
    "NavigationTimeout",
    "TeardownFailure",
]
