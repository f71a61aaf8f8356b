class ScraperError(Exception):
    """Base class for every error raised by the profile scraper."""


class ConfigurationError(ScraperError, ValueError):
    """Raised when the scraper is constructed with invalid options."""


class InvalidProfileUrl(ScraperError, ValueError):
    """Raised when `run()` receives an empty or non-LinkedIn URL."""


class SetupError(ScraperError):
    """Raised when the browser or a page could not be created."""


class SessionExpired(ScraperError):
    """Raised when the `li_at` session cookie no longer logs us in.

    The only remedy is a fresh cookie value, so the message tells the
    caller how to get one.
    """


class NavigationTimeout(ScraperError):
    """Raised when a page does not settle within the configured timeout."""


class TeardownFailure(ScraperError):
    """Raised when the browser process tree could not be terminated."""
