import logging
from typing import Awaitable, Callable, Mapping, Optional

from playwright.async_api import Browser, Page, Route
from playwright.async_api import Error as PlaywrightError

from .config import LINKEDIN_COOKIE_DOMAIN, SESSION_COOKIE_NAME, ScraperOptions
from .errors import SetupError
from .scraper_logging import status_log
from .utils import get_hostname


VIEWPORT = {"width": 1200, "height": 720}

# Never add "stylesheet" here: LinkedIn renders sections conditionally on
# computed styles and the profile comes back mostly empty without CSS.
BLOCKED_RESOURCE_TYPES = frozenset([
    "image",
    "media",
    "font",
    "texttrack",
    "object",
    "beacon",
    "csp_report",
    "imageset",
])
BLOCKED_BY_HOST_RESOURCE_TYPES = frozenset(["script", "xhr", "fetch", "document"])


def session_cookie(value: str) -> dict:
    """The `li_at` cookie in the shape `BrowserContext.add_cookies()` wants."""
    return {
        "name": SESSION_COOKIE_NAME,
        "value": value,
        "domain": LINKEDIN_COOKIE_DOMAIN,
        "path": "/",
        "httpOnly": True,
        "secure": True,
        "sameSite": "None",
    }


def should_block(resource_type: str, url: str, blocked_hosts: Mapping[str, bool]) -> bool:
    """Decide whether a request is aborted.

    Heavy resources are always dropped; scripts, XHR, fetches and
    documents only when their host is a known tracker.
    """
    if resource_type in BLOCKED_RESOURCE_TYPES:
        return True
    if resource_type in BLOCKED_BY_HOST_RESOURCE_TYPES:
        hostname = get_hostname(url)
        return bool(hostname and blocked_hosts.get(hostname) is True)
    return False


def make_request_blocker(blocked_hosts: Mapping[str, bool]) -> Callable[[Route], Awaitable[None]]:
    async def _handle(route: Route) -> None:
        request = route.request
        if should_block(request.resource_type, request.url, blocked_hosts):
            if request.resource_type in BLOCKED_BY_HOST_RESOURCE_TYPES:
                status_log(
                    "blocked script",
                    f"{request.resource_type}: {get_hostname(request.url)}: {request.url}",
                    level=logging.DEBUG,
                )
            await route.abort()
            return
        await route.continue_()

    return _handle


async def _close_other_pages(browser: Browser, keep: Page) -> None:
    for context in browser.contexts:
        for other in context.pages:
            if other is not keep:
                await other.close()


async def create_page(
    browser: Optional[Browser],
    options: ScraperOptions,
    blocked_hosts: Mapping[str, bool],
) -> Page:
    """Open a lightweight, authenticated page.

    Each page gets its own browser context (closed together with the page)
    carrying the user agent, a 1200x720 viewport, the request blocker and
    the `li_at` cookie. Any other open page is closed first so the
    browser never holds more than one idle tab.
    """
    section = "setup page"
    if browser is None:
        raise SetupError("Browser not set.")

    try:
        page = await browser.new_page(
            user_agent=options.user_agent,
            viewport=VIEWPORT,
            bypass_csp=True,
        )
        await _close_other_pages(browser, page)

        status_log(section, f"Blocking the following resources: {', '.join(sorted(BLOCKED_RESOURCE_TYPES))}")
        status_log(section, f"Should block scripts from {len(blocked_hosts)} unwanted hosts to speed up the crawling.")
        await page.route("**/*", make_request_blocker(blocked_hosts))

        await page.context.add_cookies([session_cookie(options.session_cookie_value)])
        status_log(section, "Session cookie set!")
    except PlaywrightError as e:
        status_log(section, f"An error occurred during page setup: {e}")
        raise SetupError(f"Could not create a page: {e}") from e

    status_log(section, "Done!")
    return page
