from typing import Mapping, Optional
from urllib.parse import urlsplit

from playwright.async_api import Browser

from .config import LINKEDIN_LOGIN_URL, ScraperOptions
from .errors import SessionExpired
from .navigation import navigate
from .page import create_page
from .scraper_logging import status_log


SESSION_EXPIRED_MESSAGE = (
    "Bad news, we are not logged in! Your session seems to be expired. "
    "Use your browser to login again with your LinkedIn credentials and extract "
    'the "li_at" cookie value for the "sessionCookieValue" option.'
)


def is_logged_in_url(url: str) -> bool:
    """LinkedIn redirects authenticated visitors away from /login.

    Staying on /login therefore means the cookie did not log us in.
    """
    path = urlsplit(url).path.rstrip("/")
    return not path.endswith("/login")


async def check_if_logged_in(
    browser: Optional[Browser],
    options: ScraperOptions,
    blocked_hosts: Mapping[str, bool],
) -> None:
    """Verify the session cookie by visiting the login page.

    Waits for network idle since the redirect happens after extra
    asynchronous calls. The verification page is always closed; raises
    `SessionExpired` when we are not logged in.
    """
    section = "checkIfLoggedIn"
    page = await create_page(browser, options, blocked_hosts)
    status_log(section, "Checking if we are still logged in...")
    try:
        await navigate(page, LINKEDIN_LOGIN_URL, options.timeout)
        url = page.url
    finally:
        await page.close()

    if not is_logged_in_url(url):
        status_log(section, SESSION_EXPIRED_MESSAGE)
        raise SessionExpired(SESSION_EXPIRED_MESSAGE)
    status_log(section, "All good. We are still logged in.")
