import json
import logging
import time
from typing import Any, Mapping, Optional

from playwright.async_api import Browser, Error as PlaywrightError, Page, Playwright

from .blocklist import get_blocked_hosts
from .browser import get_browser_pid, kill_process_tree, launch_browser, process_tree
from .config import LINKEDIN_URL_MARKER, ScraperOptions
from .cookies_auth import check_if_logged_in
from .errors import InvalidProfileUrl, SetupError, TeardownFailure
from .extraction import extract_profile_data
from .models import ProfileScrapeResult
from .navigation import auto_scroll, expand_sections, navigate
from .normalize import normalize_profile_data
from .page import create_page
from .scraper_logging import logger, status_log


class LinkedInProfileScraper:
    """Scrape LinkedIn profiles with a known `li_at` session cookie.

    A session cookie is used instead of an e-mail and password because
    LinkedIn blocks or captchas logins from unknown locations, which makes
    password logins from servers unreliable.

    Usage::

        scraper = LinkedInProfileScraper(session_cookie_value="AQED...")
        await scraper.setup()
        result = await scraper.run("https://www.linkedin.com/in/someone/")

    With `keep_alive=True` the browser stays in memory between runs, which
    makes recurring scrapes faster at the cost of memory. Call `close()`
    when done.
    """

    def __init__(self, blocked_hosts: Optional[Mapping[str, bool]] = None, **options: Any):
        self.options = ScraperOptions.from_user_options(**options)
        self.blocked_hosts = blocked_hosts if blocked_hosts is not None else get_blocked_hosts()
        self.browser: Optional[Browser] = None
        self._playwright: Optional[Playwright] = None
        self._browser_pid: Optional[int] = None

        status_log("constructing", f"Using options: {json.dumps(self.options.masked())}")

    async def __aenter__(self) -> "LinkedInProfileScraper":
        await self.setup()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc is None:
            await self.close()
        else:
            await self._close_quietly()

    @property
    def is_running(self) -> bool:
        return self.browser is not None and self.browser.is_connected()

    async def setup(self) -> None:
        """Launch the browser and check the session cookie still works.

        Does nothing when a browser is already running. On any failure the
        partially started browser is torn down before the error propagates.
        """
        section = "setup"
        if self.browser is not None:
            status_log(section, "Browser already running, reusing it.")
            return

        try:
            mode = "background" if self.options.headless else "foreground"
            status_log(section, f"Launching the browser in the {mode}...")
            try:
                self._playwright, self.browser = await launch_browser(
                    headless=self.options.headless,
                    timeout_ms=self.options.timeout,
                )
            except PlaywrightError as e:
                raise SetupError(f"Could not launch the browser: {e}") from e
            self._browser_pid = await get_browser_pid(self.browser)
            status_log(section, f"Browser launched! (pid: {self._browser_pid})")

            await check_if_logged_in(self.browser, self.options, self.blocked_hosts)

            status_log(section, "Done!")
        except BaseException:
            # Includes cancellation and Ctrl-C
            status_log(section, "An error occurred during setup.")
            await self._close_quietly()
            raise

    async def close(self, page: Optional[Page] = None) -> None:
        """Close `page` (if given), then the browser, then kill its process tree.

        Safe to call at any time and more than once. Every step runs even if
        an earlier one failed. Only a browser process that survives the kill
        raises (`TeardownFailure`), after the remaining steps have run.
        """
        section = "close"
        failure: Optional[TeardownFailure] = None

        if page is not None:
            try:
                status_log(section, "Closing page...")
                await page.close()
                status_log(section, "Closed page!")
            except PlaywrightError as e:
                status_log(section, f"Could not close page: {e}", level=logging.WARNING)

        browser, pid, playwright = self.browser, self._browser_pid, self._playwright
        self.browser, self._browser_pid, self._playwright = None, None, None

        # Children are reparented once the browser exits; find them first
        procs = process_tree(pid) if pid is not None else []

        if browser is not None:
            try:
                status_log(section, "Closing browser...")
                await browser.close()
                status_log(section, "Closed browser!")
            except PlaywrightError as e:
                status_log(section, f"Graceful browser close failed: {e}")

        if pid is not None:
            try:
                status_log(section, f"Killing browser process pid: {pid}...")
                if await kill_process_tree(pid, procs):
                    status_log(section, f"Killed browser pid: {pid}")
            except TeardownFailure as e:
                failure = e

        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as e:
                status_log(section, f"Could not stop playwright: {e}")

        if failure is not None:
            raise failure

    async def _close_quietly(self, page: Optional[Page] = None) -> None:
        # Teardown after an error: the original error must win
        try:
            await self.close(page)
        except TeardownFailure as e:
            logger.warning("Teardown failed while handling another error: %s", e)

    async def run(self, profile_url: str) -> ProfileScrapeResult:
        """Scrape one profile.

        Requires `setup()`. Without `keep_alive` the browser is closed
        afterwards; with it only this run's page is. Any error closes the
        whole browser before it is re-raised.
        """
        section = "run"
        session_id = int(time.time() * 1000)

        if self.browser is None:
            raise SetupError("Browser is not set. Please run the setup method first.")
        if not profile_url:
            raise InvalidProfileUrl("No profileUrl given.")
        if LINKEDIN_URL_MARKER not in profile_url:
            raise InvalidProfileUrl("The given URL to scrape is not a linkedin.com url.")

        page: Optional[Page] = None
        try:
            page = await create_page(self.browser, self.options, self.blocked_hosts)

            status_log(section, f"Navigating to LinkedIn profile: {profile_url}", session_id)
            await navigate(page, profile_url, self.options.timeout)
            status_log(section, "LinkedIn profile page loaded!", session_id)

            status_log(
                section,
                "Getting all the LinkedIn profile data by scrolling the page to the bottom, "
                "so all the data gets loaded into the page...",
                session_id,
            )
            await auto_scroll(page)
            await expand_sections(page, session_id, click_timeout_ms=self.options.timeout)

            status_log(section, "Parsing profile data...", session_id)
            raw = await extract_profile_data(page)
            result = normalize_profile_data(raw)
            status_log(
                section,
                f"Got {len(result.experiences)} experiences, {len(result.education)} education, "
                f"{len(result.volunteer_experiences)} volunteer experiences, {len(result.skills)} skills",
                session_id,
            )
            status_log(section, f"Done! Returned profile details for: {profile_url}", session_id)

            if self.options.keep_alive:
                await page.close()
                status_log(section, "Done. The browser is being kept alive in memory.", session_id)
                return result
        except BaseException:
            status_log(section, "An error occurred during a run.", session_id)
            await self._close_quietly(page)
            raise

        status_log(section, "Not keeping the session alive.", session_id)
        await self.close(page)
        status_log(section, "Done. The browser is closed.", session_id)
        return result
