from typing import List, Optional, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .errors import NavigationTimeout
from .models import ExpandAttempt
from .scraper_logging import status_log
from .selectors import EXPAND_BUTTON_SELECTORS, SEE_MORE_BUTTON_SELECTORS


SCROLL_DISTANCE_PX = 500
SCROLL_INTERVAL_MS = 100
# Below this, clicks race LinkedIn's re-render and hit detached nodes
EXPAND_SETTLE_MS = 100
CLICK_TIMEOUT_MS = 5000

_AUTO_SCROLL_JS = """
([distance, interval]) => new Promise((resolve) => {
  let totalHeight = 0;
  const timer = setInterval(() => {
    const scrollHeight = document.body.scrollHeight;
    window.scrollBy(0, distance);
    totalHeight += distance;
    if (totalHeight >= scrollHeight) {
      clearInterval(timer);
      resolve(totalHeight);
    }
  }, interval);
})
"""


async def navigate(page: Page, url: str, timeout_ms: float) -> None:
    """Go to `url` and wait until the network is idle.

    `domcontentloaded` is not enough on LinkedIn: sections render after
    further XHRs and would come back empty.
    """
    try:
        await page.goto(url, timeout=timeout_ms, wait_until="networkidle")
    except PlaywrightTimeoutError as e:
        raise NavigationTimeout(f"Navigation to {url} did not settle within {timeout_ms:g} ms") from e


async def auto_scroll(
    page: Page,
    distance: int = SCROLL_DISTANCE_PX,
    interval_ms: int = SCROLL_INTERVAL_MS,
) -> int:
    """Scroll to the bottom in fixed steps so lazy sections load.

    The scroll height is read again on every tick, so content appended
    while scrolling extends the walk. Returns the distance scrolled.
    """
    return await page.evaluate(_AUTO_SCROLL_JS, [distance, interval_ms])


async def _click_once(page: Page, selector: str, timeout_ms: float) -> ExpandAttempt:
    try:
        button = await page.query_selector(selector)
        if button is None:
            return ExpandAttempt(selector=selector, outcome="skipped")
        await button.click(timeout=timeout_ms)
    except PlaywrightError as e:
        return ExpandAttempt(selector=selector, outcome="failed", error=str(e))
    return ExpandAttempt(selector=selector, outcome="clicked", clicks=1)


async def _click_all(page: Page, selector: str, timeout_ms: float) -> ExpandAttempt:
    try:
        buttons = await page.query_selector_all(selector)
    except PlaywrightError as e:
        return ExpandAttempt(selector=selector, outcome="failed", error=str(e))
    if not buttons:
        return ExpandAttempt(selector=selector, outcome="skipped")

    clicks = 0
    last_error: Optional[str] = None
    for button in buttons:
        try:
            await button.click(timeout=timeout_ms)
            clicks += 1
        except PlaywrightError as e:
            last_error = str(e)
    outcome = "clicked" if clicks else "failed"
    return ExpandAttempt(selector=selector, outcome=outcome, clicks=clicks, error=last_error)


async def expand_sections(
    page: Page,
    session_id: Optional[Union[int, str]] = None,
    settle_ms: int = EXPAND_SETTLE_MS,
    click_timeout_ms: float = CLICK_TIMEOUT_MS,
) -> List[ExpandAttempt]:
    """Click the "see more" controls so collapsed content is in the DOM.

    Every control is a separate best-effort attempt: a missing or
    unclickable control is recorded and the rest still run.
    """
    section = "run"
    attempts: List[ExpandAttempt] = []

    status_log(section, 'Expanding all sections by clicking their "See more" buttons', session_id)
    for selector in EXPAND_BUTTON_SELECTORS:
        attempt = await _click_once(page, selector, click_timeout_ms)
        attempts.append(attempt)
        if attempt.outcome == "clicked":
            status_log(section, f"Clicked button {selector}", session_id)
        elif attempt.outcome == "failed":
            status_log(section, f'Could not click expand button selector "{selector}". So we skip that one.', session_id)

    await page.wait_for_timeout(settle_ms)

    status_log(section, 'Expanding all descriptions by clicking their "See more" buttons', session_id)
    for selector in SEE_MORE_BUTTON_SELECTORS:
        attempt = await _click_all(page, selector, click_timeout_ms)
        attempts.append(attempt)
        if attempt.clicks:
            status_log(section, f"Clicked {attempt.clicks} button(s) {selector}", session_id)
        if attempt.error:
            status_log(section, f'Could not click some see more buttons "{selector}": {attempt.error}', session_id)

    return attempts
