"""Fixtures shared by the scraper tests.

No real browser is launched: `launch_browser`, `get_browser_pid`,
`process_tree` and `kill_process_tree` are replaced with fakes that record
what happened.
"""
from types import SimpleNamespace

import pytest

from fakes import FEED_URL, FakeBrowser, FakePage, FakePlaywright
from linkedin_profile_scraper import profile_scraper
from linkedin_profile_scraper.config import LINKEDIN_LOGIN_URL


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in [
        "LINKEDIN_SESSION_COOKIE_VALUE",
        "SCRAPER_KEEP_ALIVE",
        "SCRAPER_HEADLESS",
        "SCRAPER_TIMEOUT_MS",
        "SCRAPER_USER_AGENT",
    ]:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def logged_in_redirects():
    return {LINKEDIN_LOGIN_URL: FEED_URL}


@pytest.fixture
def fake_browser_env(monkeypatch, logged_in_redirects):
    """Patch the browser launcher; pages are built from `state.page_config`."""
    state = SimpleNamespace(
        launches=0,
        browsers=[],
        playwrights=[],
        killed=[],
        kill_error=None,
        launch_error=None,
        page_config={"redirects": dict(logged_in_redirects)},
    )

    async def fake_launch_browser(headless=True, timeout_ms=10000):
        if state.launch_error is not None:
            raise state.launch_error
        state.launches += 1
        playwright = FakePlaywright()
        browser = FakeBrowser(lambda: FakePage(**state.page_config))
        state.playwrights.append(playwright)
        state.browsers.append(browser)
        return playwright, browser

    async def fake_get_browser_pid(browser):
        return 4242

    def fake_process_tree(pid):
        return []

    async def fake_kill_process_tree(pid, procs=None):
        if state.kill_error is not None:
            raise state.kill_error
        state.killed.append(pid)
        return True

    monkeypatch.setattr(profile_scraper, "launch_browser", fake_launch_browser)
    monkeypatch.setattr(profile_scraper, "get_browser_pid", fake_get_browser_pid)
    monkeypatch.setattr(profile_scraper, "process_tree", fake_process_tree)
    monkeypatch.setattr(profile_scraper, "kill_process_tree", fake_kill_process_tree)
    return state
