import json

import pytest
from playwright.async_api import Error as PlaywrightError

import scraper as cli
from fakes import PROFILE_URL
from linkedin_profile_scraper import SessionExpired


PROFILE_JSON = {"userProfile": {"fullName": "Jane Doe", "url": PROFILE_URL}, "skills": []}


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    async def fake_scrape_profile(url, **options):
        recorded.append((url, options))
        return PROFILE_JSON

    monkeypatch.setattr(cli, "scrape_profile", fake_scrape_profile)
    return recorded


def test_prints_json(calls, capsys):
    assert cli.main([PROFILE_URL, "--cookie", "AQEDcookie"]) == 0
    assert json.loads(capsys.readouterr().out) == PROFILE_JSON

    url, options = calls[0]
    assert url == PROFILE_URL
    assert options["session_cookie_value"] == "AQEDcookie"
    assert options["headless"] is None


def test_adds_scheme_and_passes_flags(calls):
    cli.main(["www.linkedin.com/in/jane-doe/", "--headful", "--timeout", "30000", "--user-agent", "UA/1.0"])
    url, options = calls[0]
    assert url == "https://www.linkedin.com/in/jane-doe/"
    assert options["headless"] is False
    assert options["timeout"] == 30000
    assert options["user_agent"] == "UA/1.0"


def test_writes_output_file(calls, tmp_path):
    output = tmp_path / "profile.json"
    assert cli.main([PROFILE_URL, "-o", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8")) == PROFILE_JSON


def test_rejects_non_linkedin_url(calls):
    assert cli.main(["https://example.com/jane"]) == 1
    assert calls == []


def test_scraper_errors_exit_non_zero(monkeypatch):
    async def expired(url, **options):
        raise SessionExpired("Bad news, we are not logged in!")

    monkeypatch.setattr(cli, "scrape_profile", expired)
    assert cli.main([PROFILE_URL]) == 1


def test_browser_errors_exit_non_zero(monkeypatch):
    async def connection_reset(url, **options):
        raise PlaywrightError("net::ERR_CONNECTION_RESET")

    monkeypatch.setattr(cli, "scrape_profile", connection_reset)
    assert cli.main([PROFILE_URL]) == 1
