import pytest
from fastapi.testclient import TestClient

import app as app_module
from fakes import PROFILE_URL
from linkedin_profile_scraper import SessionExpired
from linkedin_profile_scraper.models import Profile, ProfileScrapeResult, Skill


RESULT = ProfileScrapeResult(
    user_profile=Profile(full_name="Jane Doe", url=PROFILE_URL),
    skills=[Skill(skill_name="Python", endorsement_count=12)],
)


class StubScraper:
    instances = []
    setup_error = None

    def __init__(self, **options):
        self.options = options
        self.ran = []
        StubScraper.instances.append(self)

    async def setup(self):
        if StubScraper.setup_error is not None:
            raise StubScraper.setup_error

    async def run(self, url):
        self.ran.append(url)
        return RESULT


@pytest.fixture
def client(monkeypatch):
    StubScraper.instances = []
    StubScraper.setup_error = None
    monkeypatch.setattr(app_module, "LinkedInProfileScraper", StubScraper)
    return TestClient(app_module.app)


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_scrape_returns_camel_case_profile(client):
    response = client.post("/scrape/linkedin", json={"url": PROFILE_URL, "session_cookie_value": "AQEDcookie"})
    body = response.json()

    assert response.status_code == 200
    assert body["found"] is True
    assert body["session_valid"] is True
    assert body["profile"]["userProfile"]["fullName"] == "Jane Doe"
    assert body["profile"]["skills"] == [{"skillName": "Python", "endorsementCount": 12}]
    assert body["debug"] == "LOGGED_IN | EXTRACTED"

    (scraper,) = StubScraper.instances
    assert scraper.options["keep_alive"] is False
    assert scraper.options["session_cookie_value"] == "AQEDcookie"
    assert scraper.ran == [PROFILE_URL]


def test_scrape_debug_lists_section_counts(client):
    response = client.post("/scrape/linkedin", json={"url": PROFILE_URL, "debug": True})
    assert response.json()["debug"].endswith("SECTIONS:0/0/0/1")


def test_scrape_rejects_non_linkedin_url(client):
    response = client.post("/scrape/linkedin", json={"url": "https://example.com/jane"})
    assert response.json() == {"url": "https://example.com/jane", "found": False, "error": "Invalid URL"}
    assert StubScraper.instances == []


def test_expired_session_is_reported(client):
    StubScraper.setup_error = SessionExpired("Bad news, we are not logged in!")
    response = client.post("/scrape/linkedin", json={"url": PROFILE_URL})
    body = response.json()

    assert body["found"] is False
    assert body["session_valid"] is False
    assert body["error_type"] == "SessionExpired"
    assert body["debug"] == "SESSIONEXPIRED"


def test_missing_cookie_is_config_error():
    # The real scraper: option validation fails before any browser work
    client = TestClient(app_module.app)
    response = client.post("/scrape/linkedin", json={"url": PROFILE_URL})
    body = response.json()

    assert body["error_type"] == "ConfigurationError"
    assert "sessionCookieValue" in body["error"]
    assert body["debug"] == "CONFIG_ERROR"
