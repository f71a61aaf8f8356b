from fastapi import FastAPI
from playwright.async_api import Error as PlaywrightError

from linkedin_profile_scraper import ConfigurationError, LinkedInProfileScraper, ScraperError
from linkedin_profile_scraper.config import LINKEDIN_URL_MARKER
from linkedin_profile_scraper.models import ProfileRequest
from linkedin_profile_scraper.response import build_error, build_response
from linkedin_profile_scraper.scraper_logging import logger, setup_logging

setup_logging()

app = FastAPI()


@app.post("/scrape/linkedin")
async def scrape_linkedin(data: ProfileRequest):
    if not data.url or LINKEDIN_URL_MARKER not in data.url:
        return {"url": data.url, "found": False, "error": "Invalid URL"}

    debug_msg = []

    try:
        # One browser per request: nothing is shared between concurrent requests
        scraper = LinkedInProfileScraper(
            session_cookie_value=data.session_cookie_value,
            timeout=data.timeout,
            headless=data.headless,
            keep_alive=False,
        )
    except ConfigurationError as e:
        debug_msg.append("CONFIG_ERROR")
        return build_error(data, e, debug_msg)

    try:
        await scraper.setup()
        debug_msg.append("LOGGED_IN")
        result = await scraper.run(data.url)
        debug_msg.append("EXTRACTED")
    except (ScraperError, PlaywrightError) as e:
        logger.warning("Scrape of %s failed: %s", data.url, e)
        debug_msg.append(type(e).__name__.upper())
        return build_error(data, e, debug_msg)

    if data.debug:
        debug_msg.append(
            f"SECTIONS:{len(result.experiences)}/{len(result.education)}/"
            f"{len(result.volunteer_experiences)}/{len(result.skills)}"
        )
    return build_response(data, result, debug_msg)


@app.get("/health")
def health(): return {"status": "ok"}


if __name__ == "__main__":
    import os

    import uvicorn
    uvicorn.run(
        app,
        host=os.environ.get("SCRAPER_HOST", "127.0.0.1"),
        port=int(os.environ.get("SCRAPER_PORT", "8000")),
    )
