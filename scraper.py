#!/usr/bin/env python3
"""
LinkedIn Profile Scraper - CLI Standalone Version

A command-line tool to scrape a LinkedIn profile (identity, experience,
education, volunteering and skills) using an `li_at` session cookie.

Usage:
    python scraper.py <LINKEDIN_URL> [OPTIONS]

Example:
    LINKEDIN_SESSION_COOKIE_VALUE=AQED... python scraper.py https://www.linkedin.com/in/johndoe/
    python scraper.py https://www.linkedin.com/in/johndoe/ --cookie AQED... --headful --debug
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError

from linkedin_profile_scraper import LinkedInProfileScraper, ScraperError
from linkedin_profile_scraper.config import LINKEDIN_URL_MARKER
from linkedin_profile_scraper.scraper_logging import logger, setup_logging


async def scrape_profile(url: str, **options) -> dict:
    """Set up a scraper, scrape `url` once and return the JSON-ready result."""
    scraper = LinkedInProfileScraper(keep_alive=False, **options)
    await scraper.setup()
    result = await scraper.run(url)
    return result.model_dump(by_alias=True, mode="json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="LinkedIn Profile Scraper - Scrape a LinkedIn profile with a session cookie",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s https://www.linkedin.com/in/johndoe/
  %(prog)s https://www.linkedin.com/in/johndoe/ --cookie AQED... --debug
  %(prog)s https://www.linkedin.com/in/johndoe/ --headful --timeout 30000
        """
    )

    parser.add_argument(
        "url",
        help="LinkedIn profile URL to scrape (e.g., https://www.linkedin.com/in/username/)"
    )
    parser.add_argument(
        "--cookie",
        help="Value of the li_at session cookie (default: $LINKEDIN_SESSION_COOKIE_VALUE)"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="Timeout in milliseconds for launch, navigation and session check (default: 10000)"
    )
    parser.add_argument(
        "--headful",
        action="store_true",
        help="Show the browser window instead of running headless"
    )
    parser.add_argument(
        "--user-agent",
        help="Custom user agent sent with every request"
    )
    parser.add_argument(
        "--output",
        "-o",
        help="Output file path (JSON format). If not specified, prints to stdout"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)

    url = args.url
    if not url.startswith("http"):
        url = f"https://{url}"
    if LINKEDIN_URL_MARKER not in url:
        logger.error("URL must be a LinkedIn profile URL: %s", url)
        return 1

    try:
        result = asyncio.run(scrape_profile(
            url,
            session_cookie_value=args.cookie,
            timeout=args.timeout,
            headless=False if args.headful else None,
            user_agent=args.user_agent,
        ))
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    except (ScraperError, PlaywrightError) as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump(result, f, indent=2, ensure_ascii=False)
        logger.info("Results saved to: %s", args.output)
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
