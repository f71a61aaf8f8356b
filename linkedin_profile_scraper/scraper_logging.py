import logging
from typing import Optional, Union

from .config import LOG_LEVEL


logger = logging.getLogger("linkedin_profile_scraper")

_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(debug: bool = False) -> None:
    """Attach a stream handler to the package logger once.

    Level comes from SCRAPER_LOG_LEVEL unless `debug` forces DEBUG.
    Playwright's own logger is kept at WARNING.
    """
    if logger.handlers:
        return
    level = logging.DEBUG if debug else LOG_LEVEL
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logging.getLogger("playwright").setLevel(logging.WARNING)


def format_status(section: str, message: str, session_id: Optional[Union[int, str]] = None) -> str:
    session_part = f" ({session_id})" if session_id else ""
    return f"Scraper ({section}){session_part}: {message}"


def status_log(
    section: str,
    message: str,
    session_id: Optional[Union[int, str]] = None,
    level: int = logging.INFO,
) -> None:
    """Log one progress line tagged with the pipeline section and run id.

    Lines read `Scraper (run) (1700000000000): Parsing data...` so a run
    can be followed through interleaved output.
    """
    logger.log(level, format_status(section, message, session_id))
