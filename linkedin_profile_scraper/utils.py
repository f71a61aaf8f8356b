import re
from datetime import date, datetime
from typing import Dict, Optional, Union
from urllib.parse import urlsplit

from dateutil import parser as date_parser

from .models import Location


PRESENT_SENTINEL = "Present"
DATE_RANGE_SEPARATOR = "–"  # en dash, as rendered in LinkedIn date ranges

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f-\x9f]")
_WHITESPACE = re.compile(r"\s+")
# Text of the expanders that leak into textContent
_UI_ARTEFACTS = re.compile(r"\.\.\.|\bSee more\b|\bSee less\b")
_YEAR = re.compile(r"\b\d{4}\b")
_LEADING_NUMBER = re.compile(r"\d[\d,.]*")
_DEFAULT_DAY = datetime(2000, 1, 1)


def get_clean_text(text: Optional[str]) -> Optional[str]:
    """Strip control characters, UI artefacts and redundant whitespace.

    Returns None for missing or blank text. Applying it twice gives the
    same result as applying it once.
    """
    if not text:
        return None
    clean = _WHITESPACE.sub(" ", _CONTROL_CHARS.sub(" ", text))
    while True:
        stripped = _WHITESPACE.sub(" ", _UI_ARTEFACTS.sub("", clean))
        if stripped == clean:
            break
        clean = stripped
    clean = clean.strip()
    return clean or None


def format_date(text: Optional[str]) -> Optional[date]:
    """Parse a LinkedIn date such as "Jan 2018", "March 2019" or "2014".

    Missing day or month fall back to the first one. Text without a year
    ("Present", "Mar") is not a date.
    """
    clean = get_clean_text(text)
    if not clean or not _YEAR.search(clean):
        return None
    try:
        return date_parser.parse(clean, default=_DEFAULT_DAY).date()
    except (ValueError, OverflowError):
        return None


def get_duration_in_days(start: Optional[date], end: Optional[date]) -> Optional[int]:
    """Whole days between two dates, or None when a bound is unknown or reversed."""
    if start is None or end is None:
        return None
    days = (end - start).days
    if days < 0:
        return None
    return days


def get_location_from_text(text: Optional[str]) -> Optional[Location]:
    """Decompose "City, Province, Country" style text.

    One segment is a country, two are city and country, three or more are
    city, province and (last) country.
    """
    clean = get_clean_text(text)
    if not clean:
        return None
    if clean.endswith(" Area"):
        clean = clean[: -len(" Area")]
    parts = [p.strip() for p in clean.split(",") if p.strip()]
    if not parts:
        return None
    if len(parts) == 1:
        return Location(country=parts[0])
    if len(parts) == 2:
        return Location(city=parts[0], country=parts[1])
    return Location(city=parts[0], province=parts[1], country=parts[-1])


def get_hostname(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def split_date_range(text: Optional[str]) -> Dict[str, Union[str, bool, None]]:
    """Split "Jan 2018 – Mar 2019" into start, end and the open-ended flag.

    An end of "present" (any case) gives end_date "Present" with the flag
    set; a range without an end part gives end_date None.
    """
    if not text:
        return {"start_date": None, "end_date": None, "end_date_is_present": False}
    start_part, _, end_part = text.partition(DATE_RANGE_SEPARATOR)
    start_date = start_part.strip() or None
    end_part = end_part.strip()
    end_date_is_present = end_part.lower() == PRESENT_SENTINEL.lower()
    if end_date_is_present:
        end_date = PRESENT_SENTINEL
    else:
        end_date = end_part or None
    return {
        "start_date": start_date,
        "end_date": end_date,
        "end_date_is_present": end_date_is_present,
    }


def parse_endorsement_count(text: Optional[str]) -> int:
    """Leading integer of an endorsement label ("12", "99+", "1,024"), else 0."""
    if not text:
        return 0
    match = _LEADING_NUMBER.search(text.strip())
    if not match:
        return 0
    digits = re.sub(r"[,.]", "", match.group(0))
    return int(digits) if digits else 0
