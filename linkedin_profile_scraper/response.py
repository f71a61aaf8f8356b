from typing import Any, Dict, List

from .errors import SessionExpired
from .models import ProfileRequest, ProfileScrapeResult


def build_response(
    req: ProfileRequest,
    result: ProfileScrapeResult,
    debug_msgs: List[str],
) -> Dict[str, Any]:
    """Compose the public API response for a scraped profile.

    `found` is true when the page yielded at least a name or one section
    entry; the profile itself is always the camelCase serialization.
    """
    profile = result.model_dump(by_alias=True, mode="json")
    found = bool(
        result.user_profile.full_name
        or result.experiences
        or result.education
        or result.volunteer_experiences
        or result.skills
    )
    return {
        "url": req.url,
        "found": found,
        "profile": profile,
        "session_valid": True,
        "debug": " | ".join(debug_msgs),
    }


def build_error(req: ProfileRequest, error: Exception, debug_msgs: List[str]) -> Dict[str, Any]:
    """Build a consistent error response naming the error class."""
    return {
        "url": req.url,
        "found": False,
        "error": str(error),
        "error_type": type(error).__name__,
        "session_valid": not isinstance(error, SessionExpired),
        "debug": " | ".join(debug_msgs),
    }
