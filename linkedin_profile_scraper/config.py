import os
from pathlib import Path
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel, to_snake

from .errors import ConfigurationError


LINKEDIN_BASE_URL = "https://www.linkedin.com"
LINKEDIN_LOGIN_URL = f"{LINKEDIN_BASE_URL}/login"
LINKEDIN_COOKIE_DOMAIN = ".www.linkedin.com"
LINKEDIN_URL_MARKER = "linkedin.com/"
SESSION_COOKIE_NAME = "li_at"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT_MS = 10000

BLOCKED_HOSTS_PATH = os.environ.get(
    "SCRAPER_BLOCKED_HOSTS_PATH",
    str(Path(__file__).with_name("blocked_hosts.txt")),
)
LOG_LEVEL = os.environ.get("SCRAPER_LOG_LEVEL", "INFO").upper()

_ERROR_PREFIX = "Error during setup."


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.lower() in ["1", "true", "yes"]


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def env_defaults() -> Dict[str, Any]:
    """Collect option defaults from the environment.

    Only variables that are actually set are returned, so the model's own
    defaults still apply for the rest.
    """
    defaults: Dict[str, Any] = {}
    cookie = os.environ.get("LINKEDIN_SESSION_COOKIE_VALUE")
    if cookie:
        defaults["session_cookie_value"] = cookie
    if "SCRAPER_KEEP_ALIVE" in os.environ:
        defaults["keep_alive"] = _env_flag("SCRAPER_KEEP_ALIVE", False)
    if "SCRAPER_HEADLESS" in os.environ:
        defaults["headless"] = _env_flag("SCRAPER_HEADLESS", True)
    if "SCRAPER_TIMEOUT_MS" in os.environ:
        defaults["timeout"] = _env_int("SCRAPER_TIMEOUT_MS", DEFAULT_TIMEOUT_MS)
    if os.environ.get("SCRAPER_USER_AGENT"):
        defaults["user_agent"] = os.environ["SCRAPER_USER_AGENT"]
    return defaults


class ScraperOptions(BaseModel):
    """Validated options for `LinkedInProfileScraper`.

    Types are strict: a string "true" is not a boolean and "5000" is not a
    timeout. Both snake_case and camelCase names are accepted.
    """
    model_config = ConfigDict(
        strict=True,
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    session_cookie_value: str
    keep_alive: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = Field(default=DEFAULT_TIMEOUT_MS, gt=0)
    headless: bool = True

    @field_validator("session_cookie_value")
    @classmethod
    def _cookie_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("is required")
        return value

    @classmethod
    def from_user_options(cls, **options: Any) -> "ScraperOptions":
        """Build options from keyword arguments layered over env defaults.

        Raises `ConfigurationError` naming the first offending option.
        """
        merged = env_defaults()
        # Explicit None means "use the default", same as leaving it out
        merged.update({to_snake(k): v for k, v in options.items() if v is not None})
        try:
            return cls(**merged)
        except ValidationError as exc:
            raise ConfigurationError(_describe(exc)) from exc

    def masked(self) -> Dict[str, Any]:
        """Options as a dict safe to log: the session cookie is masked."""
        data = self.model_dump(by_alias=True)
        cookie = data["sessionCookieValue"]
        data["sessionCookieValue"] = cookie[:4] + "***" if len(cookie) > 4 else "***"
        return data


def _describe(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = str(error["loc"][0]) if error["loc"] else "options"
    name = to_camel(field) if "_" in field else field
    kind = error["type"]
    if kind == "missing":
        return f'{_ERROR_PREFIX} Option "{name}" is required.'
    if kind == "extra_forbidden":
        return f'{_ERROR_PREFIX} Unknown option "{name}".'
    if kind == "value_error":
        return f'{_ERROR_PREFIX} Option "{name}" {error["ctx"]["error"]}.'
    expected = {
        "string_type": "a string",
        "bool_type": "a boolean",
        "float_type": "a number",
        "greater_than": "a positive number",
    }.get(kind)
    if expected:
        return f'{_ERROR_PREFIX} Option "{name}" needs to be {expected}.'
    return f'{_ERROR_PREFIX} Option "{name}": {error["msg"]}'
