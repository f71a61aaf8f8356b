from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Base for every scraped record.

    Attributes are snake_case in Python and camelCase once serialized with
    `by_alias=True`, which is the shape clients of the scraper consume.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(Record):
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None


# Raw records: text exactly as found in the DOM, None when the element is absent.

class RawProfile(Record):
    full_name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[str] = None
    photo: Optional[str] = None
    description: Optional[str] = None
    url: str


class RawExperience(Record):
    title: Optional[str] = None
    company: Optional[str] = None
    employment_type: Optional[str] = None
    location: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    end_date_is_present: bool = False
    description: Optional[str] = None


class RawEducation(Record):
    school_name: Optional[str] = None
    degree_name: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


class RawVolunteerExperience(Record):
    title: Optional[str] = None
    organization: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    end_date_is_present: bool = False
    description: Optional[str] = None


class RawSkill(Record):
    skill_name: Optional[str] = None
    endorsement_count: int = 0


class RawProfileData(Record):
    """Everything extracted from one profile page, before normalization."""
    profile: RawProfile
    experiences: List[RawExperience] = []
    education: List[RawEducation] = []
    volunteer_experiences: List[RawVolunteerExperience] = []
    skills: List[RawSkill] = []


# Normalized records returned to callers.

class Profile(Record):
    full_name: Optional[str] = None
    title: Optional[str] = None
    location: Optional[Location] = None
    photo: Optional[str] = None
    description: Optional[str] = None
    url: str


class Experience(Record):
    title: Optional[str] = None
    company: Optional[str] = None
    employment_type: Optional[str] = None
    location: Optional[Location] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    end_date_is_present: bool = False
    duration_in_days: Optional[int] = None
    description: Optional[str] = None


class Education(Record):
    school_name: Optional[str] = None
    degree_name: Optional[str] = None
    field_of_study: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    duration_in_days: Optional[int] = None


class VolunteerExperience(Record):
    title: Optional[str] = None
    organization: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    end_date_is_present: bool = False
    duration_in_days: Optional[int] = None
    description: Optional[str] = None


class Skill(Record):
    skill_name: Optional[str] = None
    endorsement_count: int = 0


class ProfileScrapeResult(Record):
    """The output of one `run()`.

    `model_dump(by_alias=True, mode="json")` gives the public shape:
    `userProfile`, `experiences`, `education`, `volunteerExperiences`, `skills`.
    """
    user_profile: Profile
    experiences: List[Experience] = []
    education: List[Education] = []
    volunteer_experiences: List[VolunteerExperience] = []
    skills: List[Skill] = []


class ExpandAttempt(BaseModel):
    """Outcome of trying one "see more" control while loading content."""
    selector: str
    outcome: Literal["clicked", "skipped", "failed"]
    clicks: int = 0
    error: Optional[str] = None


class ProfileRequest(BaseModel):
    """Incoming request payload for the HTTP profile scraper endpoint.

    The session cookie may be omitted when the server has
    LINKEDIN_SESSION_COOKIE_VALUE set.
    """
    url: str
    session_cookie_value: Optional[str] = None
    timeout: Optional[float] = None
    headless: Optional[bool] = None
    debug: bool = False
