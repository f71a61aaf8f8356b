from datetime import date
from typing import Optional

from .models import (
    Education,
    Experience,
    Profile,
    ProfileScrapeResult,
    RawEducation,
    RawExperience,
    RawProfile,
    RawProfileData,
    RawSkill,
    RawVolunteerExperience,
    Skill,
    VolunteerExperience,
)
from .utils import format_date, get_clean_text, get_duration_in_days, get_location_from_text


def _range_duration(start: Optional[date], end: Optional[date], end_is_present: bool) -> Optional[int]:
    """Days covered by a range; open-ended ranges run until today."""
    if end_is_present:
        return get_duration_in_days(start, date.today())
    return get_duration_in_days(start, end)


def normalize_profile(raw: RawProfile) -> Profile:
    return Profile(
        full_name=get_clean_text(raw.full_name),
        title=get_clean_text(raw.title),
        location=get_location_from_text(raw.location),
        photo=raw.photo,
        description=get_clean_text(raw.description),
        url=raw.url,
    )


def normalize_experience(raw: RawExperience) -> Experience:
    start_date = format_date(raw.start_date)
    end_date = None if raw.end_date_is_present else format_date(raw.end_date)
    return Experience(
        title=get_clean_text(raw.title),
        company=get_clean_text(raw.company),
        employment_type=get_clean_text(raw.employment_type),
        location=get_location_from_text(raw.location),
        start_date=start_date,
        end_date=end_date,
        end_date_is_present=raw.end_date_is_present,
        duration_in_days=_range_duration(start_date, end_date, raw.end_date_is_present),
        description=get_clean_text(raw.description),
    )


def normalize_education(raw: RawEducation) -> Education:
    start_date = format_date(raw.start_date)
    end_date = format_date(raw.end_date)
    return Education(
        school_name=get_clean_text(raw.school_name),
        degree_name=get_clean_text(raw.degree_name),
        field_of_study=get_clean_text(raw.field_of_study),
        start_date=start_date,
        end_date=end_date,
        duration_in_days=get_duration_in_days(start_date, end_date),
    )


def normalize_volunteer_experience(raw: RawVolunteerExperience) -> VolunteerExperience:
    start_date = format_date(raw.start_date)
    end_date = None if raw.end_date_is_present else format_date(raw.end_date)
    return VolunteerExperience(
        title=get_clean_text(raw.title),
        organization=get_clean_text(raw.organization),
        start_date=start_date,
        end_date=end_date,
        end_date_is_present=raw.end_date_is_present,
        duration_in_days=_range_duration(start_date, end_date, raw.end_date_is_present),
        description=get_clean_text(raw.description),
    )


def normalize_skill(raw: RawSkill) -> Skill:
    return Skill(
        skill_name=get_clean_text(raw.skill_name),
        endorsement_count=raw.endorsement_count,
    )


def normalize_profile_data(raw: RawProfileData) -> ProfileScrapeResult:
    """Map one run's raw records onto the public output schema."""
    return ProfileScrapeResult(
        user_profile=normalize_profile(raw.profile),
        experiences=[normalize_experience(e) for e in raw.experiences],
        education=[normalize_education(e) for e in raw.education],
        volunteer_experiences=[normalize_volunteer_experience(v) for v in raw.volunteer_experiences],
        skills=[normalize_skill(s) for s in raw.skills],
    )
