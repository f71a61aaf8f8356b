from typing import List

from playwright.async_api import Page

from . import selectors
from .models import (
    RawEducation,
    RawExperience,
    RawProfile,
    RawProfileData,
    RawSkill,
    RawVolunteerExperience,
)
from .utils import parse_endorsement_count, split_date_range


# The scripts below run inside the page. They only read text and
# attributes, returning null for anything absent; cleanup and date
# parsing happen in Python afterwards.

_PROFILE_JS = """
(sel) => {
  const text = (root, selector) => root?.querySelector(selector)?.textContent || null;
  const card = document.querySelector(sel.topCard);
  const photo = card?.querySelector(sel.photo) || card?.querySelector(sel.photoEdit);
  return {
    fullName: text(card, sel.fullName),
    title: text(card, sel.title),
    location: text(card, sel.location),
    photo: photo?.getAttribute('src') || null,
    description: text(document, sel.description),
    url: window.location.href,
  };
}
"""

_EXPERIENCE_JS = """
(nodes) => nodes.map((node) => {
  const text = (selector) => node.querySelector(selector)?.textContent || null;
  // The secondary title holds the company with the employment type in a
  // nested span; read the company from a copy without that span.
  const secondary = node.querySelector('.pv-entity__secondary-title');
  let company = null;
  if (secondary) {
    const copy = secondary.cloneNode(true);
    copy.querySelector('span')?.remove();
    company = copy.textContent || null;
  }
  return {
    title: text('h3'),
    employmentType: text('span.pv-entity__secondary-title'),
    company,
    description: text('.pv-entity__description'),
    dateRange: text('.pv-entity__date-range span:nth-child(2)'),
    location: text('.pv-entity__location span:nth-child(2)'),
  };
})
"""

_EDUCATION_JS = """
(nodes) => nodes.map((node) => {
  const text = (selector) => node.querySelector(selector)?.textContent || null;
  const dates = node.querySelectorAll('.pv-entity__dates time');
  return {
    schoolName: text('h3.pv-entity__school-name'),
    degreeName: text('.pv-entity__degree-name .pv-entity__comma-item'),
    fieldOfStudy: text('.pv-entity__fos .pv-entity__comma-item'),
    startDate: dates[0]?.textContent || null,
    endDate: dates[1]?.textContent || null,
  };
})
"""

_VOLUNTEERING_JS = """
(nodes) => nodes.map((node) => {
  const text = (selector) => node.querySelector(selector)?.textContent || null;
  return {
    title: text('.pv-entity__summary-info h3'),
    organization: text('.pv-entity__summary-info span.pv-entity__secondary-title'),
    dateRange: text('.pv-entity__date-range span:nth-child(2)'),
    description: text('.pv-entity__description'),
  };
})
"""

_SKILLS_JS = """
(nodes) => nodes.map((node) => ({
  skillName: node.querySelector('.pv-skill-category-entity__name-text')?.textContent?.trim() || null,
  endorsementCount: node.querySelector('.pv-skill-category-entity__endorsement-count')?.textContent || null,
}))
"""


async def extract_profile(page: Page) -> RawProfile:
    data = await page.evaluate(_PROFILE_JS, {
        "topCard": selectors.PROFILE_TOP_CARD,
        "fullName": selectors.PROFILE_FULL_NAME,
        "title": selectors.PROFILE_TITLE,
        "location": selectors.PROFILE_LOCATION,
        "photo": selectors.PROFILE_PHOTO,
        "photoEdit": selectors.PROFILE_PHOTO_EDIT,
        "description": selectors.PROFILE_DESCRIPTION,
    })
    return RawProfile(**data)


async def extract_experiences(page: Page) -> List[RawExperience]:
    rows = await page.eval_on_selector_all(selectors.EXPERIENCE_ITEMS, _EXPERIENCE_JS)
    results: List[RawExperience] = []
    for row in rows:
        date_range = split_date_range(row.pop("dateRange", None))
        results.append(RawExperience(**row, **date_range))
    return results


async def extract_education(page: Page) -> List[RawEducation]:
    rows = await page.eval_on_selector_all(selectors.EDUCATION_ITEMS, _EDUCATION_JS)
    return [RawEducation(**row) for row in rows]


async def extract_volunteer_experiences(page: Page) -> List[RawVolunteerExperience]:
    rows = await page.eval_on_selector_all(selectors.VOLUNTEERING_ITEMS, _VOLUNTEERING_JS)
    results: List[RawVolunteerExperience] = []
    for row in rows:
        date_range = split_date_range(row.pop("dateRange", None))
        results.append(RawVolunteerExperience(**row, **date_range))
    return results


async def extract_skills(page: Page) -> List[RawSkill]:
    """Skills are the one section coerced here: the count becomes an int."""
    rows = await page.eval_on_selector_all(selectors.SKILL_ITEMS, _SKILLS_JS)
    return [
        RawSkill(
            skill_name=row.get("skillName"),
            endorsement_count=parse_endorsement_count(row.get("endorsementCount")),
        )
        for row in rows
    ]


async def extract_profile_data(page: Page) -> RawProfileData:
    """Run every section query against the loaded profile page."""
    return RawProfileData(
        profile=await extract_profile(page),
        experiences=await extract_experiences(page),
        education=await extract_education(page),
        volunteer_experiences=await extract_volunteer_experiences(page),
        skills=await extract_skills(page),
    )
