# CSS selectors for the LinkedIn profile page.
# LinkedIn changes its markup without notice; keep every selector here so a
# layout change is a one-file fix.

PROFILE_TOP_CARD = ".pv-top-card"
PROFILE_FULL_NAME = ".pv-top-card--list li:first-child"
PROFILE_TITLE = "h2"
PROFILE_LOCATION = ".pv-top-card--list.pv-top-card--list-bullet.mt1 li:first-child"
PROFILE_PHOTO = ".pv-top-card__photo"
PROFILE_PHOTO_EDIT = ".profile-photo-edit__preview"
# Lives outside the top card
PROFILE_DESCRIPTION = ".pv-about__summary-text .lt-line-clamp__raw-line"

EXPERIENCE_ITEMS = "#experience-section ul > .ember-view"
EDUCATION_ITEMS = "#education-section ul > .ember-view"
VOLUNTEERING_ITEMS = ".pv-profile-section.volunteering-section ul > li.ember-view"
SKILL_ITEMS = ".pv-skill-categories-section ol > .ember-view"

# Clicked at most once each, in this order
EXPAND_BUTTON_SELECTORS = [
    ".pv-profile-section.pv-about-section .lt-line-clamp__more",  # About
    "#experience-section .pv-profile-section__see-more-inline.link",  # Experience
    ".pv-profile-section.education-section button.pv-profile-section__see-more-inline",  # Education
    '.pv-skill-categories-section [data-control-name="skill_details"]',  # Skills
]

# Inline description expanders, every match is clicked
SEE_MORE_BUTTON_SELECTORS = [
    '.pv-entity__description .lt-line-clamp__line.lt-line-clamp__line--last .lt-line-clamp__more[href="#"]',
    '.lt-line-clamp__more[href="#"]:not(.lt-line-clamp__ellipsis--dummy)',
]
