from datetime import date

import pytest

from linkedin_profile_scraper.utils import (
    format_date,
    get_clean_text,
    get_duration_in_days,
    get_hostname,
    get_location_from_text,
    parse_endorsement_count,
    split_date_range,
)


@pytest.mark.parametrize("text", [
    "  Software\n Engineer\t ",
    "Hello\x00World\r\n",
    "A great team player... See more",
    "See See more more",
    "See less\n\n...",
    "....  .. ...",
    "Île-de-France",
    "   ",
    None,
])
def test_clean_text_is_idempotent(text):
    once = get_clean_text(text)
    assert get_clean_text(once) == once


def test_clean_text_collapses_whitespace_and_control_chars():
    assert get_clean_text("  Senior\n  Engineer\t at\x07 ACME  ") == "Senior Engineer at ACME"


def test_clean_text_removes_expander_text():
    assert get_clean_text("A great team player... See more") == "A great team player"
    assert get_clean_text("Built things See less") == "Built things"


def test_clean_text_blank_is_none():
    assert get_clean_text("") is None
    assert get_clean_text(" \n\t ") is None
    assert get_clean_text("See more") is None


@pytest.mark.parametrize("text,expected", [
    ("Jan 2018", date(2018, 1, 1)),
    ("Mar 2019", date(2019, 3, 1)),
    ("September 2020", date(2020, 9, 1)),
    ("2014", date(2014, 1, 1)),
    (" Feb 2016 \n", date(2016, 2, 1)),
])
def test_format_date_parses_linkedin_dates(text, expected):
    assert format_date(text) == expected


@pytest.mark.parametrize("text", [None, "", "Present", "Mar", "not a date 12"])
def test_format_date_unparseable_is_none(text):
    assert format_date(text) is None


def test_duration_is_exact_day_difference():
    assert get_duration_in_days(date(2020, 1, 1), date(2020, 3, 1)) == 60
    assert get_duration_in_days(date(2018, 1, 1), date(2019, 3, 1)) == 424
    assert get_duration_in_days(date(2019, 5, 1), date(2019, 5, 1)) == 0


@pytest.mark.parametrize("start,end", [
    (date(2015, 1, 1), date(2015, 1, 2)),
    (date(2010, 6, 1), date(2021, 2, 1)),
    (date(2000, 2, 28), date(2000, 3, 1)),
])
def test_duration_matches_calendar_difference(start, end):
    assert get_duration_in_days(start, end) == (end - start).days


def test_duration_reversed_range_is_none():
    assert get_duration_in_days(date(2020, 3, 1), date(2020, 1, 1)) is None


def test_duration_missing_bound_is_none():
    assert get_duration_in_days(None, date(2020, 1, 1)) is None
    assert get_duration_in_days(date(2020, 1, 1), None) is None


def test_location_three_segments():
    location = get_location_from_text("Paris, Île-de-France, France")
    assert location.city == "Paris"
    assert location.province == "Île-de-France"
    assert location.country == "France"


def test_location_one_segment_is_country():
    location = get_location_from_text("France")
    assert (location.city, location.province, location.country) == (None, None, "France")


def test_location_two_segments_is_city_and_country():
    location = get_location_from_text("Paris, France")
    assert (location.city, location.province, location.country) == ("Paris", None, "France")


def test_location_more_segments_uses_last_as_country():
    location = get_location_from_text("Brooklyn, New York, NY, United States")
    assert (location.city, location.province, location.country) == ("Brooklyn", "New York", "United States")


def test_location_drops_area_suffix():
    location = get_location_from_text("Amsterdam Area, Netherlands")
    assert location.city == "Amsterdam Area"
    location = get_location_from_text("Greater Seattle Area")
    assert location.country == "Greater Seattle"


def test_location_blank_is_none():
    assert get_location_from_text(None) is None
    assert get_location_from_text("  ") is None
    assert get_location_from_text(" , ") is None


def test_split_date_range_present():
    assert split_date_range("Jan 2018 – Present") == {
        "start_date": "Jan 2018",
        "end_date": "Present",
        "end_date_is_present": True,
    }


def test_split_date_range_closed():
    assert split_date_range("Jan 2018 – Mar 2019") == {
        "start_date": "Jan 2018",
        "end_date": "Mar 2019",
        "end_date_is_present": False,
    }


def test_split_date_range_present_any_case():
    parts = split_date_range(" Jun 2020 –  PRESENT ")
    assert parts["end_date_is_present"] is True
    assert parts["end_date"] == "Present"
    assert parts["start_date"] == "Jun 2020"


def test_split_date_range_without_end():
    assert split_date_range("2018") == {
        "start_date": "2018",
        "end_date": None,
        "end_date_is_present": False,
    }
    assert split_date_range(None)["end_date"] is None


@pytest.mark.parametrize("text,expected", [
    ("12", 12),
    (" 99+ ", 99),
    ("1,024", 1024),
    ("abc", 0),
    ("", 0),
    (None, 0),
])
def test_parse_endorsement_count(text, expected):
    assert parse_endorsement_count(text) == expected


def test_get_hostname():
    assert get_hostname("https://www.google-analytics.com/analytics.js?x=1") == "www.google-analytics.com"
    assert get_hostname("data:image/png;base64,AAAA") is None
    assert get_hostname(None) is None
