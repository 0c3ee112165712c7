"""
Derived fields shown in the roster table: age, study period and course.

Everything here is a pure function of its inputs; "today" defaults to the
local date but can be passed explicitly.
"""

import re
from datetime import date, datetime
from typing import NamedTuple

STUDY_YEARS = 4
SEPTEMBER   = 9   # academic year starts in September

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class StudyInfo(NamedTuple):
    period: str
    course_info: str


def parse_date(value: str | date | None) -> date | None:
    """Parse '2000-05-01' or an ISO timestamp ('2000-05-01T00:00:00.000Z') to a date."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = value.strip()
    if not text:
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_year(value: str | int | None) -> int | None:
    """Leading integer of value ('2020', ' 2020', 2020), or None if there is none."""
    if value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def to_iso_timestamp(day: date) -> str:
    """Normalised UTC midnight timestamp sent to the API."""
    return f"{day.isoformat()}T00:00:00.000Z"


def format_birthday(day: date) -> str:
    return f"{day.day:02d}.{day.month:02d}.{day.year}"


def calculate_age(birthday: str | date, today: date | None = None) -> int | None:
    born = parse_date(birthday)
    if born is None:
        return None
    today = today or date.today()
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))


def get_study_info(study_start: str | int, today: date | None = None) -> StudyInfo:
    """
    Study period and current course for an enrollment year.

    A student who started in 2020 studies 2020-2024. From September of the
    end year on they are reported as graduated; before that the course is
    the number of academic years begun so far.
    """
    start = parse_year(study_start)
    if start is None:
        return StudyInfo(period=str(study_start), course_info="")

    end = start + STUDY_YEARS
    today = today or date.today()
    new_year_started = today.month >= SEPTEMBER

    if today.year > end or (today.year == end and new_year_started):
        course_info = "закончил"
    else:
        course = today.year - start + (1 if new_year_started else 0)
        course_info = f"{course} курс"

    return StudyInfo(period=f"{start}-{end}", course_info=course_info)
