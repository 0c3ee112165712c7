"""
Filtered / sorted projection of the roster.

The visible list is always recomputed in full from (students, filters, sort):

    apply_filters(students, filters)  → every student passing all active predicates
    sort_students(students, sort)     → stable sort on the active column
    project(state)                    → both, stored in state.filtered
"""

from collections.abc import Callable
from datetime import date
from typing import Any

from roster.derived import STUDY_YEARS, parse_date, parse_year
from roster.models import ASC, DESC, SORT_FIELDS, Filters, RosterState, SortState, Student


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------

def matches(student: Student, filters: Filters) -> bool:
    """True when the student passes every non-empty filter."""
    if filters.fio:
        if filters.fio.lower() not in student.fio.lower():
            return False

    if filters.faculty:
        if filters.faculty.lower() not in student.faculty.lower():
            return False

    if filters.start_year.strip():
        if student.study_start.strip() != filters.start_year.strip():
            return False

    if filters.end_year.strip():
        start = parse_year(student.study_start)
        if start is None or str(start + STUDY_YEARS) != filters.end_year.strip():
            return False

    return True


def apply_filters(students: list[Student], filters: Filters) -> list[Student]:
    return [s for s in students if matches(s, filters)]


# ---------------------------------------------------------------------------
# Sorting
# ---------------------------------------------------------------------------

def _birthday_key(student: Student) -> date:
    # Unparseable birthdays sort before everything else
    return parse_date(student.birthday) or date.min


def _year_key(student: Student) -> int:
    year = parse_year(student.study_start)
    return -1 if year is None else year


SORT_KEYS: dict[str, Callable[[Student], Any]] = {
    "fio":        lambda s: s.fio,
    "faculty":    lambda s: s.faculty,
    "birthday":   _birthday_key,
    "studyStart": _year_key,
}


def sort_students(students: list[Student], sort: SortState) -> list[Student]:
    """Stable sort; equal keys keep their relative order in both directions."""
    key = SORT_KEYS.get(sort.field)
    if key is None:
        return list(students)
    return sorted(students, key=key, reverse=(sort.direction == DESC))


def toggle_sort(current: SortState, field: str) -> SortState:
    """Same column flips the direction, a new column starts ascending."""
    if field not in SORT_FIELDS:
        raise ValueError(f"Unknown sort field: {field!r}")
    if current.field == field:
        return SortState(field=field, direction=DESC if current.direction == ASC else ASC)
    return SortState(field=field, direction=ASC)


def project(state: RosterState) -> list[Student]:
    state.filtered = sort_students(apply_filters(state.students, state.filters), state.sort)
    return state.filtered
