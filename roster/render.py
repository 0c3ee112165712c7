"""
HTML projection of the roster.

Nothing here touches state: callers pass the already filtered/sorted list
and get markup back. All student values are escaped.
"""

from datetime import date
from html import escape

from roster.derived import calculate_age, format_birthday, get_study_info, parse_date
from roster.models import ASC, SortState, Student

COLUMNS = (
    ("fio",        "ФИО"),
    ("faculty",    "Факультет"),
    ("birthday",   "Дата рождения"),
    ("studyStart", "Годы обучения"),
)

EMPTY_ROW = '<tr><td colspan="5" style="text-align: center;">Студенты не найдены</td></tr>'


def sort_label(label: str, field: str, sort: SortState) -> str:
    """Header caption with ▼ (ascending) or ▲ (descending) on the active column."""
    if field != sort.field:
        return label
    return f"{label} {'▼' if sort.direction == ASC else '▲'}"


def render_header(sort: SortState) -> str:
    cells = "".join(
        f'<th data-sort="{field}">{escape(sort_label(label, field, sort))}</th>'
        for field, label in COLUMNS
    )
    return f"<tr>{cells}<th></th></tr>"


def render_row(student: Student, today: date | None = None) -> str:
    born = parse_date(student.birthday)
    if born is None:
        birthday_cell = escape(student.birthday)
    else:
        birthday_cell = f"{format_birthday(born)} ({calculate_age(born, today)} лет)"

    study = get_study_info(student.study_start, today)
    study_cell = escape(study.period)
    if study.course_info:
        study_cell += f" ({escape(study.course_info)})"

    return (
        "<tr>"
        f"<td>{escape(student.fio)}</td>"
        f"<td>{escape(student.faculty)}</td>"
        f"<td>{birthday_cell}</td>"
        f"<td>{study_cell}</td>"
        f'<td><button class="btn-danger" data-student-id="{escape(str(student.id))}">Удалить</button></td>'
        "</tr>"
    )


def render_rows(students: list[Student], today: date | None = None) -> str:
    """Table body markup; a single placeholder row when nothing matches."""
    if not students:
        return EMPTY_ROW
    return "\n".join(render_row(s, today) for s in students)


def render_table(students: list[Student], sort: SortState, today: date | None = None) -> str:
    return (
        '<table class="students-table">'
        f"<thead>{render_header(sort)}</thead>"
        f'<tbody id="studentsTableBody">{render_rows(students, today)}</tbody>'
        "</table>"
    )


def render_form_errors(errors: list[str]) -> str:
    """One <p> per error inside the form-errors container; empty string when valid."""
    if not errors:
        return ""
    body = "".join(f"<p>{escape(e)}</p>" for e in errors)
    return f'<div id="formErrors" class="show">{body}</div>'
