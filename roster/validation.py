"""
Creation-form validation.

validate_student() returns human-readable errors in a fixed order: missing
fields first (in form order), then the birthday range, then the enrollment
year range. An empty list means the candidate can be sent to the API.
"""

from datetime import date

from roster.derived import parse_date, parse_year
from roster.models import FORM_FIELDS, Candidate

MIN_BIRTHDAY   = date(1900, 1, 1)
MIN_START_YEAR = 2000

REQUIRED_MESSAGES = {
    "surname":    "Фамилия обязательна для заполнения",
    "name":       "Имя обязательно для заполнения",
    "lastname":   "Отчество обязательно для заполнения",
    "birthday":   "Дата рождения обязательна для заполнения",
    "studyStart": "Год начала обучения обязателен для заполнения",
    "faculty":    "Факультет обязателен для заполнения",
}


def clean_candidate(raw: Candidate) -> Candidate:
    """Trim every form value to a string; dates become 'YYYY-MM-DD'."""
    cleaned: Candidate = {}
    for key in FORM_FIELDS:
        value = raw.get(key)
        if value is None:
            cleaned[key] = ""
        elif isinstance(value, date):
            cleaned[key] = value.isoformat()
        else:
            cleaned[key] = str(value).strip()
    return cleaned


def validate_student(candidate: Candidate, today: date | None = None) -> list[str]:
    today = today or date.today()
    student = clean_candidate(candidate)
    errors: list[str] = []

    for key in FORM_FIELDS:
        if not student[key]:
            errors.append(REQUIRED_MESSAGES[key])

    if student["birthday"]:
        born = parse_date(student["birthday"])
        if born is None:
            errors.append("Некорректная дата рождения")
        else:
            if born < MIN_BIRTHDAY:
                errors.append("Дата рождения не может быть раньше 01.01.1900")
            if born > today:
                errors.append("Дата рождения не может быть в будущем")

    if student["studyStart"]:
        start = parse_year(student["studyStart"])
        if start is None:
            errors.append("Год начала обучения должен быть числом")
        else:
            if start < MIN_START_YEAR:
                errors.append("Год начала обучения не может быть меньше 2000")
            if start > today.year:
                errors.append("Год начала обучения не может быть в будущем")

    return errors
