"""
Roster controller: the single top-level handle of the application.

Owns a RosterState, talks to the students API through StudentsAPI and to
the user through a Notifier (blocking alerts + yes/no confirmation). After
every mutation the filtered/sorted view is recomputed in full and the table
markup is re-rendered into `html`.

Every failure (validation, non-2xx, network) is handled here: logged and
shown to the user. The controller stays usable afterwards.
"""

import logging
from collections.abc import Callable
from datetime import date
from typing import Protocol

import requests

from roster.client import ApiError, StudentsAPI
from roster.derived import parse_date, to_iso_timestamp
from roster.models import Candidate, RosterState, Student, StudentCreate
from roster.render import render_form_errors, render_table
from roster.validation import clean_candidate, validate_student
from roster.view import project, toggle_sort

log = logging.getLogger(__name__)

# Filter input id → Filters attribute
FILTER_INPUTS = {
    "filterFio":       "fio",
    "filterFaculty":   "faculty",
    "filterStartYear": "start_year",
    "filterEndYear":   "end_year",
}

MSG_LOAD_FAILED    = "Не удалось загрузить данные с сервера"
MSG_CREATED        = "Студент успешно добавлен!"
MSG_CREATE_FAILED  = "Не удалось добавить студента: {}"
MSG_CREATE_GENERIC = "Ошибка при создании студента"
MSG_CONFIRM_DELETE = "Вы уверены, что хотите удалить этого студента?"
MSG_DELETED        = "Студент успешно удален!"
MSG_DELETE_FAILED  = "Не удалось удалить студента"


class Notifier(Protocol):
    def error(self, message: str) -> None: ...
    def success(self, message: str) -> None: ...
    def confirm(self, message: str) -> bool: ...


class RosterController:
    def __init__(
        self,
        api: StudentsAPI,
        notifier: Notifier,
        clock: Callable[[], date] = date.today,
    ):
        self.api         = api
        self.notifier    = notifier
        self.clock       = clock
        self.state       = RosterState()
        self.form_errors: list[str] = []
        self.html        = ""
        self.render()

    # ------------------------------------------------------------------
    # Network actions
    # ------------------------------------------------------------------

    def load(self) -> bool:
        """Replace the local list with the server's; keep it unchanged on failure."""
        try:
            students = self.api.list_students()
        except (ApiError, requests.RequestException) as exc:
            log.error("Loading students failed: %s", exc)
            self.notifier.error(MSG_LOAD_FAILED)
            return False

        log.info("Loaded %d students", len(students))
        self.state.students = students
        self.apply_filters()
        return True

    def validate(self, candidate: Candidate) -> list[str]:
        return validate_student(candidate, today=self.clock())

    def create(self, candidate: Candidate) -> bool:
        """
        Validate the form and POST it. Returns True when the student was
        created, which is the caller's cue to reset the form.
        """
        student = clean_candidate(candidate)
        errors = self.validate(student)
        if errors:
            self.form_errors = errors
            return False
        self.form_errors = []

        payload = StudentCreate(
            surname=student["surname"],
            name=student["name"],
            lastname=student["lastname"],
            birthday=to_iso_timestamp(parse_date(student["birthday"])),
            studyStart=student["studyStart"],
            faculty=student["faculty"],
        )

        try:
            created = self.api.create_student(payload)
        except ApiError as exc:
            log.error("Creating student failed: %s", exc)
            message = exc.message if exc.status >= 300 and exc.message else MSG_CREATE_GENERIC
            self.notifier.error(MSG_CREATE_FAILED.format(message))
            return False
        except requests.RequestException as exc:
            log.error("Creating student failed: %s", exc)
            self.notifier.error(MSG_CREATE_FAILED.format(exc))
            return False

        log.info("Created student id=%s", created.id)
        self.state.students.append(created)
        self.apply_filters()
        self.notifier.success(MSG_CREATED)
        return True

    def remove(self, student_id: str | int) -> bool:
        if not self.notifier.confirm(MSG_CONFIRM_DELETE):
            return False

        try:
            self.api.delete_student(student_id)
        except (ApiError, requests.RequestException) as exc:
            log.error("Deleting student %s failed: %s", student_id, exc)
            self.notifier.error(MSG_DELETE_FAILED)
            return False

        log.info("Deleted student id=%s", student_id)
        self.state.students = [s for s in self.state.students if str(s.id) != str(student_id)]
        self.apply_filters()
        self.notifier.success(MSG_DELETED)
        return True

    # ------------------------------------------------------------------
    # View state
    # ------------------------------------------------------------------

    def set_filter(self, input_id: str, value: str) -> list[Student]:
        setattr(self.state.filters, FILTER_INPUTS[input_id], value or "")
        return self.apply_filters()

    def apply_filters(self) -> list[Student]:
        project(self.state)
        self.render()
        return self.state.filtered

    def handle_sort(self, field: str) -> list[Student]:
        self.state.sort = toggle_sort(self.state.sort, field)
        return self.sort()

    def sort(self) -> list[Student]:
        # Re-derived from the full list so ties always follow load order
        return self.apply_filters()

    def find(self, student_id: str | int) -> Student | None:
        for student in self.state.students:
            if str(student.id) == str(student_id):
                return student
        return None

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        self.html = render_table(self.state.filtered, self.state.sort, today=self.clock())
        return self.html

    def form_errors_html(self) -> str:
        return render_form_errors(self.form_errors)
