from datetime import date

import pytest
from fastapi import Body, FastAPI, Response
from fastapi.responses import JSONResponse
from fastapi.testclient import TestClient

from roster.client import StudentsAPI
from roster.controller import RosterController
from roster.models import Student

TODAY = date(2025, 3, 15)


def make_fake_api() -> FastAPI:
    """In-memory students API with the same REST surface as the real one."""
    app = FastAPI()
    app.state.students = []
    app.state.next_id  = 1
    app.state.fail     = {}   # method → (status, body)

    def _failure(method: str):
        if method in app.state.fail:
            status, body = app.state.fail[method]
            return JSONResponse(status_code=status, content=body)
        return None

    @app.get("/api/students")
    def list_students():
        return _failure("get") or app.state.students

    @app.post("/api/students", status_code=201)
    def create_student(payload: dict = Body(...)):
        failed = _failure("post")
        if failed:
            return failed
        student = {"id": str(app.state.next_id), **payload}
        app.state.next_id += 1
        app.state.students.append(student)
        return student

    @app.delete("/api/students/{student_id}")
    def delete_student(student_id: str):
        failed = _failure("delete")
        if failed:
            return failed
        before = len(app.state.students)
        app.state.students = [s for s in app.state.students if s["id"] != student_id]
        if len(app.state.students) == before:
            return JSONResponse(status_code=404, content={"message": "Студент не найден"})
        return Response(status_code=204)

    return app


class FakeNotifier:
    def __init__(self, answer: bool = True):
        self.answer    = answer
        self.errors:    list[str] = []
        self.successes: list[str] = []
        self.confirms:  list[str] = []

    def error(self, message):
        self.errors.append(message)

    def success(self, message):
        self.successes.append(message)

    def confirm(self, message):
        self.confirms.append(message)
        return self.answer


def make_student(id, surname, name="Иван", lastname="Иванович",
                 birthday="2000-05-01T00:00:00.000Z", study_start="2020",
                 faculty="Физический") -> Student:
    return Student(
        id=id, surname=surname, name=name, lastname=lastname,
        birthday=birthday, studyStart=study_start, faculty=faculty,
    )


@pytest.fixture
def fake_api():
    return make_fake_api()


@pytest.fixture
def api(fake_api):
    return StudentsAPI(base_url="http://testserver/api", session=TestClient(fake_api))


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def controller(api, notifier):
    return RosterController(api, notifier, clock=lambda: TODAY)


@pytest.fixture
def students():
    return [
        make_student("1", "Петров", name="Пётр", birthday="1999-12-31T00:00:00.000Z",
                     study_start="2019", faculty="Математический"),
        make_student("2", "Иванов", birthday="2001-02-10T00:00:00.000Z",
                     study_start="2021", faculty="Физический"),
        make_student("3", "Сидорова", name="Анна", lastname="Сергеевна",
                     birthday="2000-05-01T00:00:00.000Z", study_start="2020",
                     faculty="Физико-технический"),
        make_student("4", "Иванов", birthday="2002-07-07T00:00:00.000Z",
                     study_start="2021", faculty="Химический"),
    ]
