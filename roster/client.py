"""
HTTP client for the students API.

    GET    {base}/students       → list[Student]
    POST   {base}/students       → created Student
    DELETE {base}/students/{id}  → status only

Non-2xx responses and unreadable bodies raise ApiError. Transport failures
(connection refused, timeouts) propagate as requests.RequestException.
"""

import logging
from typing import Any

import requests

from roster import config
from roster.models import Student, StudentCreate

log = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status: int, message: str | None = None):
        self.status  = status
        self.message = message
        super().__init__(message or f"HTTP {status}")


def _server_message(resp: Any) -> str | None:
    """The 'message' field of an error body, if the body is JSON and has one."""
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


class StudentsAPI:
    def __init__(
        self,
        base_url: str = config.API_URL,
        session: Any = None,
        timeout: float = config.REQUEST_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout  = timeout
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = "student-roster/1.0"
        self.session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _url(self, *parts: str) -> str:
        return "/".join([self.base_url, "students", *parts])

    @staticmethod
    def _check(resp: Any) -> None:
        if not 200 <= resp.status_code < 300:
            raise ApiError(resp.status_code, _server_message(resp))

    @staticmethod
    def _json(resp: Any) -> Any:
        try:
            return resp.json()
        except ValueError as exc:
            raise ApiError(resp.status_code, "Malformed JSON in response") from exc

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def list_students(self) -> list[Student]:
        resp = self.session.get(self._url(), timeout=self.timeout)
        self._check(resp)
        body = self._json(resp)
        if not isinstance(body, list):
            raise ApiError(resp.status_code, "Expected a list of students")
        try:
            return [Student.model_validate(item) for item in body]
        except ValueError as exc:
            raise ApiError(resp.status_code, "Malformed student record") from exc

    def create_student(self, payload: StudentCreate) -> Student:
        resp = self.session.post(self._url(), json=payload.to_json(), timeout=self.timeout)
        self._check(resp)
        body = self._json(resp)
        try:
            return Student.model_validate(body)
        except ValueError as exc:
            raise ApiError(resp.status_code, "Malformed student record") from exc

    def delete_student(self, student_id: str | int) -> None:
        resp = self.session.delete(self._url(str(student_id)), timeout=self.timeout)
        self._check(resp)
        log.debug("DELETE %s → %d", student_id, resp.status_code)
