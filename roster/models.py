"""
Roster data model.

Wire types (what the students API sends and receives) are pydantic models;
the client-side view state is plain dataclasses owned by one RosterState.

    Student        one record as returned by GET/POST /students
    StudentCreate  POST /students body
    Filters        filter inputs (fio, faculty, startYear, endYear)
    SortState      active sort column + direction
    RosterState    students + filters + sort + the derived filtered view
"""

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Raw form input keyed by form field name (surname, name, lastname,
# birthday, studyStart, faculty).
Candidate = dict[str, Any]

FORM_FIELDS = ("surname", "name", "lastname", "birthday", "studyStart", "faculty")
SORT_FIELDS = ("fio", "faculty", "birthday", "studyStart")

ASC  = "asc"
DESC = "desc"


# ---------------------------------------------------------------------------
# Wire types
# ---------------------------------------------------------------------------

class Student(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | int
    surname: str = ""
    name: str = ""
    lastname: str = ""
    birthday: str = ""
    study_start: str = Field(default="", alias="studyStart")
    faculty: str = ""

    @field_validator("study_start", mode="before")
    @classmethod
    def _year_as_text(cls, value: Any) -> str:
        # Servers send the year either as "2020" or 2020
        if value is None:
            return ""
        return str(value)

    @property
    def fio(self) -> str:
        return f"{self.surname} {self.name} {self.lastname}"


class StudentCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    surname: str
    name: str
    lastname: str
    birthday: str   # ISO timestamp, e.g. 2000-05-01T00:00:00.000Z
    study_start: str = Field(alias="studyStart")
    faculty: str

    def to_json(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# View state
# ---------------------------------------------------------------------------

@dataclass
class Filters:
    fio: str = ""
    faculty: str = ""
    start_year: str = ""
    end_year: str = ""


@dataclass
class SortState:
    field: str = "fio"
    direction: str = ASC


@dataclass
class RosterState:
    students: list[Student] = field(default_factory=list)
    filters: Filters = field(default_factory=Filters)
    sort: SortState = field(default_factory=SortState)
    filtered: list[Student] = field(default_factory=list)
