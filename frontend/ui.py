"""
Streamlit frontend for the student roster.

Talks to the students API at ROSTER_API_URL (default
http://localhost:3000/api) through one RosterController kept in the session
state, and shows the filtered/sorted table it renders.

Run:
    streamlit run frontend/ui.py
"""

import sys
from datetime import date
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path when run as a script (streamlit run frontend/ui.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from roster import config
from roster.client import StudentsAPI
from roster.controller import FILTER_INPUTS, MSG_CONFIRM_DELETE, RosterController
from roster.models import FORM_FIELDS
from roster.render import COLUMNS, sort_label

config.setup_logging()


class StreamlitNotifier:
    """Queues alerts in the session so they survive the rerun after a callback."""

    def error(self, message: str) -> None:
        st.session_state.alerts.append(("error", message))

    def success(self, message: str) -> None:
        st.session_state.alerts.append(("success", message))

    def confirm(self, message: str) -> bool:
        return bool(st.session_state.get("confirm_delete"))


def _controller() -> RosterController:
    if "controller" not in st.session_state:
        st.session_state.alerts = []
        controller = RosterController(StudentsAPI(config.API_URL), StreamlitNotifier())
        controller.load()
        st.session_state.controller = controller
    return st.session_state.controller


# ---------------------------------------------------------------------------
# Callbacks
# ---------------------------------------------------------------------------

def _submit() -> None:
    candidate = {key: st.session_state.get(key) for key in FORM_FIELDS}
    if _controller().create(candidate):
        for key in FORM_FIELDS:
            st.session_state.pop(key, None)


def _filter(input_id: str) -> None:
    _controller().set_filter(input_id, st.session_state.get(input_id, ""))


def _delete() -> None:
    student_id = st.session_state.get("delete_id")
    if student_id is None:
        return
    _controller().remove(student_id)
    st.session_state.pop("confirm_delete", None)


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

st.set_page_config(page_title="Студенты", layout="wide")
st.title("Список студентов")

controller = _controller()

for level, message in st.session_state.alerts:
    if level == "error":
        st.error(message)
    else:
        st.success(message)
st.session_state.alerts = []

st.subheader("Добавить студента")
with st.form("studentForm"):
    c1, c2, c3 = st.columns(3)
    c1.text_input("Фамилия", key="surname")
    c2.text_input("Имя", key="name")
    c3.text_input("Отчество", key="lastname")

    c1, c2, c3 = st.columns(3)
    c1.date_input(
        "Дата рождения",
        key="birthday",
        value=None,
        min_value=date(1800, 1, 1),
        max_value=date(2100, 12, 31),
        format="DD.MM.YYYY",
    )
    c2.text_input("Год начала обучения", key="studyStart")
    c3.text_input("Факультет", key="faculty")

    st.form_submit_button("Добавить", on_click=_submit)

if controller.form_errors:
    st.markdown(controller.form_errors_html(), unsafe_allow_html=True)

st.subheader("Фильтры")
labels = {
    "filterFio":       "ФИО",
    "filterFaculty":   "Факультет",
    "filterStartYear": "Год начала обучения",
    "filterEndYear":   "Год окончания обучения",
}
for column, input_id in zip(st.columns(len(FILTER_INPUTS)), FILTER_INPUTS):
    column.text_input(labels[input_id], key=input_id, on_change=_filter, args=(input_id,))

st.subheader("Студенты")
sort = controller.state.sort
for column, (field, label) in zip(st.columns(len(COLUMNS)), COLUMNS):
    column.button(
        sort_label(label, field, sort),
        key=f"sort_{field}",
        on_click=controller.handle_sort,
        args=(field,),
    )

st.markdown(controller.html, unsafe_allow_html=True)

if controller.state.filtered:
    names = {str(s.id): s.fio for s in controller.state.filtered}
    c1, c2, c3 = st.columns([3, 2, 1])
    c1.selectbox("Студент", list(names), key="delete_id", format_func=names.get)
    c2.checkbox(MSG_CONFIRM_DELETE, key="confirm_delete")
    c3.button("Удалить", type="primary", on_click=_delete)

st.button("Обновить", on_click=controller.load)
