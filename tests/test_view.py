import itertools

import pytest

from roster.models import ASC, DESC, Filters, RosterState, SortState
from roster.view import apply_filters, matches, project, sort_students, toggle_sort
from conftest import make_student


def ids(students):
    return [s.id for s in students]


class TestFilters:
    """Each non-empty filter is an independent predicate; all must pass."""

    def test_no_filters_returns_everyone(self, students):
        assert ids(apply_filters(students, Filters())) == ["1", "2", "3", "4"]

    def test_fio_is_case_insensitive_substring(self, students):
        assert ids(apply_filters(students, Filters(fio="иванов иван"))) == ["2", "4"]
        assert ids(apply_filters(students, Filters(fio="АННА СЕРГ"))) == ["3"]

    def test_faculty_substring(self, students):
        assert ids(apply_filters(students, Filters(faculty="физ"))) == ["2", "3"]

    def test_start_year_exact(self, students):
        assert ids(apply_filters(students, Filters(start_year="2021"))) == ["2", "4"]
        assert ids(apply_filters(students, Filters(start_year="202"))) == []

    def test_end_year_is_start_plus_four(self, students):
        assert ids(apply_filters(students, Filters(end_year="2024"))) == ["3"]
        assert ids(apply_filters(students, Filters(end_year="2020"))) == []

    def test_numeric_study_start_from_server(self):
        """Test that a numeric studyStart matches the same as a string one."""
        student = make_student("9", "Ким", study_start=2022)
        assert matches(student, Filters(start_year="2022", end_year="2026"))

    def test_combined_filters(self, students):
        f = Filters(fio="иванов", faculty="хим", start_year="2021", end_year="2025")
        assert ids(apply_filters(students, f)) == ["4"]

    def test_result_is_subset_satisfying_every_predicate(self, students):
        """Test subset + predicate properties over a grid of filter values."""
        values = {
            "fio":        ["", "иван", "петров", "zzz"],
            "faculty":    ["", "физ", "мат"],
            "start_year": ["", "2019", "2021"],
            "end_year":   ["", "2025", "2024"],
        }
        for combo in itertools.product(*values.values()):
            f = Filters(**dict(zip(values, combo)))
            result = apply_filters(students, f)
            assert all(s in students for s in result)
            for s in result:
                if f.fio:
                    assert f.fio.lower() in s.fio.lower()
                if f.faculty:
                    assert f.faculty.lower() in s.faculty.lower()
                if f.start_year:
                    assert s.study_start == f.start_year
                if f.end_year:
                    assert int(s.study_start) + 4 == int(f.end_year)
            excluded = [s for s in students if s not in result]
            assert not any(matches(s, f) for s in excluded)


class TestSorting:
    def test_fio_ascending(self, students):
        assert ids(sort_students(students, SortState("fio", ASC))) == ["2", "4", "1", "3"]

    def test_fio_descending_keeps_ties_in_order(self, students):
        """Test that equal full names stay in their original relative order."""
        assert ids(sort_students(students, SortState("fio", DESC))) == ["3", "1", "2", "4"]

    def test_faculty(self, students):
        assert ids(sort_students(students, SortState("faculty", ASC))) == ["1", "3", "2", "4"]

    def test_birthday_is_chronological(self, students):
        assert ids(sort_students(students, SortState("birthday", ASC))) == ["1", "3", "2", "4"]
        assert ids(sort_students(students, SortState("birthday", DESC))) == ["4", "2", "3", "1"]

    def test_study_start_numeric(self):
        group = [
            make_student("a", "А", study_start="2021"),
            make_student("b", "Б", study_start=2009),
            make_student("c", "В", study_start="2021"),
        ]
        assert ids(sort_students(group, SortState("studyStart", ASC))) == ["b", "a", "c"]
        assert ids(sort_students(group, SortState("studyStart", DESC))) == ["a", "c", "b"]

    def test_unknown_field_keeps_order(self, students):
        assert ids(sort_students(students, SortState("nope", ASC))) == ["1", "2", "3", "4"]

    def test_does_not_mutate_input(self, students):
        sort_students(students, SortState("fio", DESC))
        assert ids(students) == ["1", "2", "3", "4"]


class TestToggleSort:
    def test_same_field_flips_direction(self):
        state = SortState("fio", ASC)
        state = toggle_sort(state, "fio")
        assert state == SortState("fio", DESC)
        state = toggle_sort(state, "fio")
        assert state == SortState("fio", ASC)

    def test_new_field_starts_ascending(self):
        assert toggle_sort(SortState("fio", DESC), "faculty") == SortState("faculty", ASC)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            toggle_sort(SortState(), "age")


class TestProject:
    def test_project_is_filter_then_sort(self, students):
        state = RosterState(
            students=students,
            filters=Filters(start_year="2021"),
            sort=SortState("birthday", DESC),
        )
        assert ids(project(state)) == ["4", "2"]
        assert ids(state.filtered) == ["4", "2"]
