from __future__ import annotations

from datetime import datetime, timezone

import pytest

from workforce_analytics.core.enums import Role, SortDirection, TaskStatus
from workforce_analytics.core.exceptions import ValidationError
from workforce_analytics.projection.projector import (
    ProjectionQuery,
    Projector,
    employee_directory_query,
    task_board_query,
    toggle_direction,
)
from workforce_analytics.records.model import Task


def _rows():
    return [
        {"name": "Ana", "hours": 8.0, "branch": "North"},
        {"name": "Ben", "hours": 5.5, "branch": "South"},
        {"name": "Cleo", "hours": 8.0, "branch": "North"},
        {"name": "Dan", "hours": 12.0, "branch": "East"},
        {"name": "Eve", "hours": 5.5, "branch": "South"},
    ]


def _names(rows):
    return [r["name"] for r in rows]


def test_numeric_sort_is_stable_in_both_directions():
    rows = _rows()

    asc = Projector.sort(rows, "hours", "asc")
    desc = Projector.sort(rows, "hours", "desc")

    assert _names(asc) == ["Ben", "Eve", "Ana", "Cleo", "Dan"]
    assert _names(desc) == ["Dan", "Ana", "Cleo", "Ben", "Eve"]


def test_desc_is_reverse_of_asc_without_ties():
    rows = [{"name": n, "hours": h} for n, h in [("a", 3), ("b", 1), ("c", 2)]]

    asc = Projector.sort(rows, "hours", SortDirection.ASC)
    desc = Projector.sort(rows, "hours", SortDirection.DESC)

    assert desc == list(reversed(asc))


def test_numeric_fields_compare_numerically():
    rows = [{"n": 10}, {"n": 9}, {"n": 100}]

    assert [r["n"] for r in Projector.sort(rows, "n")] == [9, 10, 100]


def test_missing_values_sort_last():
    rows = [{"name": "a", "when": None}, {"name": "b", "when": 2}, {"name": "c", "when": 1}]

    assert _names(Projector.sort(rows, "when", "asc")) == ["c", "b", "a"]
    assert _names(Projector.sort(rows, "when", "desc")) == ["b", "c", "a"]


def test_bad_direction_raises():
    with pytest.raises(ValidationError):
        Projector.sort(_rows(), "hours", "sideways")


def test_search_is_case_insensitive_across_fields():
    projector = Projector()
    query = ProjectionQuery(search="noR", search_fields=("name", "branch"))

    assert _names(projector.filter(_rows(), query)) == ["Ana", "Cleo"]


def test_filters_ignore_all_and_none():
    projector = Projector()

    assert len(projector.filter(_rows(), ProjectionQuery(filters={"branch": "all", "name": None}))) == 5
    assert _names(projector.filter(_rows(), ProjectionQuery(filters={"branch": "South"}))) == ["Ben", "Eve"]


def test_pagination_clamps_out_of_range_pages():
    rows = [{"i": i} for i in range(23)]
    projector = Projector(page_size=10)

    first = projector.paginate(rows, 1)
    zero = projector.paginate(rows, 0)
    last = projector.paginate(rows, 3)
    beyond = projector.paginate(rows, 99)

    assert first.total_pages == 3
    assert zero == first
    assert beyond == last
    assert len(last.items) == 3
    assert {p.total_items for p in (first, zero, last, beyond)} == {23}


def test_empty_result_is_page_one_of_zero():
    page = Projector().paginate([], 5)

    assert page.page == 1
    assert page.total_pages == 0
    assert page.items == ()


def test_page_size_must_be_positive():
    with pytest.raises(ValidationError):
        Projector(page_size=0)


def test_employee_directory_query(make_profile):
    users = [
        make_profile("1", "Ana", branch="North"),
        make_profile("2", "Mia", branch="North", role=Role.MANAGER),
        make_profile("3", "Ben", branch="South"),
    ]

    page = Projector().project(users, employee_directory_query("e-", role="employee", branch="North"))

    assert [u.id for u in page.items] == ["1"]


def test_task_board_newest_first():
    def _task(task_id, status, seconds):
        created = datetime.fromtimestamp(seconds, tz=timezone.utc) if seconds is not None else None
        return Task(id=task_id, user_id="u1", title=task_id, status=status, created_at=created)

    tasks = [
        _task("old", TaskStatus.PENDING, 100),
        _task("undated", TaskStatus.PENDING, None),
        _task("new", TaskStatus.PENDING, 300),
        _task("done", TaskStatus.COMPLETED, 200),
    ]

    page = Projector().project(tasks, task_board_query(user_id="u1", status="pending"))

    assert [t.id for t in page.items] == ["new", "old", "undated"]


def test_toggle_direction():
    assert toggle_direction("hours", "asc", "hours") == SortDirection.DESC
    assert toggle_direction("hours", "desc", "hours") == SortDirection.ASC
    assert toggle_direction("hours", "asc", "name") == SortDirection.ASC


def test_search_matches_enum_values_not_class_names():
    tasks = [
        Task(id="t1", user_id="u1", title="Audit", status=TaskStatus.PENDING),
        Task(id="t2", user_id="u1", title="Report", status=TaskStatus.COMPLETED),
    ]
    projector = Projector()

    assert projector.filter(tasks, ProjectionQuery(search="taskstatus", search_fields=("status",))) == []
    assert [t.id for t in projector.filter(tasks, ProjectionQuery(search="PEND", search_fields=("status",)))] == ["t1"]
