from datetime import datetime, timedelta, timezone

import pytest

from app.models.task import (
    EisenhowerQuadrant,
    InvalidArgument,
    Task,
    TaskOrder,
    by_category,
    by_due_date,
    by_duration,
)

DUE = datetime(2025, 12, 15, 17, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("category", [1, 2, 3, 4])
def test_valid_categories_accepted(category):
    task = Task("Write report", DUE, category, 30, 1)
    assert task.category == category
    assert task.quadrant == EisenhowerQuadrant(category)


@pytest.mark.parametrize("category", [0, 5, -1, 100])
def test_out_of_range_category_rejected(category):
    with pytest.raises(InvalidArgument):
        Task("Write report", DUE, category, 30, 1)


@pytest.mark.parametrize("category", ["1", 1.0, None, True])
def test_non_integer_category_rejected(category):
    with pytest.raises(InvalidArgument):
        Task("Write report", DUE, category, 30, 1)


@pytest.mark.parametrize("duration", [1, 30, 600])
def test_positive_duration_accepted(duration):
    assert Task("Write report", DUE, 1, duration, 1).duration == duration


@pytest.mark.parametrize("duration", [0, -5])
def test_non_positive_duration_rejected(duration):
    with pytest.raises(InvalidArgument):
        Task("Write report", DUE, 1, duration, 1)


def test_invalid_argument_is_value_error():
    with pytest.raises(ValueError):
        Task("x", DUE, 5, 10, 1)


def test_bad_category_or_duration_examples_fail():
    with pytest.raises(InvalidArgument):
        Task("x", DUE, 5, 10, 1)
    with pytest.raises(InvalidArgument):
        Task("x", DUE, 2, 0, 1)


def test_due_date_must_be_datetime():
    with pytest.raises(InvalidArgument):
        Task("x", "2025-12-15", 1, 10, 1)


def test_accessors():
    task = Task("Call plumber", DUE, 3, 45, 7)
    assert task.name == "Call plumber"
    assert task.due_date == DUE
    assert task.category == 3
    assert task.duration == 45
    assert task.id == 7


def test_set_category_reclassifies():
    task = Task("Call plumber", DUE, 3, 45, 7)
    task.category = 1
    assert task.category == 1
    assert task.quadrant == EisenhowerQuadrant.DO_FIRST


@pytest.mark.parametrize("category", [0, 5, "2"])
def test_set_category_invalid_leaves_task_unchanged(category):
    task = Task("Call plumber", DUE, 3, 45, 7)
    with pytest.raises(InvalidArgument):
        task.category = category
    assert task.category == 3


@pytest.mark.parametrize("field", ["name", "due_date", "duration", "id"])
def test_other_fields_are_read_only(field):
    task = Task("Call plumber", DUE, 3, 45, 7)
    with pytest.raises(AttributeError):
        setattr(task, field, None)


def test_equality_covers_all_fields():
    assert Task("a", DUE, 1, 10, 1) == Task("a", DUE, 1, 10, 1)
    assert Task("a", DUE, 1, 10, 1) != Task("a", DUE, 2, 10, 1)
    assert Task("a", DUE, 1, 10, 1) != Task("a", DUE, 1, 10, 2)


def test_local_due_date_is_naive():
    task = Task("a", DUE, 1, 10, 1)
    local = task.local_due_date()
    assert local.tzinfo is None
    assert local == DUE.astimezone().replace(tzinfo=None)


class TestEisenhowerQuadrant:
    """Quadrant flags and the 2x2 mapping."""

    def test_flags(self):
        assert EisenhowerQuadrant.DO_FIRST.important and EisenhowerQuadrant.DO_FIRST.urgent
        assert EisenhowerQuadrant.SCHEDULE.important and not EisenhowerQuadrant.SCHEDULE.urgent
        assert not EisenhowerQuadrant.DELEGATE.important and EisenhowerQuadrant.DELEGATE.urgent
        assert not EisenhowerQuadrant.ELIMINATE.important and not EisenhowerQuadrant.ELIMINATE.urgent

    @pytest.mark.parametrize("quadrant", list(EisenhowerQuadrant))
    def test_from_flags_inverts_flags(self, quadrant):
        assert EisenhowerQuadrant.from_flags(quadrant.important, quadrant.urgent) is quadrant

    def test_label(self):
        assert EisenhowerQuadrant.SCHEDULE.label == "Important & Not Urgent"


class TestOrderings:
    """The three single-key task orderings."""

    @pytest.fixture
    def tasks(self):
        return [
            Task("q3 long", DUE + timedelta(days=2), 3, 90, 1),
            Task("q1 short", DUE + timedelta(hours=5), 1, 15, 2),
            Task("q4", DUE, 4, 30, 3),
            Task("q2", DUE + timedelta(days=1), 2, 60, 4),
            Task("q1 later", DUE + timedelta(hours=5, minutes=1), 1, 45, 5),
        ]

    def test_by_category_groups_quadrants(self, tasks):
        categories = [t.category for t in sorted(tasks, key=by_category)]
        assert categories == [1, 1, 2, 3, 4]

    def test_by_category_ties_keep_input_order(self, tasks):
        ids = [t.id for t in sorted(tasks, key=by_category)]
        assert ids[:2] == [2, 5]

    def test_by_duration_non_decreasing(self, tasks):
        durations = [t.duration for t in sorted(tasks, key=by_duration)]
        assert durations == sorted(durations)
        assert durations[0] == 15

    def test_by_due_date_uses_full_timestamp(self, tasks):
        ordered = sorted(tasks, key=by_due_date)
        assert [t.id for t in ordered] == [3, 2, 5, 4, 1]

    def test_by_due_date_mixes_naive_and_aware(self):
        naive = Task("naive", datetime(2025, 1, 1, 12, 0), 1, 10, 1)
        aware = Task("aware", datetime(2025, 1, 1, 11, 0, tzinfo=timezone.utc), 1, 10, 2)
        assert [t.id for t in sorted([naive, aware], key=by_due_date)] == [2, 1]

    def test_task_order_keys(self):
        assert TaskOrder.CATEGORY.key is by_category
        assert TaskOrder.DURATION.key is by_duration
        assert TaskOrder.DUE_DATE.key is by_due_date

    @pytest.mark.parametrize(
        "text, expected",
        [
            (None, TaskOrder.CATEGORY),
            ("", TaskOrder.CATEGORY),
            ("category", TaskOrder.CATEGORY),
            ("Duration", TaskOrder.DURATION),
            ("due_date", TaskOrder.DUE_DATE),
            ("dueDate", TaskOrder.DUE_DATE),
            ("due-date", TaskOrder.DUE_DATE),
        ],
    )
    def test_parse(self, text, expected):
        assert TaskOrder.parse(text) is expected

    def test_parse_unknown(self):
        with pytest.raises(InvalidArgument):
            TaskOrder.parse("priority")
