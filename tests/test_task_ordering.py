from datetime import date, datetime, timezone

import pytest

from apps.tasks.domain.entities import (
    InvalidTransition, RecurrenceRule, TaskEntity, TaskPriority, TaskStatus,
)
from apps.tasks.domain.services.ordering import (
    FilterOption, SortOption, filter_tasks, is_overdue, partition_tasks,
    priority_weight, recently_completed, sort_open_tasks,
)

TODAY = date(2024, 3, 10)


def make(title, **kwargs):
    return TaskEntity(id=kwargs.pop('id', None), title=title, **kwargs)


def titles(tasks):
    return [t.title for t in tasks]


def test_overdue_low_priority_sorts_before_high_priority():
    a = make('A', priority=TaskPriority.LOW, due_date=date(2024, 3, 1))
    b = make('B', priority=TaskPriority.HIGH, due_date=date(2024, 3, 20))
    assert titles(sort_open_tasks([b, a], today=TODAY)) == ['A', 'B']


def test_priority_sort_breaks_ties_by_due_date_with_missing_last():
    tasks = [
        make('no-due', priority=TaskPriority.HIGH),
        make('later', priority=TaskPriority.HIGH, due_date=date(2024, 4, 1)),
        make('sooner', priority=TaskPriority.HIGH, due_date=date(2024, 3, 15)),
        make('medium', priority=TaskPriority.MEDIUM, due_date=date(2024, 3, 11)),
    ]
    assert titles(sort_open_tasks(tasks, SortOption.PRIORITY, TODAY)) == ['sooner', 'later', 'no-due', 'medium']


def test_due_date_sort_drops_priority():
    tasks = [
        make('high', priority=TaskPriority.HIGH, due_date=date(2024, 3, 20)),
        make('low', priority=TaskPriority.LOW, due_date=date(2024, 3, 12)),
    ]
    assert titles(sort_open_tasks(tasks, 'due_date', TODAY)) == ['low', 'high']


def test_expected_hours_sort_puts_missing_estimate_last():
    tasks = [make('none'), make('big', expected_hours=5), make('small', expected_hours=0.5)]
    assert titles(sort_open_tasks(tasks, SortOption.EXPECTED_HOURS, TODAY)) == ['small', 'big', 'none']


def test_bucket_sort_keeps_overdue_first():
    tasks = [
        make('zdrowie', bucket_name='Zdrowie'),
        make('praca', bucket_name='praca'),
        make('late', bucket_name='Zzz', due_date=date(2024, 3, 9)),
    ]
    assert titles(sort_open_tasks(tasks, SortOption.BUCKET, TODAY)) == ['late', 'praca', 'zdrowie']


def test_created_sort_is_newest_first():
    tasks = [
        make('old', created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
        make('new', created_at=datetime(2024, 3, 1, tzinfo=timezone.utc)),
    ]
    assert titles(sort_open_tasks(tasks, SortOption.CREATED, TODAY)) == ['new', 'old']


def test_unknown_priority_weight_defaults_to_medium():
    assert priority_weight('high') == 0
    assert priority_weight('urgent') == 1


def test_partition_treats_elapsed_snooze_as_open():
    tasks = [
        make('open'),
        make('elapsed', status=TaskStatus.SNOOZED, snoozed_until=TODAY),
        make('sleeping', status=TaskStatus.SNOOZED, snoozed_until=date(2024, 3, 11)),
        make('done', status=TaskStatus.COMPLETE),
    ]
    partition = partition_tasks(tasks, TODAY)
    assert titles(partition.open) == ['open', 'elapsed']
    assert titles(partition.snoozed) == ['sleeping']
    assert titles(partition.completed) == ['done']


def test_is_overdue_requires_due_date_before_today():
    assert is_overdue(make('x', due_date=date(2024, 3, 9)), TODAY)
    assert not is_overdue(make('x', due_date=TODAY), TODAY)
    assert not is_overdue(make('x'), TODAY)


def test_filter_tasks():
    tasks = [make('mine'), make('theirs', is_delegated=True, delegated_to='Bob')]
    assert titles(filter_tasks(tasks, FilterOption.MINE)) == ['mine']
    assert titles(filter_tasks(tasks, 'delegated')) == ['theirs']
    assert titles(filter_tasks(tasks)) == ['mine', 'theirs']


def test_recently_completed_limit_and_order():
    tasks = [
        make(f't{i}', status=TaskStatus.COMPLETE, completed_at=datetime(2024, 3, i + 1, tzinfo=timezone.utc))
        for i in range(5)
    ]
    assert titles(recently_completed(tasks, 2)) == ['t4', 't3']


def test_entity_state_machine():
    task = make('x')
    task.snooze(date(2024, 3, 12))
    assert task.status == TaskStatus.SNOOZED
    task.unsnooze()
    assert task.status == TaskStatus.OPEN and task.snoozed_until is None

    task.complete(datetime(2024, 3, 10, tzinfo=timezone.utc), "  gotowe ")
    assert task.completion_note == "gotowe"
    with pytest.raises(InvalidTransition):
        task.complete(datetime(2024, 3, 10, tzinfo=timezone.utc))
    with pytest.raises(InvalidTransition):
        task.snooze(date(2024, 3, 12))

    task.reopen()
    assert task.status == TaskStatus.OPEN and task.completed_at is None
    with pytest.raises(InvalidTransition):
        task.reopen()


def test_effective_status():
    task = make('x', status=TaskStatus.SNOOZED, snoozed_until=date(2024, 3, 9))
    assert task.effective_status(TODAY) == TaskStatus.OPEN
    task.snoozed_until = date(2024, 3, 11)
    assert task.effective_status(TODAY) == TaskStatus.SNOOZED


def test_next_occurrence_resets_state():
    task = make('x', id=7, status=TaskStatus.COMPLETE, is_recurring=True,
                recurrence_rule=RecurrenceRule.WEEKLY, completion_note='ok', progress_notes='p')
    successor = task.next_occurrence(date(2024, 3, 17))
    assert successor.id is None
    assert successor.status == TaskStatus.OPEN
    assert successor.due_date == date(2024, 3, 17)
    assert successor.completion_note == '' and successor.progress_notes == ''
    assert successor.recurrence_rule == RecurrenceRule.WEEKLY
