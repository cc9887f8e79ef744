from dataclasses import replace
from datetime import date

import pytest

from apps.tasks.domain.entities import RecurrenceRule, TaskEntity, TaskNotFound, TaskStatus
from apps.tasks.domain.services import RecurrenceService, TaskService, next_due_date
from apps.tasks.ports.repositories import ITaskRepository


class InMemoryTaskRepository(ITaskRepository):
    def __init__(self, tasks=()):
        self.tasks = {}
        self.activities = []
        self._next_id = 1
        for task in tasks:
            self.save(task)

    def get_by_id(self, task_id):
        task = self.tasks.get(task_id)
        return replace(task) if task else None

    def save(self, task):
        if task.id is None:
            task = replace(task, id=self._next_id)
            self._next_id += 1
        self.tasks[task.id] = replace(task)
        return replace(task)

    def filter_by_status(self, user_id, status):
        return [replace(t) for t in self.tasks.values() if t.user_id == user_id and t.status == status]

    def add_activity(self, task_id, text):
        self.activities.append((task_id, text))

    def get_elapsed_snoozes(self, today):
        return [
            replace(t) for t in self.tasks.values()
            if t.status == TaskStatus.SNOOZED and (t.snoozed_until is None or t.snoozed_until <= today)
        ]


class FailingOnCreateRepository(InMemoryTaskRepository):
    def save(self, task):
        if task.id is None and self.tasks:
            raise RuntimeError("backend down")
        return super().save(task)


@pytest.mark.parametrize('rule, expected', [
    (RecurrenceRule.DAILY, date(2024, 1, 2)),
    (RecurrenceRule.WEEKLY, date(2024, 1, 8)),
    (RecurrenceRule.BIWEEKLY, date(2024, 1, 15)),
    (RecurrenceRule.MONTHLY, date(2024, 2, 1)),
    (RecurrenceRule.QUARTERLY, date(2024, 4, 1)),
])
def test_next_due_date(rule, expected):
    assert next_due_date(date(2024, 1, 1), rule) == expected


def test_next_due_date_clamps_month_end():
    assert next_due_date('2024-01-31', 'monthly') == date(2024, 2, 29)


def test_next_due_date_without_due_uses_today():
    assert next_due_date(None, 'daily', today=date(2024, 5, 5)) == date(2024, 5, 6)


def test_unknown_rule_falls_back_to_weekly():
    assert next_due_date(date(2024, 1, 1), 'fortnightly-ish') == date(2024, 1, 8)


def weekly_task(**kwargs):
    defaults = dict(
        id=None, title='Raport', user_id=1, bucket_id=3, goal_id=4,
        due_date=date(2024, 1, 1), is_recurring=True, recurrence_rule=RecurrenceRule.WEEKLY,
        expected_hours=2.0, is_delegated=True, delegated_to='Ewa',
    )
    defaults.update(kwargs)
    return TaskEntity(**defaults)


def test_completing_weekly_task_creates_successor():
    repo = InMemoryTaskRepository([weekly_task()])
    result = TaskService(repo).complete_task(1, note='done', today=date(2024, 1, 1))

    assert result.task.status == TaskStatus.COMPLETE
    successor = result.successor
    assert successor.id == 2
    assert successor.status == TaskStatus.OPEN
    assert successor.due_date == date(2024, 1, 8)
    assert (successor.bucket_id, successor.goal_id, successor.title) == (3, 4, 'Raport')
    assert successor.expected_hours == 2.0
    assert successor.is_delegated and successor.delegated_to == 'Ewa'
    assert successor.completion_note == ''


def test_non_recurring_task_has_no_successor():
    repo = InMemoryTaskRepository([weekly_task(is_recurring=False)])
    assert TaskService(repo).complete_task(1).successor is None
    assert len(repo.tasks) == 1


def test_successor_failure_keeps_completion():
    repo = FailingOnCreateRepository([weekly_task()])
    result = TaskService(repo).complete_task(1, today=date(2024, 1, 1))

    assert result.successor is None
    assert repo.get_by_id(1).status == TaskStatus.COMPLETE


def test_recurrence_service_ignores_task_without_rule():
    repo = InMemoryTaskRepository()
    assert RecurrenceService(repo).handle_task_completion(weekly_task(recurrence_rule=None)) is None


def test_snooze_and_release():
    repo = InMemoryTaskRepository([weekly_task(is_recurring=False)])
    service = TaskService(repo)

    snoozed = service.snooze_task(1, days=3, today=date(2024, 1, 1))
    assert snoozed.snoozed_until == date(2024, 1, 4)

    assert service.release_elapsed_snoozes(date(2024, 1, 3)) == 0
    assert service.release_elapsed_snoozes(date(2024, 1, 4)) == 1
    assert repo.get_by_id(1).status == TaskStatus.OPEN


def test_snooze_requires_positive_days():
    repo = InMemoryTaskRepository([weekly_task()])
    with pytest.raises(ValueError):
        TaskService(repo).snooze_task(1, days=0, today=date(2024, 1, 1))


def test_missing_task_raises():
    with pytest.raises(TaskNotFound):
        TaskService(InMemoryTaskRepository()).reopen_task(99)


def test_progress_note_goes_to_activity_log():
    repo = InMemoryTaskRepository([weekly_task()])
    service = TaskService(repo)
    service.add_progress_note(1, '  połowa zrobiona ')
    assert repo.activities == [(1, 'połowa zrobiona')]
    with pytest.raises(ValueError):
        service.add_progress_note(1, '   ')
