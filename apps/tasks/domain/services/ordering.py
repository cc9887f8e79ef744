# apps/tasks/domain/services/ordering.py
"""
Podział zadań na listy (otwarte / uśpione / ukończone) i sortowanie listy otwartych.

Działa zarówno na encjach, jak i na modelach Django - potrzebne są tylko atrybuty
status, due_date, snoozed_until, priority, expected_hours, bucket_name,
created_at, completed_at, is_delegated.
"""
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List

from apps.core.domain.dates import local_today, parse_date
from apps.tasks.domain.entities import PRIORITY_WEIGHT, TaskPriority, TaskStatus

DEFAULT_PRIORITY_WEIGHT = 1


class SortOption(str, Enum):
    PRIORITY = 'priority'
    DUE_DATE = 'due_date'
    EXPECTED_HOURS = 'expected_hours'
    BUCKET = 'bucket'
    CREATED = 'created'


class FilterOption(str, Enum):
    ALL = 'all'
    MINE = 'mine'
    DELEGATED = 'delegated'


@dataclass
class TaskPartition:
    open: List = field(default_factory=list)
    snoozed: List = field(default_factory=list)
    completed: List = field(default_factory=list)


def _day(value):
    return parse_date(value) if value else None


def is_overdue(task, today: date) -> bool:
    due = _day(task.due_date)
    return due is not None and due < today


def is_open(task, today: date) -> bool:
    if task.status == TaskStatus.OPEN:
        return True
    if task.status == TaskStatus.SNOOZED:
        until = _day(task.snoozed_until)
        return until is None or until <= today
    return False


def is_snoozed(task, today: date) -> bool:
    until = _day(task.snoozed_until)
    return task.status == TaskStatus.SNOOZED and until is not None and until > today


def partition_tasks(tasks: Iterable, today: date) -> TaskPartition:
    partition = TaskPartition()
    for task in tasks:
        if task.status == TaskStatus.COMPLETE:
            partition.completed.append(task)
        elif is_snoozed(task, today):
            partition.snoozed.append(task)
        elif is_open(task, today):
            partition.open.append(task)
    return partition


def priority_weight(priority) -> int:
    try:
        return PRIORITY_WEIGHT[TaskPriority(priority)]
    except ValueError:
        return DEFAULT_PRIORITY_WEIGHT


def _due_key(task):
    # Zadania bez terminu na końcu
    due = _day(task.due_date)
    return (due is None, due or date.max)


def _secondary_key(task, sort_by: SortOption):
    if sort_by == SortOption.PRIORITY:
        return (priority_weight(task.priority),) + _due_key(task)
    if sort_by == SortOption.DUE_DATE:
        return _due_key(task)
    if sort_by == SortOption.EXPECTED_HOURS:
        hours = task.expected_hours
        return (float(hours) if hours is not None else math.inf,)
    if sort_by == SortOption.BUCKET:
        return ((task.bucket_name or '').casefold(),)
    if sort_by == SortOption.CREATED:
        # Najnowsze pierwsze
        created = task.created_at
        if created is None:
            return (True, 0.0)
        if isinstance(created, datetime):
            return (False, -created.timestamp())
        return (False, -parse_date(created).toordinal())
    return ()


def sort_open_tasks(tasks: Iterable, sort_by=SortOption.PRIORITY, today: date = None) -> List:
    """
    Zaległe zawsze na górze, niezależnie od trybu sortowania.
    Dopiero w ramach zaległych/niezaległych działa wybrany klucz.
    """
    sort_by = SortOption(sort_by)
    today = today or local_today()
    return sorted(
        tasks,
        key=lambda t: (not is_overdue(t, today),) + _secondary_key(t, sort_by)
    )


def filter_tasks(tasks: Iterable, filter_by=FilterOption.ALL) -> List:
    filter_by = FilterOption(filter_by)
    if filter_by == FilterOption.DELEGATED:
        return [t for t in tasks if t.is_delegated]
    if filter_by == FilterOption.MINE:
        return [t for t in tasks if not t.is_delegated]
    return list(tasks)


def recently_completed(tasks: Iterable, limit: int) -> List:
    def completed_key(task):
        when = task.completed_at
        return when.timestamp() if isinstance(when, datetime) else 0.0
    return sorted(tasks, key=completed_key, reverse=True)[:limit]
