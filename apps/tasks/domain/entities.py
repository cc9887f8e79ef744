# apps/tasks/domain/entities.py
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional
from enum import Enum


class TaskStatus(str, Enum):
    OPEN = 'open'
    COMPLETE = 'complete'
    SNOOZED = 'snoozed'


class TaskPriority(str, Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'


# Im mniejsza waga, tym wyżej na liście
PRIORITY_WEIGHT = {
    TaskPriority.HIGH: 0,
    TaskPriority.MEDIUM: 1,
    TaskPriority.LOW: 2,
}


class RecurrenceRule(str, Enum):
    DAILY = 'daily'
    WEEKLY = 'weekly'
    BIWEEKLY = 'biweekly'
    MONTHLY = 'monthly'
    QUARTERLY = 'quarterly'


class TaskNotFound(ValueError):
    pass


class InvalidTransition(ValueError):
    pass


@dataclass
class TaskEntity:
    id: Optional[int]  # ID może być None przed zapisem
    title: str
    bucket_id: Optional[int] = None
    user_id: Optional[int] = None
    description: str = ""
    status: TaskStatus = TaskStatus.OPEN
    priority: TaskPriority = TaskPriority.MEDIUM

    goal_id: Optional[int] = None
    due_date: Optional[date] = None
    snoozed_until: Optional[date] = None
    expected_hours: Optional[float] = None

    is_recurring: bool = False
    recurrence_rule: Optional[RecurrenceRule] = None

    is_delegated: bool = False
    delegated_to: str = ""

    progress_notes: str = ""
    completion_note: str = ""
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    # Tylko do wyświetlania/sortowania (z relacji)
    bucket_name: Optional[str] = None

    def is_overdue(self, today: date) -> bool:
        return self.due_date is not None and self.due_date < today

    def effective_status(self, today: date) -> TaskStatus:
        """Uśpienie, którego termin minął, traktujemy jak otwarte (bez osobnego zdarzenia)."""
        if self.status == TaskStatus.SNOOZED and (self.snoozed_until is None or self.snoozed_until <= today):
            return TaskStatus.OPEN
        return TaskStatus(self.status)

    # --- Przejścia stanów ---

    def complete(self, when: datetime, note: str = "") -> None:
        if self.status == TaskStatus.COMPLETE:
            raise InvalidTransition("Task is already complete")
        self.status = TaskStatus.COMPLETE
        self.completed_at = when
        self.completion_note = note.strip()
        self.snoozed_until = None

    def reopen(self) -> None:
        if self.status != TaskStatus.COMPLETE:
            raise InvalidTransition("Only completed tasks can be reopened")
        self.status = TaskStatus.OPEN
        self.completed_at = None
        self.completion_note = ""

    def snooze(self, until: date) -> None:
        if self.status == TaskStatus.COMPLETE:
            raise InvalidTransition("Completed tasks cannot be snoozed")
        self.status = TaskStatus.SNOOZED
        self.snoozed_until = until

    def unsnooze(self) -> None:
        if self.status != TaskStatus.SNOOZED:
            raise InvalidTransition("Task is not snoozed")
        self.status = TaskStatus.OPEN
        self.snoozed_until = None

    def next_occurrence(self, due_date: date) -> "TaskEntity":
        """Kopia zadania cyklicznego na kolejny termin (świeży stan, bez historii)."""
        return replace(
            self,
            id=None,
            status=TaskStatus.OPEN,
            due_date=due_date,
            snoozed_until=None,
            progress_notes="",
            completion_note="",
            completed_at=None,
            created_at=None,
        )
