# apps/tasks/domain/services/task_service.py
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Optional

from apps.core.domain.dates import add_days
from apps.tasks.domain.entities import TaskEntity, TaskNotFound
from apps.tasks.ports.repositories import ITaskRepository
from .recurrence import RecurrenceService

logger = logging.getLogger(__name__)


@dataclass
class CompletionResult:
    task: TaskEntity
    successor: Optional[TaskEntity] = None


class TaskService:
    def __init__(self, repository: ITaskRepository, recurrence: Optional[RecurrenceService] = None):
        self.repository = repository
        self.recurrence = recurrence or RecurrenceService(repository)

    def _get(self, task_id: int) -> TaskEntity:
        task = self.repository.get_by_id(task_id)
        if not task:
            raise TaskNotFound("Task not found")
        return task

    def complete_task(self, task_id: int, note: str = "", today: Optional[date] = None) -> CompletionResult:
        """Oznacza zadanie jako ukończone; dla cyklicznych tworzy następne."""
        task = self._get(task_id)
        task.complete(datetime.now(timezone.utc), note)
        task = self.repository.save(task)

        # Dwa osobne zapisy - następnik jest "best effort"
        successor = self.recurrence.handle_task_completion(task, today)
        if successor:
            logger.info("Task %s completed, next occurrence %s due %s", task.id, successor.id, successor.due_date)
        return CompletionResult(task=task, successor=successor)

    def reopen_task(self, task_id: int) -> TaskEntity:
        task = self._get(task_id)
        task.reopen()
        return self.repository.save(task)

    def snooze_task(self, task_id: int, days: int, today: date) -> TaskEntity:
        if days < 1:
            raise ValueError("Snooze must last at least one day")
        task = self._get(task_id)
        task.snooze(add_days(today, days))
        return self.repository.save(task)

    def unsnooze_task(self, task_id: int) -> TaskEntity:
        task = self._get(task_id)
        task.unsnooze()
        return self.repository.save(task)

    def add_progress_note(self, task_id: int, text: str) -> None:
        """Dopisuje wpis do dziennika aktywności zadania."""
        text = (text or "").strip()
        if not text:
            raise ValueError("Note cannot be empty")
        self._get(task_id)
        self.repository.add_activity(task_id, text)

    def release_elapsed_snoozes(self, today: date) -> int:
        """Uśpione zadania z minionym terminem wracają do open. Zwraca liczbę zmienionych."""
        released = 0
        for task in self.repository.get_elapsed_snoozes(today):
            task.unsnooze()
            self.repository.save(task)
            released += 1
        return released
