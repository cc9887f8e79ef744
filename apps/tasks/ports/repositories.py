# apps/tasks/ports/repositories.py
from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from apps.tasks.domain.entities import TaskEntity, TaskStatus


class ITaskRepository(ABC):
    @abstractmethod
    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        pass

    @abstractmethod
    def save(self, task: TaskEntity) -> TaskEntity:
        """Zapisuje (tworzy lub aktualizuje) zadanie i zwraca zaktualizowaną encję (np. z ID)."""
        pass

    @abstractmethod
    def filter_by_status(self, user_id: int, status: TaskStatus) -> List[TaskEntity]:
        pass

    @abstractmethod
    def add_activity(self, task_id: int, text: str) -> None:
        """Dopisuje wpis (z datą) do dziennika aktywności zadania."""
        pass

    @abstractmethod
    def get_elapsed_snoozes(self, today: date) -> List[TaskEntity]:
        """Zadania snoozed, których snoozed_until <= today."""
        pass
