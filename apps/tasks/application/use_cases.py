# apps/tasks/application/use_cases.py
from dataclasses import dataclass
from datetime import date
from typing import Optional
from apps.tasks.domain.entities import RecurrenceRule, TaskEntity, TaskNotFound, TaskPriority, TaskStatus
from apps.tasks.ports.repositories import ITaskRepository

@dataclass
class CreateTaskInput:
    title: str
    user_id: Optional[int]
    bucket_id: Optional[int]
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    goal_id: Optional[int] = None
    due_date: Optional[date] = None
    expected_hours: Optional[float] = None
    is_recurring: bool = False
    recurrence_rule: Optional[RecurrenceRule] = None
    is_delegated: bool = False
    delegated_to: str = ""
    progress_notes: str = ""


def _validate(input_dto: CreateTaskInput) -> None:
    if not (input_dto.title or "").strip():
        raise ValueError("Task title cannot be empty")
    if not input_dto.bucket_id:
        raise ValueError("Task must belong to a bucket")
    if input_dto.is_recurring and not input_dto.recurrence_rule:
        raise ValueError("Recurring task needs a recurrence rule")


class CreateTaskUseCase:
    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def execute(self, input_dto: CreateTaskInput) -> TaskEntity:
        _validate(input_dto)

        task = TaskEntity(
            id=None,
            user_id=input_dto.user_id,
            title=input_dto.title.strip(),
            bucket_id=input_dto.bucket_id,
            description=input_dto.description,
            status=TaskStatus.OPEN,
            priority=TaskPriority(input_dto.priority),
            goal_id=input_dto.goal_id,
            due_date=input_dto.due_date,
            expected_hours=input_dto.expected_hours,
            is_recurring=input_dto.is_recurring,
            recurrence_rule=input_dto.recurrence_rule if input_dto.is_recurring else None,
            is_delegated=input_dto.is_delegated,
            delegated_to=input_dto.delegated_to if input_dto.is_delegated else "",
            progress_notes=input_dto.progress_notes,
        )

        return self.repository.save(task)


class UpdateTaskUseCase:
    """Edycja pól zadania; status i historia zostają bez zmian."""

    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def execute(self, task_id: int, input_dto: CreateTaskInput) -> TaskEntity:
        _validate(input_dto)

        task = self.repository.get_by_id(task_id)
        if not task:
            raise TaskNotFound("Task not found")

        task.title = input_dto.title.strip()
        task.bucket_id = input_dto.bucket_id
        task.description = input_dto.description
        task.priority = TaskPriority(input_dto.priority)
        task.goal_id = input_dto.goal_id
        task.due_date = input_dto.due_date
        task.expected_hours = input_dto.expected_hours
        task.is_recurring = input_dto.is_recurring
        task.recurrence_rule = input_dto.recurrence_rule if input_dto.is_recurring else None
        task.is_delegated = input_dto.is_delegated
        task.delegated_to = input_dto.delegated_to if input_dto.is_delegated else ""
        task.progress_notes = input_dto.progress_notes

        return self.repository.save(task)
