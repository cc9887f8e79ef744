# apps/tasks/adapters/orm_repositories.py
from datetime import date
from typing import List, Optional
from django.db.models import Q
from apps.tasks.domain.entities import RecurrenceRule, TaskEntity, TaskPriority, TaskStatus
from apps.tasks.ports.repositories import ITaskRepository
from apps.tasks.models import Task as TaskModel, TaskActivity


class DjangoTaskRepository(ITaskRepository):
    def to_entity(self, model: TaskModel) -> TaskEntity:
        """Konwertuje Model Django -> Czystą Encję."""
        return TaskEntity(
            id=model.id,
            user_id=model.user_id,
            bucket_id=model.bucket_id,
            goal_id=model.goal_id,
            title=model.title,
            description=model.description,
            status=TaskStatus(model.status),
            priority=TaskPriority(model.priority),
            due_date=model.due_date,
            snoozed_until=model.snoozed_until,
            expected_hours=float(model.expected_hours) if model.expected_hours is not None else None,
            is_recurring=model.is_recurring,
            recurrence_rule=RecurrenceRule(model.recurrence_rule) if model.recurrence_rule else None,
            is_delegated=model.is_delegated,
            delegated_to=model.delegated_to,
            progress_notes=model.progress_notes,
            completion_note=model.completion_note,
            completed_at=model.completed_at,
            created_at=model.created_at,
            # Dzięki select_related nie będzie dodatkowego zapytania
            bucket_name=model.bucket.name if model.bucket_id else None,
        )

    def get_by_id(self, task_id: int) -> Optional[TaskEntity]:
        try:
            task = TaskModel.objects.select_related('bucket').get(id=task_id)
            return self.to_entity(task)
        except TaskModel.DoesNotExist:
            return None

    def save(self, task: TaskEntity) -> TaskEntity:
        data = {
            'bucket_id': task.bucket_id,
            'goal_id': task.goal_id,
            'title': task.title,
            'description': task.description,
            'status': TaskStatus(task.status).value,
            'priority': TaskPriority(task.priority).value,
            'due_date': task.due_date,
            'snoozed_until': task.snoozed_until,
            'expected_hours': task.expected_hours,
            'is_recurring': task.is_recurring,
            'recurrence_rule': RecurrenceRule(task.recurrence_rule).value if task.recurrence_rule else '',
            'is_delegated': task.is_delegated,
            'delegated_to': task.delegated_to,
            'progress_notes': task.progress_notes,
            'completion_note': task.completion_note,
            'completed_at': task.completed_at,
        }

        if task.id:
            # Aktualizacja przez save(), żeby zadziałały sygnały (dziennik zmian)
            obj = TaskModel.objects.get(id=task.id)
            for name, value in data.items():
                setattr(obj, name, value)
            obj.save()
        else:
            # Tworzenie nowego (wymaga user_id)
            if task.user_id is None:
                raise ValueError("user_id is required for creating a new task")
            obj = TaskModel.objects.create(user_id=task.user_id, **data)

        return self.to_entity(TaskModel.objects.select_related('bucket').get(id=obj.id))

    def filter_by_status(self, user_id: int, status: TaskStatus) -> List[TaskEntity]:
        qs = TaskModel.objects.filter(user_id=user_id, status=TaskStatus(status).value).select_related('bucket')
        return [self.to_entity(t) for t in qs]

    def add_activity(self, task_id: int, text: str) -> None:
        TaskActivity.objects.create(task_id=task_id, text=text)

    def get_elapsed_snoozes(self, today: date) -> List[TaskEntity]:
        # Brak daty uśpienia = uśpienie bezterminowo minione
        qs = TaskModel.objects.filter(
            Q(snoozed_until__lte=today) | Q(snoozed_until__isnull=True),
            status=TaskStatus.SNOOZED.value,
        ).select_related('bucket')
        return [self.to_entity(t) for t in qs]
