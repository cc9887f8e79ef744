from .recurrence import RecurrenceService, next_due_date
from .task_service import CompletionResult, TaskService

__all__ = ['CompletionResult', 'RecurrenceService', 'TaskService', 'next_due_date']
