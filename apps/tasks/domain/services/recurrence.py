# apps/tasks/domain/services/recurrence.py
import logging
from datetime import date
from typing import Optional

from apps.core.domain.dates import add_days, add_months, local_today, parse_date
from apps.tasks.domain.entities import RecurrenceRule, TaskEntity
from apps.tasks.ports.repositories import ITaskRepository

logger = logging.getLogger(__name__)

# (dni, miesiące) do dodania przy kolejnym wystąpieniu
RECURRENCE_STEPS = {
    RecurrenceRule.DAILY: (1, 0),
    RecurrenceRule.WEEKLY: (7, 0),
    RecurrenceRule.BIWEEKLY: (14, 0),
    RecurrenceRule.MONTHLY: (0, 1),
    RecurrenceRule.QUARTERLY: (0, 3),
}


def next_due_date(current_due, rule, today: Optional[date] = None) -> date:
    """
    Następny termin zadania cyklicznego.
    Bez terminu liczymy od dzisiaj; nieznana reguła = co tydzień.
    """
    base = parse_date(current_due) if current_due else (today or local_today())

    try:
        rule = RecurrenceRule(rule)
    except ValueError:
        logger.warning("Unknown recurrence rule %r, falling back to weekly", rule)
        rule = RecurrenceRule.WEEKLY

    days, months = RECURRENCE_STEPS[rule]
    return add_months(add_days(base, days), months)


class RecurrenceService:
    def __init__(self, repository: ITaskRepository):
        self.repository = repository

    def handle_task_completion(self, task: TaskEntity, today: Optional[date] = None) -> Optional[TaskEntity]:
        """
        Po ukończeniu zadania cyklicznego tworzy kolejne (status open).

        Błąd przy tworzeniu następnika nie cofa ukończenia - tylko go logujemy.
        """
        if not task.is_recurring or not task.recurrence_rule:
            return None

        successor = task.next_occurrence(next_due_date(task.due_date, task.recurrence_rule, today))
        try:
            return self.repository.save(successor)
        except Exception:
            logger.exception("Creating next occurrence of task %s failed", task.id)
            return None
