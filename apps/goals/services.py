# apps/goals/services.py
import logging

from apps.reports.domain.trends import summarize_goal_progress
from .models import Goal

logger = logging.getLogger(__name__)


def goal_progress(goal: Goal):
    is_binary = bool(goal.measure_id) and goal.measure.is_binary
    return summarize_goal_progress(goal, goal.check_in_logs.all(), is_binary=is_binary)


def refresh_goal_progress(goal: Goal) -> int:
    """Przelicza progress_percent z wpisów check-inów (tylko cele z pytaniem i wartością docelową)."""
    if not goal.measure_id or goal.target_value is None:
        return goal.progress_percent

    new_progress = int(goal_progress(goal).progress_percent)
    if goal.progress_percent != new_progress:
        goal.progress_percent = new_progress
        goal.save(update_fields=['progress_percent', 'updated_at'])
        logger.debug("Goal %s progress -> %s%%", goal.pk, new_progress)
    return new_progress


def apply_status_change(goal: Goal, new_status: str, today) -> Goal:
    """Status 'complete' ustawia datę ukończenia, każdy inny ją czyści."""
    if new_status not in Goal.Status.values:
        raise ValueError(f"Unknown goal status: {new_status}")

    goal.status = new_status
    if new_status == Goal.Status.COMPLETE:
        goal.completed_date = goal.completed_date or today
        goal.progress_percent = 100
    else:
        goal.completed_date = None
    goal.save()
    return goal
