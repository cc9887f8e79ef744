# apps/checkins/services.py
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional, Tuple

from django.core.exceptions import ValidationError
from django.db import DatabaseError

from apps.core.conf import tracker_setting
from apps.goals.models import Goal, GoalCheckInLog
from apps.goals.services import refresh_goal_progress
from .domain.streaks import calculate_longest_streak, calculate_streak
from .models import CheckInResponse, Measure

logger = logging.getLogger(__name__)


@dataclass
class CheckInResult:
    saved: List[CheckInResponse] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None


class CheckInService:
    def submit_check_in(self, user, answers: Dict[int, Tuple[int, str]], day: date) -> CheckInResult:
        """
        Zapisuje odpowiedzi na kilka pytań jedna po drugiej (bez transakcji).

        answers: {measure_id: (score, notes)}.
        Przy pierwszym błędzie przerywamy - zapisane wcześniej odpowiedzi zostają.
        """
        result = CheckInResult()
        measures = Measure.objects.filter(user=user, pk__in=answers.keys())

        for measure in measures:
            score, notes = answers[measure.pk]
            try:
                measure.validate_score(score)
                response, _ = CheckInResponse.objects.update_or_create(
                    user=user,
                    measure=measure,
                    check_in_date=day,
                    defaults={'score': int(score), 'notes': notes or ''}
                )
                self._log_for_goals(user, measure, response)
            except ValidationError as e:
                result.error = e.messages[0]
                return result
            except DatabaseError:
                logger.exception("Saving check-in for measure %s failed", measure.pk)
                result.error = f"Nie udało się zapisać odpowiedzi: {measure.question_text}"
                return result
            result.saved.append(response)

        return result

    def _log_for_goals(self, user, measure, response):
        """Kopiuje wartość do celów podpiętych pod to pytanie."""
        goals = Goal.objects.filter(user=user, measure=measure).exclude(status=Goal.Status.ARCHIVED)
        for goal in goals:
            GoalCheckInLog.objects.update_or_create(
                goal=goal,
                log_date=response.check_in_date,
                defaults={'user': user, 'response': response, 'value': response.score}
            )
            refresh_goal_progress(goal)

    def get_streaks(self, user, today: date) -> Dict[str, int]:
        dates = CheckInResponse.objects.filter(user=user).values_list('check_in_date', flat=True)
        dates = list(dates)
        return {
            'current': calculate_streak(dates, today=today),
            'longest': calculate_longest_streak(dates),
        }

    def get_history(self, user):
        limit = tracker_setting('CHECKIN_HISTORY_LIMIT')
        return CheckInResponse.objects.filter(user=user).select_related('measure')[:limit]
