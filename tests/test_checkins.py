from datetime import date, timedelta
from decimal import Decimal

import pytest

from apps.checkins.forms import DailyCheckInForm
from apps.checkins.models import CheckInResponse
from apps.checkins.services import CheckInService
from apps.goals.models import Goal, GoalCheckInLog

pytestmark = pytest.mark.django_db

TODAY = date(2024, 4, 10)


def test_submit_upserts_one_response_per_day(user, scale_measure):
    service = CheckInService()
    service.submit_check_in(user, {scale_measure.pk: (6, 'ok')}, TODAY)
    result = service.submit_check_in(user, {scale_measure.pk: (8, 'lepiej')}, TODAY)

    assert result.ok
    response = CheckInResponse.objects.get(user=user, measure=scale_measure, check_in_date=TODAY)
    assert response.score == 8
    assert response.notes == 'lepiej'


def test_submit_stops_at_first_invalid_score(user, scale_measure, binary_measure):
    result = CheckInService().submit_check_in(
        user,
        {scale_measure.pk: (7, ''), binary_measure.pk: (5, '')},
        TODAY
    )

    assert not result.ok
    assert 'Trening?' in result.error
    # Pierwsza odpowiedź zostaje zapisana (bez transakcji)
    assert CheckInResponse.objects.filter(measure=scale_measure).count() == 1
    assert CheckInResponse.objects.filter(measure=binary_measure).count() == 0


def test_answers_are_copied_to_linked_goals(user, bucket, binary_measure):
    goal = Goal.objects.create(
        user=user, bucket=bucket, title='Trenuj', measure=binary_measure,
        target_value=Decimal('2'), target_type=Goal.TargetType.COUNT,
    )
    service = CheckInService()
    service.submit_check_in(user, {binary_measure.pk: (1, '')}, TODAY - timedelta(days=1))
    service.submit_check_in(user, {binary_measure.pk: (1, '')}, TODAY)

    assert GoalCheckInLog.objects.filter(goal=goal).count() == 2
    goal.refresh_from_db()
    assert goal.progress_percent == 100


def test_archived_goals_are_skipped(user, bucket, scale_measure):
    Goal.objects.create(user=user, bucket=bucket, title='Stary', measure=scale_measure, status=Goal.Status.ARCHIVED)
    CheckInService().submit_check_in(user, {scale_measure.pk: (5, '')}, TODAY)
    assert GoalCheckInLog.objects.count() == 0


def test_streaks(user, scale_measure):
    for offset in (0, 1, 2, 5, 6):
        CheckInResponse.objects.create(
            user=user, measure=scale_measure, check_in_date=TODAY - timedelta(days=offset), score=5
        )
    assert CheckInService().get_streaks(user, TODAY) == {'current': 3, 'longest': 3}


def test_daily_form_fields(scale_measure, binary_measure):
    form = DailyCheckInForm(
        [scale_measure, binary_measure],
        {f'score_{scale_measure.pk}': '7', f'score_{binary_measure.pk}': '0', f'notes_{scale_measure.pk}': 'hej'}
    )
    assert form.is_valid(), form.errors
    assert form.answers() == {scale_measure.pk: (7, 'hej'), binary_measure.pk: (0, '')}


def test_daily_form_rejects_out_of_range(scale_measure):
    form = DailyCheckInForm([scale_measure], {f'score_{scale_measure.pk}': '11'})
    assert not form.is_valid()
