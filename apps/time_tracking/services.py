# apps/time_tracking/services.py
from datetime import date

from apps.buckets.models import Bucket
from apps.core.conf import tracker_setting
from apps.core.domain.dates import add_days, days_between, week_range
from apps.core.models import get_user_settings
from .domain.metrics import (
    build_bucket_pacing, calculate_total_hours, calculate_weekly_capacity, round_half_up,
)
from .models import TimeEntry, TimeTarget


class TimeTrackingService:

    def get_weekly_overview(self, user, today: date, week_offset: int = 0) -> dict:
        """
        Tydzień (pon-nd) z czasem per bucket vs cel.
        Dla bieżącego tygodnia cel jest proporcjonalny do dni, które już minęły.
        """
        start, end = week_range(add_days(today, 7 * week_offset))
        if start <= today <= end:
            days_elapsed = days_between(today, start) + 1
        elif today < start:
            days_elapsed = 0
        else:
            days_elapsed = 7

        awake_hours = get_user_settings(user).awake_hours_per_day
        entries = list(
            TimeEntry.objects.filter(user=user, entry_date__range=(start, end)).select_related('bucket')
        )
        targets = list(TimeTarget.objects.filter(user=user))
        buckets = Bucket.objects.filter(user=user, is_active=True)

        rows = build_bucket_pacing(
            buckets, entries, targets,
            awake_hours_per_day=awake_hours,
            days=days_elapsed,
            tolerance=tracker_setting('PACING_TOLERANCE'),
        )

        return {
            'start': start,
            'end': end,
            'week_offset': week_offset,
            'days_elapsed': days_elapsed,
            'rows': rows,
            'total_hours': round_half_up(calculate_total_hours(entries)),
            'capacity': calculate_weekly_capacity(targets, awake_hours),
        }

    def get_today_hours(self, user, today: date) -> float:
        entries = TimeEntry.objects.filter(user=user, entry_date=today)
        return round_half_up(calculate_total_hours(entries))
