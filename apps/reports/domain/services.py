# apps/reports/domain/services.py
from datetime import date

from apps.buckets.models import Bucket
from apps.checkins.models import CheckInResponse, Measure
from apps.core.conf import tracker_setting
from apps.core.domain.dates import add_days, to_iso
from apps.goals.models import Goal, GoalCheckInLog
from apps.time_tracking.models import TimeEntry, TimeTarget
from .trends import TrendWindow, summarize_goal_progress, summarize_measure, summarize_time_allocation


class ReportService:

    def get_trends(self, user, window: TrendWindow, today: date) -> dict:
        """Dane strony trendów dla okna 7/30/90 dni (łącznie z dzisiaj)."""
        days_back = TrendWindow(window).value
        start = add_days(today, -(days_back - 1))
        margin = tracker_setting('TREND_MARGIN')

        measures = list(Measure.objects.filter(user=user, is_active=True))
        responses = CheckInResponse.objects.filter(user=user, check_in_date__range=(start, today))
        by_measure = {}
        for r in responses:
            by_measure.setdefault(r.measure_id, []).append(r)

        entries = TimeEntry.objects.filter(user=user, entry_date__range=(start, today))
        buckets = Bucket.objects.filter(user=user)
        targets = TimeTarget.objects.filter(user=user)

        goals = list(
            Goal.objects.filter(user=user, measure__isnull=False)
            .exclude(status=Goal.Status.ARCHIVED)
            .select_related('measure')
        )
        logs = GoalCheckInLog.objects.filter(goal__in=goals, log_date__range=(start, today))
        by_goal = {}
        for log in logs:
            by_goal.setdefault(log.goal_id, []).append(log)

        return {
            'days_back': days_back,
            'start': start,
            'end': today,
            'measures': [
                summarize_measure(m, by_measure.get(m.id, []), days_back, today, margin)
                for m in measures
            ],
            'time': summarize_time_allocation(entries, buckets, targets, days_back),
            'goals': [
                summarize_goal_progress(g, by_goal.get(g.id, []), g.measure.is_binary, margin)
                for g in goals
            ],
        }

    def get_chart_data(self, user, window: TrendWindow, today: date) -> dict:
        """To samo co get_trends, ale w formie gotowej do JSON (Chart.js)."""
        trends = self.get_trends(user, window, today)
        time = trends['time']

        return {
            'days_back': trends['days_back'],
            'start': to_iso(trends['start']),
            'end': to_iso(trends['end']),
            'measures': [
                {
                    'id': t.measure.id,
                    'question': t.measure.question_text,
                    'type': t.measure.question_type,
                    'average': t.average,
                    'completion_rate': t.completion_rate,
                    'check_in_count': t.check_in_count,
                    'trend': t.trend.value,
                    'labels': [to_iso(day) for day, _ in t.daily],
                    'data': [value for _, value in t.daily],
                }
                for t in trends['measures']
            ],
            'time': {
                'total_hours': time['total_hours'],
                'avg_per_day': time['avg_per_day'],
                'days_tracked': time['days_tracked'],
                'labels': [row['bucket'].name for row in time['buckets']],
                'data': [row['hours'] for row in time['buckets']],
                'colors': [row['bucket'].color for row in time['buckets']],
                'buckets': [
                    {
                        'name': row['bucket'].name,
                        'hours': row['hours'],
                        'target_percent': row['target_percent'],
                        'actual_percent': row['actual_percent'],
                        'difference': row['difference'],
                        'weekly': [{'week': week, 'hours': hours} for week, hours in row['weekly']],
                    }
                    for row in time['buckets']
                ],
                'daily': [{'date': to_iso(day), 'hours': hours} for day, hours in time['daily']],
            },
            'goals': [
                {
                    'id': g.goal.id,
                    'title': g.goal.title,
                    'current_value': g.current_value,
                    'target_value': g.target_value,
                    'progress_percent': g.progress_percent,
                    'trend': g.trend.value,
                    'log_count': g.log_count,
                }
                for g in trends['goals']
            ],
        }
