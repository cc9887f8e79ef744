from django.shortcuts import render, redirect
from django.contrib.auth.decorators import login_required
from django.contrib import messages

from apps.checkins.models import CheckInResponse, Measure
from apps.checkins.services import CheckInService
from apps.core.domain.dates import week_range
from apps.goals.models import Goal
from apps.tasks.domain.services.ordering import FilterOption, filter_tasks, is_overdue, partition_tasks
from apps.tasks.models import Task
from apps.time_tracking.domain.metrics import calculate_hours_by_group, round_half_up
from apps.time_tracking.models import TimeEntry
from apps.time_tracking.services import TimeTrackingService
from .forms import UserSettingsForm
from .models import get_user_settings, user_today

UPCOMING_GOALS_LIMIT = 5


@login_required
def settings_view(request):
    user_settings = get_user_settings(request.user)

    if request.method == 'POST':
        form = UserSettingsForm(request.POST, instance=user_settings)
        if form.is_valid():
            form.save()
            messages.success(request, "Ustawienia zapisane pomyślnie!")
            return redirect('settings')
    else:
        form = UserSettingsForm(instance=user_settings)

    return render(request, 'core/settings.html', {'form': form})


@login_required
def dashboard_view(request):
    today = user_today(request.user)
    start, end = week_range(today)

    # Check-in
    active_measures = Measure.objects.filter(user=request.user, is_active=True).count()
    answered_today = CheckInResponse.objects.filter(user=request.user, check_in_date=today).count()

    # Czas w tym tygodniu
    week_entries = TimeEntry.objects.filter(user=request.user, entry_date__range=(start, end)).select_related('bucket')
    names = {e.bucket_id: e.bucket.name for e in week_entries}
    week_hours = sorted(
        ((names[bucket_id], round_half_up(hours)) for bucket_id, hours in calculate_hours_by_group(week_entries).items()),
        key=lambda row: row[1],
        reverse=True
    )

    # Zadania
    partition = partition_tasks(Task.objects.filter(user=request.user), today)

    upcoming_goals = Goal.objects.filter(
        user=request.user,
        target_date__gte=today,
        status__in=[Goal.Status.NOT_STARTED, Goal.Status.IN_PROGRESS]
    ).order_by('target_date')[:UPCOMING_GOALS_LIMIT]

    return render(request, 'core/dashboard.html', {
        'today': today,
        'checked_in_today': active_measures > 0 and answered_today >= active_measures,
        'answered_today': answered_today,
        'active_measures': active_measures,
        'streaks': CheckInService().get_streaks(request.user, today),
        'week_start': start,
        'week_hours': week_hours,
        'today_hours': TimeTrackingService().get_today_hours(request.user, today),
        'open_tasks': len(partition.open),
        'overdue_tasks': sum(1 for t in partition.open if is_overdue(t, today)),
        'delegated_tasks': len(filter_tasks(partition.open, FilterOption.DELEGATED)),
        'snoozed_tasks': len(partition.snoozed),
        'upcoming_goals': upcoming_goals,
    })
