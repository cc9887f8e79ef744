import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.paginator import Paginator
from django.db import DatabaseError
from django.views.decorators.http import require_http_methods

from apps.core.errors import delete_with_feedback, GENERIC_SAVE_MESSAGE
from apps.core.models import user_today
from .forms import TimeEntryForm, TimerEntryForm
from .models import TimeEntry
from .services import TimeTrackingService

logger = logging.getLogger(__name__)

ENTRIES_PER_PAGE = 50


@login_required
def time_entry_list_view(request):
    today = user_today(request.user)
    entries = TimeEntry.objects.filter(user=request.user).select_related('bucket', 'task')
    page = Paginator(entries, ENTRIES_PER_PAGE).get_page(request.GET.get('page'))

    return render(request, 'time_tracking/entry_list.html', {
        'page': page,
        'form': TimeEntryForm(request.user, initial={'entry_date': today}),
        'timer_form': TimerEntryForm(request.user),
        'today_hours': TimeTrackingService().get_today_hours(request.user, today),
    })


@login_required
def time_entry_create_view(request):
    if request.method == 'POST':
        form = TimeEntryForm(request.user, request.POST)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception("Saving time entry failed")
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                messages.success(request, "Zapisano czas.")
                return redirect('time_entry_list')
    else:
        form = TimeEntryForm(request.user, initial={
            'entry_date': user_today(request.user),
            'bucket': request.GET.get('bucket'),
            'task': request.GET.get('task'),
        })

    return render(request, 'time_tracking/entry_form.html', {'form': form})


@require_http_methods(["POST"])
@login_required
def timer_entry_view(request):
    form = TimerEntryForm(request.user, request.POST, entry_date=user_today(request.user))
    if form.is_valid():
        try:
            entry = form.save()
        except DatabaseError:
            logger.exception("Saving timer entry failed")
            messages.error(request, GENERIC_SAVE_MESSAGE)
        else:
            messages.success(request, f"Zapisano {entry.hours} h ze stopera.")
    else:
        for errors in form.errors.values():
            messages.error(request, errors[0])
    return redirect('time_entry_list')


@login_required
def time_entry_edit_view(request, pk):
    entry = get_object_or_404(TimeEntry, pk=pk, user=request.user)

    if request.method == 'POST':
        form = TimeEntryForm(request.user, request.POST, instance=entry)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception("Updating time entry %s failed", entry.pk)
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('time_entry_list')
    else:
        form = TimeEntryForm(request.user, instance=entry)

    return render(request, 'time_tracking/entry_form.html', {'form': form, 'entry': entry})


@require_http_methods(["POST"])
@login_required
def time_entry_delete_view(request, pk):
    entry = get_object_or_404(TimeEntry, pk=pk, user=request.user)
    if delete_with_feedback(request, entry, "Nie można usunąć wpisu czasu."):
        messages.success(request, "Usunięto wpis.")
    return redirect('time_entry_list')


@login_required
def weekly_overview_view(request):
    """Tydzień: czas per bucket, pacing względem celów i wolna pojemność."""
    try:
        week_offset = int(request.GET.get('week', 0))
    except ValueError:
        week_offset = 0

    overview = TimeTrackingService().get_weekly_overview(
        request.user, user_today(request.user), week_offset
    )
    return render(request, 'time_tracking/weekly.html', overview)
