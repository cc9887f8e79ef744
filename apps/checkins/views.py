import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.views.decorators.http import require_POST

from apps.core.errors import delete_with_feedback
from apps.core.models import user_today
from .forms import DailyCheckInForm, MeasureForm
from .models import CheckInResponse, Measure
from .services import CheckInService

logger = logging.getLogger(__name__)


@login_required
def daily_check_in_view(request):
    """Codzienny check-in: odpowiedzi na aktywne pytania + seria + historia."""
    today = user_today(request.user)
    service = CheckInService()
    measures = Measure.objects.filter(user=request.user, is_active=True)

    todays = {
        r.measure_id: r
        for r in CheckInResponse.objects.filter(user=request.user, check_in_date=today)
    }

    if request.method == 'POST':
        form = DailyCheckInForm(measures, request.POST, responses=todays)
        if form.is_valid():
            result = service.submit_check_in(request.user, form.answers(), today)
            if result.ok:
                messages.success(request, "Check-in zapisany!")
                return redirect('daily_check_in')
            messages.error(request, result.error)
    else:
        form = DailyCheckInForm(measures, responses=todays)

    return render(request, 'checkins/daily.html', {
        'form': form,
        'today': today,
        'has_checked_in': bool(todays),
        'streaks': service.get_streaks(request.user, today),
        'history': service.get_history(request.user),
    })


@login_required
def measure_list_view(request):
    measures = Measure.objects.filter(user=request.user)
    return render(request, 'checkins/measure_list.html', {'measures': measures})


@login_required
def measure_create_view(request):
    if request.method == 'POST':
        form = MeasureForm(request.POST)
        if form.is_valid():
            measure = form.save(commit=False)
            measure.user = request.user
            measure.save()
            return redirect('measure_list')
    else:
        form = MeasureForm()
    return render(request, 'checkins/measure_form.html', {'form': form})


@login_required
def measure_edit_view(request, pk):
    measure = get_object_or_404(Measure, pk=pk, user=request.user)
    if request.method == 'POST':
        form = MeasureForm(request.POST, instance=measure)
        if form.is_valid():
            form.save()
            return redirect('measure_list')
    else:
        form = MeasureForm(instance=measure)
    return render(request, 'checkins/measure_form.html', {'form': form, 'measure': measure})


@login_required
@require_POST
def measure_toggle_active_view(request, pk):
    measure = get_object_or_404(Measure, pk=pk, user=request.user)
    measure.is_active = not measure.is_active
    measure.save(update_fields=['is_active', 'updated_at'])
    return redirect('measure_list')


@login_required
@require_POST
def measure_delete_view(request, pk):
    measure = get_object_or_404(Measure, pk=pk, user=request.user)
    delete_with_feedback(request, measure, "Nie można usunąć pytania powiązanego z innymi danymi.")
    return redirect('measure_list')
