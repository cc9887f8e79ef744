import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.http import HttpResponse
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.views.decorators.http import require_http_methods

from apps.core.errors import delete_with_feedback, GENERIC_SAVE_MESSAGE
from apps.core.models import user_today
from .forms import GoalForm, GoalStatusForm
from .models import Goal
from .services import apply_status_change, goal_progress

logger = logging.getLogger(__name__)


@login_required
def goal_list_view(request):
    """Cele pogrupowane po statusie."""
    goals = Goal.objects.filter(user=request.user).select_related('bucket', 'parent', 'measure')

    groups = [
        (label, [g for g in goals if g.status == value])
        for value, label in Goal.Status.choices
    ]

    return render(request, 'goals/goal_list.html', {
        'groups': groups,
        'status_choices': Goal.Status.choices,
    })


@login_required
def goal_detail_view(request, pk):
    goal = get_object_or_404(Goal.objects.select_related('bucket', 'measure'), pk=pk, user=request.user)

    return render(request, 'goals/goal_detail.html', {
        'goal': goal,
        'progress': goal_progress(goal) if goal.measure_id else None,
        'children': goal.children.all(),
        'tasks': goal.tasks.select_related('bucket'),
        'status_form': GoalStatusForm(initial={'status': goal.status}),
    })


def _save_goal(request, form):
    goal = form.save(commit=False)
    if goal.status == Goal.Status.COMPLETE and not goal.completed_date:
        goal.completed_date = user_today(request.user)
    elif goal.status != Goal.Status.COMPLETE:
        goal.completed_date = None
    goal.save()
    return goal


@login_required
def goal_create_view(request):
    if request.method == 'POST':
        form = GoalForm(request.user, request.POST)
        if form.is_valid():
            try:
                goal = _save_goal(request, form)
            except DatabaseError:
                logger.exception("Creating goal failed")
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('goal_detail', pk=goal.pk)
    else:
        form = GoalForm(request.user, initial={'bucket': request.GET.get('bucket')})

    return render(request, 'goals/goal_form.html', {'form': form})


@login_required
def goal_edit_view(request, pk):
    goal = get_object_or_404(Goal, pk=pk, user=request.user)

    if request.method == 'POST':
        form = GoalForm(request.user, request.POST, instance=goal)
        if form.is_valid():
            try:
                _save_goal(request, form)
            except DatabaseError:
                logger.exception("Updating goal %s failed", goal.pk)
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('goal_detail', pk=goal.pk)
    else:
        form = GoalForm(request.user, instance=goal)

    return render(request, 'goals/goal_form.html', {'form': form, 'goal': goal})


@require_http_methods(["POST"])
@login_required
def goal_status_view(request, pk):
    goal = get_object_or_404(Goal, pk=pk, user=request.user)
    form = GoalStatusForm(request.POST)
    if not form.is_valid():
        return HttpResponse("Błędny status", status=400)

    apply_status_change(goal, form.cleaned_data['status'], user_today(request.user))

    if request.headers.get('HX-Request'):
        return HttpResponse(f'<span class="badge bg-info">{goal.get_status_display()}</span>')
    return redirect('goal_detail', pk=goal.pk)


@require_http_methods(["POST"])
@login_required
def goal_delete_view(request, pk):
    goal = get_object_or_404(Goal, pk=pk, user=request.user)
    if delete_with_feedback(request, goal, "Cel ma powiązane rekordy i nie może zostać usunięty."):
        messages.success(request, "Usunięto cel.")
    return redirect('goal_list')
