# apps/tasks/views.py
import logging

from django.shortcuts import render, redirect
from django.http import HttpResponse
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.views.decorators.http import require_http_methods
from django.shortcuts import get_object_or_404

from apps.core.conf import tracker_setting
from apps.core.errors import delete_with_feedback, GENERIC_SAVE_MESSAGE
from apps.core.models import user_today
from .adapters.orm_repositories import DjangoTaskRepository
from .application.use_cases import CreateTaskUseCase, UpdateTaskUseCase
from .domain.services import TaskService
from .domain.services.ordering import (
    FilterOption, SortOption, filter_tasks, is_overdue, partition_tasks,
    recently_completed, sort_open_tasks,
)
from .filters import TaskFilter
from .forms import CompleteTaskForm, SnoozeTaskForm, TaskForm, TaskNoteForm
from .models import Task

logger = logging.getLogger(__name__)


def _option(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default

def _finish(request, badge_html):
    """HTMX dostaje fragment HTML, zwykły formularz wraca na listę."""
    if request.headers.get('HX-Request'):
        return HttpResponse(badge_html)
    return redirect(request.POST.get('next') or 'task_list')

@login_required
def task_list_view(request):
    """Lista zadań: otwarte (sortowane), uśpione i ostatnio ukończone."""
    today = user_today(request.user)
    sort_by = _option(SortOption, request.GET.get('sort'), SortOption.PRIORITY)
    filter_by = _option(FilterOption, request.GET.get('filter'), FilterOption.ALL)

    tasks = list(Task.objects.filter(user=request.user).select_related('bucket', 'goal'))
    partition = partition_tasks(tasks, today)

    open_tasks = sort_open_tasks(filter_tasks(partition.open, filter_by), sort_by, today)

    return render(request, 'tasks/task_list.html', {
        'open_tasks': open_tasks,
        'overdue_ids': {t.id for t in open_tasks if is_overdue(t, today)},
        'snoozed_tasks': sorted(partition.snoozed, key=lambda t: t.snoozed_until),
        'completed_tasks': recently_completed(partition.completed, tracker_setting('RECENT_COMPLETED_LIMIT')),
        'counts': {
            FilterOption.ALL.value: len(partition.open),
            FilterOption.MINE.value: len(filter_tasks(partition.open, FilterOption.MINE)),
            FilterOption.DELEGATED.value: len(filter_tasks(partition.open, FilterOption.DELEGATED)),
        },
        'sort_by': sort_by.value,
        'filter_by': filter_by.value,
        'sort_options': [o.value for o in SortOption],
        'filter_options': [o.value for o in FilterOption],
        'today': today,
    })

@login_required
def task_create_view(request):
    """Widok tworzenia zadania (korzysta z Clean Architecture)."""
    if request.method == "POST":
        form = TaskForm(request.user, request.POST)
        if form.is_valid():
            # Złożenie Use Case (Manual Dependency Injection)
            use_case = CreateTaskUseCase(repository=DjangoTaskRepository())
            try:
                use_case.execute(form.to_input())
            except ValueError as e:
                return HttpResponse(f"Error: {e}", status=400)
            except DatabaseError:
                logger.exception("Creating task failed")
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('task_list')
    else:
        initial = {}
        if request.GET.get('title'):
            initial['title'] = request.GET['title']
        form = TaskForm(request.user, initial=initial)

    return render(request, 'tasks/task_form.html', {'form': form})

@login_required
def task_edit_view(request, pk):
    # Pobierz zadanie (zabezpieczenie, że należy do usera)
    task_model = get_object_or_404(Task, pk=pk, user=request.user)

    if request.method == "POST":
        form = TaskForm(request.user, request.POST, instance=task_model)
        if form.is_valid():
            use_case = UpdateTaskUseCase(repository=DjangoTaskRepository())
            try:
                use_case.execute(task_model.id, form.to_input())
            except ValueError as e:
                return HttpResponse(f"Error: {e}", status=400)
            except DatabaseError:
                logger.exception("Updating task %s failed", task_model.id)
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('task_list')
    else:
        form = TaskForm(request.user, instance=task_model)

    return render(request, 'tasks/task_form.html', {'form': form, 'task': task_model})

@login_required
def task_search_view(request):
    qs = Task.objects.filter(user=request.user).select_related('bucket').order_by('-created_at')

    f = TaskFilter(request.GET, queryset=qs, request=request)

    return render(request, 'tasks/task_search.html', {'filter': f})

@require_http_methods(["POST"])
@login_required
def task_complete_view(request, pk):
    task = get_object_or_404(Task, pk=pk, user=request.user)
    form = CompleteTaskForm(request.POST)
    note = form.cleaned_data['completion_note'] if form.is_valid() else ""

    service = TaskService(DjangoTaskRepository())
    try:
        result = service.complete_task(task.id, note, today=user_today(request.user))
    except ValueError as e:
        return HttpResponse(f"Error: {e}", status=400)

    if result.successor:
        messages.info(request, f"Następne wystąpienie: {result.successor.due_date:%Y-%m-%d}")
    return _finish(request, '<span class="badge bg-success">Zrobione!</span>')

@require_http_methods(["POST"])
@login_required
def task_reopen_view(request, pk):
    task = get_object_or_404(Task, pk=pk, user=request.user)
    try:
        TaskService(DjangoTaskRepository()).reopen_task(task.id)
    except ValueError as e:
        return HttpResponse(f"Error: {e}", status=400)
    return _finish(request, '<span class="badge bg-primary">Otwarte ponownie</span>')

@require_http_methods(["POST"])
@login_required
def task_snooze_view(request, pk):
    task = get_object_or_404(Task, pk=pk, user=request.user)
    form = SnoozeTaskForm(request.POST)
    if not form.is_valid():
        return HttpResponse("Błędna liczba dni", status=400)

    try:
        snoozed = TaskService(DjangoTaskRepository()).snooze_task(
            task.id, form.cleaned_data['days'], today=user_today(request.user)
        )
    except ValueError as e:
        return HttpResponse(f"Error: {e}", status=400)
    return _finish(request, f'<span class="badge bg-secondary">Uśpione do {snoozed.snoozed_until:%Y-%m-%d}</span>')

@require_http_methods(["POST"])
@login_required
def task_unsnooze_view(request, pk):
    task = get_object_or_404(Task, pk=pk, user=request.user)
    try:
        TaskService(DjangoTaskRepository()).unsnooze_task(task.id)
    except ValueError as e:
        return HttpResponse(f"Error: {e}", status=400)
    return _finish(request, '<span class="badge bg-warning text-dark">Wybudzone!</span>')

@require_http_methods(["POST"])
@login_required
def task_add_note_view(request, pk):
    task = get_object_or_404(Task, pk=pk, user=request.user)
    form = TaskNoteForm(request.POST)
    if not form.is_valid():
        return HttpResponse("Pusta notatka", status=400)

    TaskService(DjangoTaskRepository()).add_progress_note(task.id, form.cleaned_data['text'])

    if request.headers.get('HX-Request'):
        return task_detail_hx_view(request, pk)
    return redirect('task_list')

@require_http_methods(["POST"])
@login_required
def task_delete_view(request, pk):
    task = get_object_or_404(Task, pk=pk, user=request.user)
    if delete_with_feedback(request, task, "Zadanie ma powiązane wpisy czasu."):
        messages.success(request, "Usunięto zadanie.")
    return redirect('task_list')

@login_required
def task_detail_hx_view(request, pk):
    task = get_object_or_404(Task.objects.select_related('bucket', 'goal'), pk=pk, user=request.user)

    return render(request, 'tasks/partials/task_detail.html', {
        'task': task,
        'activities': task.activities.order_by('-timestamp'),
        'overdue': is_overdue(task, user_today(request.user)),
        'note_form': TaskNoteForm(),
        'snooze_form': SnoozeTaskForm(),
        'complete_form': CompleteTaskForm(),
    })
