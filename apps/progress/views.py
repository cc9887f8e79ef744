import json
import logging

from django.conf import settings
from django.shortcuts import render, redirect, get_object_or_404
from django.http import JsonResponse
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.views.decorators.http import require_http_methods

from apps.core.errors import delete_with_feedback, GENERIC_SAVE_MESSAGE
from apps.core.models import user_today
from .domain.extraction import TaskExtractor
from .forms import ProgressLogForm
from .models import PRESET_TAGS, ProgressLogEntry

logger = logging.getLogger(__name__)


def get_task_extractor():
    return TaskExtractor(
        api_key=settings.ANTHROPIC_API_KEY,
        model=settings.TASK_EXTRACTION_MODEL,
        timeout=settings.TASK_EXTRACTION_TIMEOUT,
    )


@login_required
def progress_log_view(request):
    """Oś czasu wpisów + formularz nowego wpisu."""
    entries = ProgressLogEntry.objects.filter(user=request.user).select_related('bucket', 'goal')

    tag = request.GET.get('tag')
    if tag:
        # JSONField __contains nie działa na SQLite, filtrujemy w Pythonie
        entries = [e for e in entries if tag in (e.tags or [])]

    return render(request, 'progress/timeline.html', {
        'entries': entries,
        'active_tag': tag,
        'preset_tags': PRESET_TAGS,
        'form': ProgressLogForm(request.user, initial={'entry_date': user_today(request.user)}),
    })


@login_required
def progress_entry_create_view(request):
    if request.method == 'POST':
        form = ProgressLogForm(request.user, request.POST)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception("Saving progress entry failed")
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('progress_log')
    else:
        form = ProgressLogForm(request.user, initial={'entry_date': user_today(request.user)})

    return render(request, 'progress/entry_form.html', {'form': form})


@login_required
def progress_entry_edit_view(request, pk):
    entry = get_object_or_404(ProgressLogEntry, pk=pk, user=request.user)

    if request.method == 'POST':
        form = ProgressLogForm(request.user, request.POST, instance=entry)
        if form.is_valid():
            try:
                form.save()
            except DatabaseError:
                logger.exception("Updating progress entry %s failed", entry.pk)
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('progress_log')
    else:
        form = ProgressLogForm(request.user, instance=entry)

    return render(request, 'progress/entry_form.html', {'form': form, 'entry': entry})


@require_http_methods(["POST"])
@login_required
def progress_entry_delete_view(request, pk):
    entry = get_object_or_404(ProgressLogEntry, pk=pk, user=request.user)
    if delete_with_feedback(request, entry, "Nie można usunąć wpisu."):
        messages.success(request, "Usunięto wpis.")
    return redirect('progress_log')


@require_http_methods(["POST"])
@login_required
def extract_tasks_view(request):
    """JSON: {"text": "..."} -> {"tasks": [...]}. Działa też ze zwykłym formularzem."""
    if request.content_type == 'application/json':
        try:
            payload = json.loads(request.body or b'{}')
        except ValueError:
            return JsonResponse({'error': 'Invalid JSON'}, status=400)
        text = payload.get('text') if isinstance(payload, dict) else None
    else:
        text = request.POST.get('text')

    try:
        tasks = get_task_extractor().extract(text)
    except ValueError:
        return JsonResponse({'error': 'Text is required'}, status=400)

    return JsonResponse({'tasks': tasks})
