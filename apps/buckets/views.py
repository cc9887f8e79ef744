import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.db import DatabaseError
from django.views.decorators.http import require_http_methods

from apps.core.errors import delete_with_feedback, GENERIC_SAVE_MESSAGE
from apps.core.models import get_user_settings
from apps.time_tracking.domain.metrics import calculate_weekly_capacity, target_percent_to_hours
from apps.time_tracking.models import TimeTarget
from .domain.hierarchy import build_tree
from .forms import BucketForm
from .models import Bucket

logger = logging.getLogger(__name__)


@login_required
def bucket_list_view(request):
    """Lista obszarów życia jako drzewo (rodzic -> dzieci) z celami czasu."""
    buckets = Bucket.objects.filter(user=request.user)
    targets = TimeTarget.objects.filter(user=request.user)
    awake_hours = get_user_settings(request.user).awake_hours_per_day

    target_hours = {
        t.bucket_id: target_percent_to_hours(t.target_percent, awake_hours, 7)
        for t in targets
    }

    return render(request, 'buckets/bucket_list.html', {
        'tree': build_tree(buckets),
        'targets': {t.bucket_id: t.target_percent for t in targets},
        'target_hours': target_hours,
        'capacity': calculate_weekly_capacity(targets, awake_hours),
    })


def _save_bucket(request, form):
    bucket = form.save()
    percent = form.cleaned_data.get('target_percent')
    if percent is None:
        TimeTarget.objects.filter(bucket=bucket).delete()
    else:
        TimeTarget.objects.update_or_create(
            bucket=bucket,
            defaults={'user': request.user, 'target_percent': percent}
        )
    return bucket


@login_required
def bucket_create_view(request):
    if request.method == 'POST':
        form = BucketForm(request.user, request.POST)
        if form.is_valid():
            try:
                _save_bucket(request, form)
            except DatabaseError:
                logger.exception("Creating bucket failed")
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('bucket_list')
    else:
        form = BucketForm(request.user)

    return render(request, 'buckets/bucket_form.html', {'form': form})


@login_required
def bucket_edit_view(request, pk):
    bucket = get_object_or_404(Bucket, pk=pk, user=request.user)

    if request.method == 'POST':
        form = BucketForm(request.user, request.POST, instance=bucket)
        if form.is_valid():
            try:
                _save_bucket(request, form)
            except DatabaseError:
                logger.exception("Updating bucket %s failed", pk)
                messages.error(request, GENERIC_SAVE_MESSAGE)
            else:
                return redirect('bucket_list')
    else:
        form = BucketForm(request.user, instance=bucket)

    return render(request, 'buckets/bucket_form.html', {'form': form, 'bucket': bucket})


@require_http_methods(["POST"])
@login_required
def bucket_delete_view(request, pk):
    bucket = get_object_or_404(Bucket, pk=pk, user=request.user)

    if bucket.children.exists():
        messages.error(request, "Nie można usunąć obszaru, który ma pod-obszary. Najpierw usuń pod-obszary.")
        return redirect('bucket_list')

    if delete_with_feedback(
            request, bucket,
            "Nie można usunąć obszaru, bo ma powiązane wpisy czasu, zadania lub cele."):
        messages.success(request, f"Usunięto: {bucket.name}")
    return redirect('bucket_list')


@require_http_methods(["POST"])
@login_required
def bucket_toggle_active_view(request, pk):
    bucket = get_object_or_404(Bucket, pk=pk, user=request.user)
    bucket.is_active = not bucket.is_active
    bucket.save(update_fields=['is_active', 'updated_at'])
    return redirect('bucket_list')
