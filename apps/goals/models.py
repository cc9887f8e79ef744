# apps/goals/models.py
from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError

from apps.buckets.domain.hierarchy import HierarchyError, check_parent


class Goal(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    bucket = models.ForeignKey('buckets.Bucket', on_delete=models.PROTECT, related_name='goals')
    parent = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='children'
    )
    # Opcjonalne powiązanie z pytaniem z check-inu (postęp liczony z odpowiedzi)
    measure = models.ForeignKey(
        'checkins.Measure',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='goals'
    )

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    class Status(models.TextChoices):
        NOT_STARTED = 'not_started', 'Nie rozpoczęty'
        IN_PROGRESS = 'in_progress', 'W toku'
        COMPLETE = 'complete', 'Ukończony'
        ARCHIVED = 'archived', 'Zarchiwizowany'

    class Priority(models.TextChoices):
        LOW = 'low', 'Niski'
        MEDIUM = 'medium', 'Średni'
        HIGH = 'high', 'Wysoki'

    class TargetType(models.TextChoices):
        AVERAGE = 'average', 'Średnia'
        COUNT = 'count', 'Liczba'

    status = models.CharField(max_length=20, choices=Status.choices, default=Status.NOT_STARTED)
    priority = models.CharField(max_length=10, choices=Priority.choices, default=Priority.MEDIUM)
    progress_percent = models.PositiveIntegerField(default=0, help_text="Postęp w procentach (0-100)")

    target_date = models.DateField(null=True, blank=True)
    completed_date = models.DateField(null=True, blank=True)

    target_value = models.DecimalField(max_digits=7, decimal_places=2, null=True, blank=True)
    target_type = models.CharField(max_length=10, choices=TargetType.choices, default=TargetType.AVERAGE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['target_date', 'title']

    def __str__(self):
        return self.title

    def clean(self):
        has_children = bool(self.pk) and self.children.exists()
        try:
            check_parent(
                self.pk,
                self.parent_id,
                self.parent.parent_id if self.parent_id else None,
                has_children
            )
        except HierarchyError as e:
            raise ValidationError({'parent': str(e)})


class GoalCheckInLog(models.Model):
    """Odpowiedź z check-inu przypisana do celu (do wyliczania postępu celu)."""
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    goal = models.ForeignKey(Goal, on_delete=models.CASCADE, related_name='check_in_logs')
    response = models.ForeignKey('checkins.CheckInResponse', on_delete=models.CASCADE, related_name='goal_logs')
    log_date = models.DateField()
    value = models.DecimalField(max_digits=5, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('goal', 'log_date')
        ordering = ['log_date']

    def __str__(self):
        return f"{self.goal} @ {self.log_date}: {self.value}"
