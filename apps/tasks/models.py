# apps/tasks/models.py
from decimal import Decimal

from django.db import models
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from apps.tasks.domain.entities import RecurrenceRule, TaskPriority, TaskStatus


class Task(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    bucket = models.ForeignKey('buckets.Bucket', on_delete=models.PROTECT, related_name='tasks')
    goal = models.ForeignKey('goals.Goal', null=True, blank=True, on_delete=models.SET_NULL, related_name='tasks')

    title = models.CharField(max_length=200)
    description = models.TextField(blank=True)

    # Używamy TextChoices dla wygody w Adminie, ale mapujemy to na Enum domenowy
    class StatusChoices(models.TextChoices):
        OPEN = TaskStatus.OPEN.value, 'Otwarte'
        COMPLETE = TaskStatus.COMPLETE.value, 'Ukończone'
        SNOOZED = TaskStatus.SNOOZED.value, 'Uśpione'

    class PriorityChoices(models.TextChoices):
        LOW = TaskPriority.LOW.value, 'Niski'
        MEDIUM = TaskPriority.MEDIUM.value, 'Średni'
        HIGH = TaskPriority.HIGH.value, 'Wysoki'

    class RecurrenceChoices(models.TextChoices):
        DAILY = RecurrenceRule.DAILY.value, 'Codziennie'
        WEEKLY = RecurrenceRule.WEEKLY.value, 'Co tydzień'
        BIWEEKLY = RecurrenceRule.BIWEEKLY.value, 'Co dwa tygodnie'
        MONTHLY = RecurrenceRule.MONTHLY.value, 'Co miesiąc'
        QUARTERLY = RecurrenceRule.QUARTERLY.value, 'Co kwartał'

    status = models.CharField(max_length=10, choices=StatusChoices.choices, default=StatusChoices.OPEN)
    priority = models.CharField(max_length=10, choices=PriorityChoices.choices, default=PriorityChoices.MEDIUM)

    # Czas
    due_date = models.DateField(null=True, blank=True)
    snoozed_until = models.DateField(null=True, blank=True)
    expected_hours = models.DecimalField(
        max_digits=5, decimal_places=2,
        null=True, blank=True,
        validators=[MinValueValidator(Decimal('0.01')), MaxValueValidator(Decimal('999'))]
    )

    # Powtarzanie
    is_recurring = models.BooleanField(default=False)
    recurrence_rule = models.CharField(max_length=10, choices=RecurrenceChoices.choices, blank=True)

    # Delegowanie
    is_delegated = models.BooleanField(default=False)
    delegated_to = models.CharField(max_length=100, blank=True)

    progress_notes = models.TextField(blank=True)
    completion_note = models.TextField(blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.title

    @property
    def bucket_name(self):
        return self.bucket.name if self.bucket_id else None


class TaskActivity(models.Model):
    """Dziennik zadania: wpisy tekstowe z datą (postęp, zmiany statusu)."""
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='activities')
    text = models.TextField()
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['timestamp', 'id']
        verbose_name_plural = 'task activities'

    def __str__(self):
        return f"{self.timestamp:%Y-%m-%d %H:%M} {self.text[:40]}"
