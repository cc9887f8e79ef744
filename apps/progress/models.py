# apps/progress/models.py
from django.db import models
from django.conf import settings
from django.utils import timezone

PRESET_TAGS = ['win', 'learning', 'blocker', 'milestone', 'reflection', 'gratitude']


class ProgressLogEntry(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    bucket = models.ForeignKey('buckets.Bucket', null=True, blank=True, on_delete=models.SET_NULL, related_name='progress_entries')
    goal = models.ForeignKey('goals.Goal', null=True, blank=True, on_delete=models.SET_NULL, related_name='progress_entries')

    entry_date = models.DateField(default=timezone.localdate)
    content = models.TextField()
    tags = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-entry_date', '-created_at']
        verbose_name_plural = 'progress log entries'

    def __str__(self):
        return f"{self.entry_date}: {self.content[:40]}"
