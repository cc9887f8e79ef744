# apps/core/models.py
import pytz
from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db.models.signals import post_save
from django.dispatch import receiver

from apps.core.domain.dates import local_today


class UserSettings(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='tracker_settings')

    # Ile godzin dziennie "mamy do dyspozycji" - baza dla celów procentowych
    awake_hours_per_day = models.PositiveIntegerField(
        default=16,
        validators=[MinValueValidator(1), MaxValueValidator(24)]
    )
    check_in_reminder_time = models.TimeField(default="20:00")
    timezone = models.CharField(
        max_length=64,
        default='UTC',
        choices=[(tz, tz) for tz in pytz.common_timezones]
    )

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Settings of {self.user.username}"

    def today(self):
        return local_today(self.timezone)


def get_user_settings(user) -> UserSettings:
    """Zwraca ustawienia usera, tworząc je dla starych kont bez profilu."""
    try:
        return user.tracker_settings
    except UserSettings.DoesNotExist:
        return UserSettings.objects.create(user=user)


def user_today(user):
    return get_user_settings(user).today()


# Sygnał: Twórz ustawienia automatycznie przy tworzeniu Usera
@receiver(post_save, sender=User)
def create_user_settings(sender, instance, created, **kwargs):
    if created:
        UserSettings.objects.create(user=instance)
