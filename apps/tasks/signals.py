# apps/tasks/signals.py
from django.db.models.signals import pre_save, post_save
from django.dispatch import receiver
from .models import Task, TaskActivity
from .domain.entities import TaskStatus


@receiver(pre_save, sender=Task)
def track_task_changes(sender, instance, **kwargs):
    """
    Przed zapisem sprawdzamy stary stan zadania, żeby wykryć zmiany.
    Zapisujemy to w tymczasowym atrybucie instancji.
    """
    if instance.id:
        instance._old_status = (
            Task.objects.filter(id=instance.id).values_list('status', flat=True).first()
        )
    else:
        instance._old_status = None


@receiver(post_save, sender=Task)
def log_task_changes(sender, instance, created, **kwargs):
    """
    Po zapisie sprawdzamy, co się zmieniło i dopisujemy do dziennika zadania.
    """
    if created:
        TaskActivity.objects.create(task=instance, text=f"Utworzono zadanie: {instance.title}")
        return

    old_status = getattr(instance, '_old_status', None)
    if old_status is None or old_status == instance.status:
        return

    if instance.status == TaskStatus.COMPLETE.value:
        text = "Zadanie ukończone"
        if instance.completion_note:
            text = f"{text}: {instance.completion_note}"
    elif instance.status == TaskStatus.SNOOZED.value:
        text = f"Uśpiono do {instance.snoozed_until:%Y-%m-%d}" if instance.snoozed_until else "Uśpiono"
    elif old_status == TaskStatus.COMPLETE.value:
        text = "Zadanie otwarte ponownie"
    else:
        text = f"Zmiana statusu: {instance.get_status_display()}"

    TaskActivity.objects.create(task=instance, text=text)
