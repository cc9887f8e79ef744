from decimal import Decimal

from django import forms
from apps.buckets.models import Bucket
from apps.tasks.models import Task
from .domain.metrics import MIN_TIMER_SECONDS, timer_seconds_to_hours
from .models import TimeEntry


def _limit_to_user(form, user):
    form.fields['bucket'].queryset = Bucket.objects.filter(user=user, is_active=True)
    form.fields['task'].queryset = Task.objects.filter(user=user).exclude(status=Task.StatusChoices.COMPLETE)
    form.fields['task'].required = False


class TimeEntryForm(forms.ModelForm):
    class Meta:
        model = TimeEntry
        fields = ['bucket', 'task', 'entry_date', 'hours', 'description']
        widgets = {
            'bucket': forms.Select(attrs={'class': 'form-select'}),
            'task': forms.Select(attrs={'class': 'form-select'}),
            'entry_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'hours': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.25', 'min': '0.01', 'max': '24'}),
            'description': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, user, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _limit_to_user(self, user)
        self.instance.user = user

    def clean_hours(self):
        hours = self.cleaned_data['hours']
        if hours is None or hours <= 0:
            raise forms.ValidationError("Liczba godzin musi być większa od zera.")
        if hours > 24:
            raise forms.ValidationError("Doba ma 24 godziny.")
        return hours


class TimerEntryForm(forms.ModelForm):
    """Wpis ze stopera: przeglądarka odsyła liczbę sekund."""
    seconds = forms.IntegerField(min_value=0, widget=forms.HiddenInput)

    class Meta:
        model = TimeEntry
        fields = ['bucket', 'task', 'description']
        widgets = {
            'bucket': forms.Select(attrs={'class': 'form-select'}),
            'task': forms.Select(attrs={'class': 'form-select'}),
            'description': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, user, *args, entry_date=None, **kwargs):
        super().__init__(*args, **kwargs)
        _limit_to_user(self, user)
        self.instance.user = user
        self.entry_date = entry_date

    def clean_seconds(self):
        seconds = self.cleaned_data['seconds']
        try:
            hours = timer_seconds_to_hours(seconds)
        except ValueError:
            raise forms.ValidationError(f"Stoper musi działać co najmniej {MIN_TIMER_SECONDS} s.")
        if hours > 24:
            raise forms.ValidationError("Doba ma 24 godziny.")
        return seconds

    def save(self, commit=True):
        entry = super().save(commit=False)
        entry.hours = Decimal(str(timer_seconds_to_hours(self.cleaned_data['seconds'])))
        entry.entry_type = TimeEntry.EntryType.TIMER
        if self.entry_date:
            entry.entry_date = self.entry_date
        if commit:
            entry.save()
        return entry
