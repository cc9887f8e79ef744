#apps/tasks/forms.py
from decimal import Decimal

from django import forms
from apps.buckets.models import Bucket
from apps.goals.models import Goal
from .application.use_cases import CreateTaskInput
from .domain.entities import RecurrenceRule, TaskPriority
from .models import Task


class TaskForm(forms.ModelForm):
    class Meta:
        model = Task
        fields = [
            'title', 'bucket', 'goal', 'description', 'priority', 'due_date',
            'expected_hours', 'is_recurring', 'recurrence_rule',
            'is_delegated', 'delegated_to', 'progress_notes',
        ]
        widgets = {
            'title': forms.TextInput(attrs={'class': 'form-control', 'required': True}),
            'bucket': forms.Select(attrs={'class': 'form-select'}),
            'goal': forms.Select(attrs={'class': 'form-select'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'priority': forms.Select(attrs={'class': 'form-select'}),
            'due_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'expected_hours': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.25', 'min': '0.25'}),
            'recurrence_rule': forms.Select(attrs={'class': 'form-select'}),
            'delegated_to': forms.TextInput(attrs={'class': 'form-control'}),
            'progress_notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
        }

    def __init__(self, user, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = user
        self.fields['bucket'].queryset = Bucket.objects.filter(user=user, is_active=True)
        self.fields['goal'].queryset = Goal.objects.filter(user=user).exclude(status=Goal.Status.ARCHIVED)
        self.fields['goal'].required = False

    def clean(self):
        cleaned = super().clean()
        if cleaned.get('is_recurring') and not cleaned.get('recurrence_rule'):
            self.add_error('recurrence_rule', "Wybierz, jak często zadanie ma się powtarzać.")
        if cleaned.get('is_delegated') and not (cleaned.get('delegated_to') or '').strip():
            self.add_error('delegated_to', "Podaj, komu zlecono zadanie.")
        return cleaned

    def to_input(self) -> CreateTaskInput:
        """Dane z formularza -> DTO dla use case'ów."""
        data = self.cleaned_data
        hours = data.get('expected_hours')
        rule = data.get('recurrence_rule')
        return CreateTaskInput(
            title=data['title'],
            user_id=self.user.id,
            bucket_id=data['bucket'].id if data.get('bucket') else None,
            description=data.get('description') or "",
            priority=TaskPriority(data.get('priority') or TaskPriority.MEDIUM),
            goal_id=data['goal'].id if data.get('goal') else None,
            due_date=data.get('due_date'),
            expected_hours=float(hours) if isinstance(hours, Decimal) else hours,
            is_recurring=bool(data.get('is_recurring')),
            recurrence_rule=RecurrenceRule(rule) if rule else None,
            is_delegated=bool(data.get('is_delegated')),
            delegated_to=(data.get('delegated_to') or "").strip(),
            progress_notes=data.get('progress_notes') or "",
        )


class CompleteTaskForm(forms.Form):
    completion_note = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2, 'placeholder': 'Jak poszło?'})
    )


class SnoozeTaskForm(forms.Form):
    days = forms.IntegerField(
        min_value=1, max_value=365, initial=1,
        widget=forms.NumberInput(attrs={'class': 'form-control', 'min': 1})
    )


class TaskNoteForm(forms.Form):
    text = forms.CharField(widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 2}))
