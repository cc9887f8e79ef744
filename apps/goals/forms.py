from django import forms
from apps.buckets.models import Bucket
from apps.checkins.models import Measure
from .models import Goal

class GoalForm(forms.ModelForm):
    class Meta:
        model = Goal
        fields = [
            'title', 'bucket', 'parent', 'description', 'status', 'priority',
            'target_date', 'measure', 'target_value', 'target_type',
        ]
        widgets = {
            'title': forms.TextInput(attrs={'class': 'form-control', 'required': True}),
            'bucket': forms.Select(attrs={'class': 'form-select'}),
            'parent': forms.Select(attrs={'class': 'form-select'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'priority': forms.Select(attrs={'class': 'form-select'}),
            'target_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'measure': forms.Select(attrs={'class': 'form-select'}),
            'target_value': forms.NumberInput(attrs={'class': 'form-control', 'step': '0.1'}),
            'target_type': forms.Select(attrs={'class': 'form-select'}),
        }

    def __init__(self, user, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Tylko dane usera (żeby nie widział cudzych)
        self.fields['bucket'].queryset = Bucket.objects.filter(user=user, is_active=True)
        self.fields['measure'].queryset = Measure.objects.filter(user=user, is_active=True)

        # Rodzic musi być celem najwyższego poziomu
        parents = Goal.objects.filter(user=user, parent__isnull=True).exclude(status=Goal.Status.ARCHIVED)
        if self.instance.pk:
            parents = parents.exclude(pk=self.instance.pk)
        self.fields['parent'].queryset = parents

        if not self.instance.pk:
            self.instance.user = user

    def clean(self):
        cleaned = super().clean()
        if cleaned.get('target_value') is not None and not cleaned.get('measure'):
            self.add_error('measure', "Wartość docelowa wymaga powiązanego pytania.")
        return cleaned


class GoalStatusForm(forms.Form):
    status = forms.ChoiceField(choices=Goal.Status.choices)
