from django import forms
from .models import Measure, SCALE_MIN, SCALE_MAX


class MeasureForm(forms.ModelForm):
    class Meta:
        model = Measure
        fields = ['question_text', 'question_type', 'baseline_score', 'target_score', 'sort_order']
        widgets = {
            'question_text': forms.TextInput(attrs={'class': 'form-control'}),
            'question_type': forms.Select(attrs={'class': 'form-select'}),
            'baseline_score': forms.NumberInput(attrs={'class': 'form-control', 'min': SCALE_MIN, 'max': SCALE_MAX}),
            'target_score': forms.NumberInput(attrs={'class': 'form-control', 'min': SCALE_MIN, 'max': SCALE_MAX}),
            'sort_order': forms.NumberInput(attrs={'class': 'form-control'}),
        }


class DailyCheckInForm(forms.Form):
    """Jedno pole score (+ notatka) na każde aktywne pytanie."""

    def __init__(self, measures, *args, responses=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.measures = list(measures)
        responses = responses or {}

        for measure in self.measures:
            current = responses.get(measure.pk)
            if measure.is_binary:
                field = forms.TypedChoiceField(
                    choices=[(1, 'Tak'), (0, 'Nie')],
                    coerce=int,
                    widget=forms.RadioSelect
                )
            else:
                field = forms.IntegerField(
                    min_value=SCALE_MIN,
                    max_value=SCALE_MAX,
                    widget=forms.NumberInput(attrs={'type': 'range', 'class': 'form-range'})
                )
            field.label = measure.question_text
            field.initial = current.score if current else (None if measure.is_binary else 5)
            self.fields[f'score_{measure.pk}'] = field
            self.fields[f'notes_{measure.pk}'] = forms.CharField(
                required=False,
                initial=current.notes if current else '',
                widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Notatka (opcjonalnie)'})
            )

    def answers(self):
        """{measure_id: (score, notes)} z oczyszczonych danych."""
        return {
            m.pk: (self.cleaned_data[f'score_{m.pk}'], self.cleaned_data.get(f'notes_{m.pk}', ''))
            for m in self.measures
        }

    def field_pairs(self):
        for m in self.measures:
            yield m, self[f'score_{m.pk}'], self[f'notes_{m.pk}']
