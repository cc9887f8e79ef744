from django import forms
from apps.buckets.models import Bucket
from apps.goals.models import Goal
from .models import PRESET_TAGS, ProgressLogEntry


def normalize_tags(preset, custom: str):
    """Tagi z checkboxów + wpisane ręcznie (po przecinku), małymi literami, bez duplikatów."""
    tags = [t.strip().lower() for t in list(preset or []) + (custom or '').split(',')]
    return list(dict.fromkeys(t for t in tags if t))


class ProgressLogForm(forms.ModelForm):
    preset_tags = forms.MultipleChoiceField(
        choices=[(t, t) for t in PRESET_TAGS],
        widget=forms.CheckboxSelectMultiple,
        required=False,
        label="Tagi"
    )
    custom_tags = forms.CharField(
        required=False,
        label="Własne tagi",
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'np. zdrowie, praca'})
    )

    class Meta:
        model = ProgressLogEntry
        fields = ['entry_date', 'content', 'bucket', 'goal']
        widgets = {
            'entry_date': forms.DateInput(attrs={'type': 'date', 'class': 'form-control'}),
            'content': forms.Textarea(attrs={'class': 'form-control', 'rows': 5}),
            'bucket': forms.Select(attrs={'class': 'form-select'}),
            'goal': forms.Select(attrs={'class': 'form-select'}),
        }

    def __init__(self, user, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['bucket'].queryset = Bucket.objects.filter(user=user, is_active=True)
        self.fields['goal'].queryset = Goal.objects.filter(user=user).exclude(status=Goal.Status.ARCHIVED)
        self.instance.user = user

        if self.instance.pk:
            tags = self.instance.tags or []
            self.fields['preset_tags'].initial = [t for t in tags if t in PRESET_TAGS]
            self.fields['custom_tags'].initial = ', '.join(t for t in tags if t not in PRESET_TAGS)

    def clean_content(self):
        content = self.cleaned_data['content'].strip()
        if not content:
            raise forms.ValidationError("Wpis nie może być pusty.")
        return content

    def save(self, commit=True):
        entry = super().save(commit=False)
        entry.tags = normalize_tags(self.cleaned_data.get('preset_tags'), self.cleaned_data.get('custom_tags'))
        if commit:
            entry.save()
        return entry
