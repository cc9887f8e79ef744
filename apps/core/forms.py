from django import forms
from .models import UserSettings

class UserSettingsForm(forms.ModelForm):
    class Meta:
        model = UserSettings
        fields = ['awake_hours_per_day', 'check_in_reminder_time', 'timezone']
        widgets = {
            'awake_hours_per_day': forms.NumberInput(attrs={'class': 'form-control', 'min': 1, 'max': 24}),
            'check_in_reminder_time': forms.TimeInput(attrs={'type': 'time', 'class': 'form-control'}),
            'timezone': forms.Select(attrs={'class': 'form-select'}),
        }
