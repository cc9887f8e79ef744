from decimal import Decimal

from django import forms
from apps.time_tracking.models import TimeTarget
from .models import Bucket

class BucketForm(forms.ModelForm):
    target_percent = forms.DecimalField(
        required=False,
        min_value=Decimal('0'),
        max_value=Decimal('100'),
        decimal_places=1,
        label="Cel czasu (%)",
        widget=forms.NumberInput(attrs={'class': 'form-control', 'step': '0.5'})
    )

    class Meta:
        model = Bucket
        fields = ['name', 'description', 'parent', 'color', 'icon', 'sort_order']
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'description': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'parent': forms.Select(attrs={'class': 'form-select'}),
            'color': forms.TextInput(attrs={'type': 'color', 'class': 'form-control form-control-color'}),
            'icon': forms.TextInput(attrs={'class': 'form-control'}),
            'sort_order': forms.NumberInput(attrs={'class': 'form-control'}),
        }

    def __init__(self, user, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Rodzicem może być tylko główny bucket tego usera (i nie on sam)
        parents = Bucket.objects.filter(user=user, parent__isnull=True)
        if self.instance.pk:
            parents = parents.exclude(pk=self.instance.pk)
            target = TimeTarget.objects.filter(bucket=self.instance).first()
            if target is not None:
                self.fields['target_percent'].initial = target.target_percent
        self.fields['parent'].queryset = parents
        self.instance.user = user
