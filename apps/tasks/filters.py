import django_filters
from django import forms
from apps.buckets.models import Bucket
from .models import Task


def user_buckets(request):
    if request is None:
        return Bucket.objects.none()
    return Bucket.objects.filter(user=request.user)


class TaskFilter(django_filters.FilterSet):
    title = django_filters.CharFilter(
        lookup_expr='icontains',
        label="Tytuł zawiera",
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Szukaj...'})
    )
    status = django_filters.ChoiceFilter(
        choices=Task.StatusChoices.choices,
        label="Status",
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    priority = django_filters.ChoiceFilter(
        choices=Task.PriorityChoices.choices,
        label="Priorytet",
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    bucket = django_filters.ModelChoiceFilter(
        queryset=user_buckets,
        label="Obszar",
        widget=forms.Select(attrs={'class': 'form-select'})
    )
    is_delegated = django_filters.BooleanFilter(
        label="Zlecone",
        widget=forms.NullBooleanSelect(attrs={'class': 'form-select'})
    )

    class Meta:
        model = Task
        fields = ['title', 'status', 'priority', 'bucket', 'is_delegated']
