# apps/buckets/models.py
from django.db import models
from django.conf import settings
from django.core.exceptions import ValidationError

from apps.buckets.domain.hierarchy import HierarchyError, check_parent


class Bucket(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE)
    name = models.CharField(max_length=100)  # np. Praca, Zdrowie, Rodzina
    description = models.TextField(blank=True)
    parent = models.ForeignKey(
        'self',
        null=True, blank=True,
        on_delete=models.PROTECT,
        related_name='children'
    )
    color = models.CharField(max_length=7, default="#6c757d")  # HEX, np. #0000FF
    icon = models.CharField(max_length=50, default="bi-folder", blank=True)  # Ikona Bootstrap
    sort_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name

    def clean(self):
        has_children = bool(self.pk) and self.children.exists()
        try:
            check_parent(
                self.pk,
                self.parent_id,
                self.parent.parent_id if self.parent_id else None,
                has_children
            )
        except HierarchyError as e:
            raise ValidationError({'parent': str(e)})
