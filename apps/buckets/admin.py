from django.contrib import admin
from .models import Bucket

@admin.register(Bucket)
class BucketAdmin(admin.ModelAdmin):
    list_display = ('name', 'parent', 'color', 'sort_order', 'is_active', 'user')
    list_filter = ('is_active',)
    search_fields = ('name',)
