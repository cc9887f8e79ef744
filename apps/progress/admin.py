from django.contrib import admin
from .models import ProgressLogEntry

@admin.register(ProgressLogEntry)
class ProgressLogEntryAdmin(admin.ModelAdmin):
    list_display = ('entry_date', 'user', 'bucket', 'goal')
    list_filter = ('entry_date',)
    search_fields = ('content',)
