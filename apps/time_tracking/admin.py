from django.contrib import admin
from .models import TimeEntry, TimeTarget

@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ('entry_date', 'bucket', 'hours', 'entry_type', 'user')
    list_filter = ('entry_type', 'entry_date')
    search_fields = ('description',)

admin.site.register(TimeTarget)
