from django.contrib import admin
from .models import Task, TaskActivity


class TaskActivityInline(admin.TabularInline):
    model = TaskActivity
    extra = 0
    readonly_fields = ('timestamp',)


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'bucket', 'status', 'priority', 'due_date', 'is_recurring', 'is_delegated')
    list_filter = ('status', 'priority', 'is_recurring', 'is_delegated')
    search_fields = ('title', 'description')
    inlines = [TaskActivityInline]
