from django.contrib import admin
from .models import Goal, GoalCheckInLog

@admin.register(Goal)
class GoalAdmin(admin.ModelAdmin):
    list_display = ('title', 'bucket', 'status', 'priority', 'target_date')
    list_filter = ('status', 'priority')
    search_fields = ('title',)

admin.site.register(GoalCheckInLog)
