from django.contrib import admin
from .models import Measure, CheckInResponse

@admin.register(Measure)
class MeasureAdmin(admin.ModelAdmin):
    list_display = ('question_text', 'question_type', 'baseline_score', 'target_score', 'is_active')
    list_filter = ('question_type', 'is_active')
    search_fields = ('question_text',)

@admin.register(CheckInResponse)
class CheckInResponseAdmin(admin.ModelAdmin):
    list_display = ('measure', 'check_in_date', 'score')
    list_filter = ('check_in_date', 'measure')
