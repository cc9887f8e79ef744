from django.http import JsonResponse
from django.shortcuts import render
from django.contrib.auth.decorators import login_required

from apps.core.models import user_today
from .domain.services import ReportService
from .domain.trends import TrendWindow


def _window(request) -> TrendWindow:
    try:
        return TrendWindow(int(request.GET.get('days', TrendWindow.MONTH.value)))
    except ValueError:
        return TrendWindow.MONTH


@login_required
def trends_view(request):
    """Strona trendów: check-iny, rozkład czasu i postęp celów w oknie 7/30/90 dni."""
    window = _window(request)
    trends = ReportService().get_trends(request.user, window, user_today(request.user))
    trends['windows'] = [w.value for w in TrendWindow]
    return render(request, 'reports/trends.html', trends)


@login_required
def stats_api_view(request):
    """
    API zwracające dane do wykresów (check-iny, czas, cele).
    """
    window = _window(request)
    return JsonResponse(ReportService().get_chart_data(request.user, window, user_today(request.user)))
