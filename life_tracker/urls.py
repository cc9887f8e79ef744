# life_tracker/urls.py
from django.contrib import admin
from django.urls import path, include
from apps.core import views as core_views


urlpatterns = [
    path('admin/', admin.site.urls),
    path('accounts/', include('django.contrib.auth.urls')),
    path('', core_views.dashboard_view, name='home'),  # Pusta ścieżka = Dashboard
    path('core/', include('apps.core.urls')),
    path('buckets/', include('apps.buckets.urls')),
    path('goals/', include('apps.goals.urls')),
    path('tasks/', include('apps.tasks.urls')),
    path('daily/', include('apps.checkins.urls')),
    path('time/', include('apps.time_tracking.urls')),
    path('progress/', include('apps.progress.urls')),
    path('trends/', include('apps.reports.urls')),
]
