from django.urls import path
from . import views

urlpatterns = [
    path('', views.progress_log_view, name='progress_log'),
    path('new/', views.progress_entry_create_view, name='progress_entry_create'),
    path('extract-tasks/', views.extract_tasks_view, name='progress_extract_tasks'),
    path('<int:pk>/edit/', views.progress_entry_edit_view, name='progress_entry_edit'),
    path('<int:pk>/delete/', views.progress_entry_delete_view, name='progress_entry_delete'),
]
