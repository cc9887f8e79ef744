# apps/tasks/urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('', views.task_list_view, name='task_list'),        # to obsługuje /tasks/
    path('new/', views.task_create_view, name='task_create'), # to obsługuje /tasks/new/
    path('search/', views.task_search_view, name='task_search'),
    path('<int:pk>/', views.task_detail_hx_view, name='task_detail'),
    path('<int:pk>/edit/', views.task_edit_view, name='task_edit'),
    path('<int:pk>/complete/', views.task_complete_view, name='task_complete'),
    path('<int:pk>/reopen/', views.task_reopen_view, name='task_reopen'),
    path('<int:pk>/snooze/', views.task_snooze_view, name='task_snooze'),
    path('<int:pk>/unsnooze/', views.task_unsnooze_view, name='task_unsnooze'),
    path('<int:pk>/note/', views.task_add_note_view, name='task_add_note'),
    path('<int:pk>/delete/', views.task_delete_view, name='task_delete'),
]
