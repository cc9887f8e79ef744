from django.urls import path
from . import views

urlpatterns = [
    path('', views.time_entry_list_view, name='time_entry_list'),
    path('new/', views.time_entry_create_view, name='time_entry_create'),
    path('timer/', views.timer_entry_view, name='time_entry_timer'),
    path('week/', views.weekly_overview_view, name='weekly_overview'),
    path('<int:pk>/edit/', views.time_entry_edit_view, name='time_entry_edit'),
    path('<int:pk>/delete/', views.time_entry_delete_view, name='time_entry_delete'),
]
