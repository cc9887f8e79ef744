from django.urls import path
from . import views

urlpatterns = [
    path('', views.daily_check_in_view, name='daily_check_in'),
    path('measures/', views.measure_list_view, name='measure_list'),
    path('measures/new/', views.measure_create_view, name='measure_create'),
    path('measures/<int:pk>/edit/', views.measure_edit_view, name='measure_edit'),
    path('measures/<int:pk>/toggle/', views.measure_toggle_active_view, name='measure_toggle_active'),
    path('measures/<int:pk>/delete/', views.measure_delete_view, name='measure_delete'),
]
