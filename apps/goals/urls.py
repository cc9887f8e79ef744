from django.urls import path
from . import views

urlpatterns = [
    path('', views.goal_list_view, name='goal_list'),
    path('new/', views.goal_create_view, name='goal_create'),
    path('<int:pk>/', views.goal_detail_view, name='goal_detail'),
    path('<int:pk>/edit/', views.goal_edit_view, name='goal_edit'),
    path('<int:pk>/status/', views.goal_status_view, name='goal_status'),
    path('<int:pk>/delete/', views.goal_delete_view, name='goal_delete'),
]
