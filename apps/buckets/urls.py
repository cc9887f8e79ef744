from django.urls import path
from . import views

urlpatterns = [
    path('', views.bucket_list_view, name='bucket_list'),
    path('new/', views.bucket_create_view, name='bucket_create'),
    path('<int:pk>/edit/', views.bucket_edit_view, name='bucket_edit'),
    path('<int:pk>/delete/', views.bucket_delete_view, name='bucket_delete'),
    path('<int:pk>/toggle/', views.bucket_toggle_active_view, name='bucket_toggle_active'),
]
