from django.urls import path
from .views import appointment_list_create, appointment_detail, appointment_search

urlpatterns = [
    path('appointments/', appointment_list_create, name='appointment-list-create'),
    path('appointments/search/', appointment_search, name='appointment-search'),
    path('appointments/<int:pk>/', appointment_detail, name='appointment-detail'),
]
