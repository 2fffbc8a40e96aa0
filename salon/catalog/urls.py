from django.urls import path
from .views import (
    service_list_create, service_list_all_status, service_detail,
    package_list_create, package_list_all_status, package_detail
)

urlpatterns = [
    # Service endpoints
    path('services/', service_list_create, name='service-list-create'),
    path('services/all-status/', service_list_all_status, name='service-list-all-status'),
    path('services/<int:pk>/', service_detail, name='service-detail'),

    # Package endpoints
    path('packages/', package_list_create, name='package-list-create'),
    path('packages/all-status/', package_list_all_status, name='package-list-all-status'),
    path('packages/<int:pk>/', package_detail, name='package-detail'),
]
