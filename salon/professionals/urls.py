from django.urls import path
from .views import professional_list_create, professional_list_all_status, professional_detail

urlpatterns = [
    path('professionals/', professional_list_create, name='professional-list-create'),
    path('professionals/all-status/', professional_list_all_status, name='professional-list-all-status'),
    path('professionals/<int:pk>/', professional_detail, name='professional-detail'),
]
