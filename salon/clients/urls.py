from django.urls import path
from .views import client_list_create, client_detail, client_search

urlpatterns = [
    path('clients/', client_list_create, name='client-list-create'),
    path('clients/search/', client_search, name='client-search'),
    path('clients/<int:pk>/', client_detail, name='client-detail'),
]
