from django.urls import path
from .views import payment_list_create, payment_detail

urlpatterns = [
    path('payments/', payment_list_create, name='payment-list-create'),
    path('payments/<int:pk>/', payment_detail, name='payment-detail'),
]
