from django.urls import path
from .views import report_data

urlpatterns = [
    path('reports/', report_data, name='report-data'),
]
