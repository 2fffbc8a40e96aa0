"""
URL configuration for the salon project.

All domain endpoints live under /api/v1/; each app contributes its own
urlpatterns.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "Salon Manager Admin"
admin.site.site_title = "Salon Manager Admin Portal"
admin.site.index_title = "Gestão do Salão"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('salon.core.urls')),
    path('api/v1/', include('salon.clients.urls')),
    path('api/v1/', include('salon.professionals.urls')),
    path('api/v1/', include('salon.catalog.urls')),
    path('api/v1/', include('salon.scheduling.urls')),
    path('api/v1/', include('salon.payments.urls')),
    path('api/v1/', include('salon.reports.urls')),
]
