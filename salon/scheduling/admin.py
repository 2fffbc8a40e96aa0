from django.contrib import admin
from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'client', 'professional', 'category', 'status', 'date', 'time', 'service']
    list_filter = ['status', 'category', 'date', 'professional']
    search_fields = ['client__name', 'client__phone', 'professional__name', 'service']
    ordering = ['-date', '-time']
    date_hierarchy = 'date'
