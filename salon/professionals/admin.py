from django.contrib import admin
from .models import Professional


@admin.register(Professional)
class ProfessionalAdmin(admin.ModelAdmin):
    list_display = ['name', 'category', 'phone', 'is_active', 'created_at']
    list_filter = ['is_active', 'category']
    search_fields = ['name', 'phone']
    ordering = ['name']
