from django.contrib import admin
from .models import Payment, PaymentLine


class PaymentLineInline(admin.TabularInline):
    model = PaymentLine
    extra = 0
    fields = ['service', 'service_name', 'service_category', 'value', 'professional', 'is_package_service', 'position']


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['id', 'client', 'payment_method', 'value', 'service_type', 'package_name', 'date', 'time']
    list_filter = ['payment_method', 'service_type', 'is_partial_value', 'date']
    search_fields = ['client__name', 'client__phone', 'package_name', 'description']
    readonly_fields = ['value', 'created_at', 'updated_at']
    date_hierarchy = 'date'
    inlines = [PaymentLineInline]


@admin.register(PaymentLine)
class PaymentLineAdmin(admin.ModelAdmin):
    list_display = ['payment', 'service_name', 'service_category', 'value', 'professional', 'is_package_service']
    list_filter = ['service_category', 'is_package_service', 'professional']
    search_fields = ['service_name', 'payment__client__name', 'professional__name']
