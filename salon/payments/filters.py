import django_filters
from salon.core.models import Category
from .models import Payment, PaymentMethod


class PaymentFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    category = django_filters.ChoiceFilter(choices=Category.choices, method='filter_category')
    professional = django_filters.NumberFilter(method='filter_professional')
    payment_method = django_filters.ChoiceFilter(choices=PaymentMethod.choices)
    search = django_filters.CharFilter(field_name='client__name', lookup_expr='icontains', label='Client name')

    class Meta:
        model = Payment
        fields = ['start_date', 'end_date', 'category', 'professional', 'payment_method', 'search']

    def filter_category(self, queryset, name, value):
        """Payments with at least one line in the category"""
        return queryset.filter(lines__service_category=value).distinct()

    def filter_professional(self, queryset, name, value):
        """Payments with at least one line performed by the professional"""
        return queryset.filter(lines__professional_id=value).distinct()
