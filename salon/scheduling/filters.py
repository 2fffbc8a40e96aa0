import django_filters
from salon.core.models import Category
from .models import Appointment, AppointmentStatus


class AppointmentFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='date', lookup_expr='gte')
    end_date = django_filters.DateFilter(field_name='date', lookup_expr='lte')
    category = django_filters.ChoiceFilter(choices=Category.choices)
    professional = django_filters.NumberFilter(field_name='professional_id', lookup_expr='exact')
    status = django_filters.ChoiceFilter(choices=AppointmentStatus.choices)
    search = django_filters.CharFilter(field_name='client__name', lookup_expr='icontains', label='Client name')

    class Meta:
        model = Appointment
        fields = ['start_date', 'end_date', 'category', 'professional', 'status', 'search']
