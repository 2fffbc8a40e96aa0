import django_filters
from salon.core.models import Category
from .models import Service, Package


class ServiceFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name='name', lookup_expr='icontains', label='Search')
    category = django_filters.ChoiceFilter(choices=Category.choices)

    class Meta:
        model = Service
        fields = ['search', 'category']


class PackageFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name='name', lookup_expr='icontains', label='Search')

    class Meta:
        model = Package
        fields = ['search']
