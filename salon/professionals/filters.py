import django_filters
from salon.core.models import Category
from .models import Professional


class ProfessionalFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(field_name='name', lookup_expr='icontains', label='Search')
    category = django_filters.ChoiceFilter(choices=Category.choices)

    class Meta:
        model = Professional
        fields = ['search', 'category']
