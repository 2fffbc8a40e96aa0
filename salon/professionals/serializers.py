from rest_framework import serializers
from .models import Professional


class ProfessionalSerializer(serializers.ModelSerializer):
    category_display = serializers.CharField(source='get_category_display', read_only=True)

    class Meta:
        model = Professional
        fields = ['id', 'name', 'category', 'category_display', 'phone', 'is_active', 'created_at', 'updated_at']
