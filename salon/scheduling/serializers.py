from rest_framework import serializers
from .models import Appointment


class AppointmentSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source='client.name', read_only=True)
    client_phone = serializers.CharField(source='client.phone', read_only=True)
    professional_name = serializers.CharField(source='professional.name', read_only=True)
    category_display = serializers.CharField(source='get_category_display', read_only=True)
    status_display = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Appointment
        fields = [
            'id', 'client', 'client_name', 'client_phone', 'professional', 'professional_name',
            'category', 'category_display', 'status', 'status_display', 'date', 'time',
            'service', 'observations', 'created_at', 'updated_at'
        ]
        extra_kwargs = {
            'client': {'error_messages': {'required': 'Selecione um cliente', 'null': 'Selecione um cliente'}},
            'professional': {'error_messages': {'required': 'Selecione um profissional', 'null': 'Selecione um profissional'}},
        }
