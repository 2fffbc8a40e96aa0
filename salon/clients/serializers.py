from rest_framework import serializers
from .models import Client


class ClientSerializer(serializers.ModelSerializer):
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Client
        fields = [
            'id', 'name', 'phone', 'email', 'birth_date', 'observations',
            'display_name', 'created_at', 'updated_at'
        ]


class ClientSearchSerializer(serializers.ModelSerializer):
    """Compact representation for autocomplete suggestions"""
    display_name = serializers.CharField(read_only=True)

    class Meta:
        model = Client
        fields = ['id', 'name', 'phone', 'display_name']
