from decimal import Decimal
from django.db import transaction
from rest_framework import serializers
from .models import Service, Package, PackageItem


class ServiceSerializer(serializers.ModelSerializer):
    category_display = serializers.CharField(source='get_category_display', read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'), required=False)

    class Meta:
        model = Service
        fields = ['id', 'name', 'category', 'category_display', 'price', 'description', 'is_active', 'created_at', 'updated_at']
        extra_kwargs = {
            'name': {'error_messages': {'blank': 'Informe o nome', 'required': 'Informe o nome'}},
            'category': {'error_messages': {'required': 'Selecione a categoria', 'invalid_choice': 'Selecione a categoria'}},
        }


class PackageItemSerializer(serializers.ModelSerializer):
    service_name = serializers.CharField(source='service.name', read_only=True)
    service_category = serializers.CharField(source='service.category', read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'), required=False)
    quantity = serializers.IntegerField(min_value=1, required=False, default=1)

    class Meta:
        model = PackageItem
        fields = ['id', 'service', 'service_name', 'service_category', 'price', 'quantity']


class PackageSerializer(serializers.ModelSerializer):
    items = PackageItemSerializer(many=True)
    price = serializers.SerializerMethodField()
    service_count = serializers.SerializerMethodField()

    class Meta:
        model = Package
        fields = ['id', 'name', 'description', 'is_active', 'price', 'service_count', 'items', 'created_at', 'updated_at']
        extra_kwargs = {
            'name': {'error_messages': {'blank': 'O nome do pacote é obrigatório.', 'required': 'O nome do pacote é obrigatório.'}},
        }

    def get_price(self, obj):
        return obj.get_price()

    def get_service_count(self, obj):
        return obj.get_service_count()

    def validate_items(self, items):
        if not items:
            raise serializers.ValidationError('O pacote deve conter pelo menos um serviço.')
        service_ids = [item['service'].id for item in items]
        if len(service_ids) != len(set(service_ids)):
            raise serializers.ValidationError('Um serviço só pode aparecer uma vez no pacote.')
        return items

    def _write_items(self, package, items):
        package.items.all().delete()
        PackageItem.objects.bulk_create([
            PackageItem(
                package=package,
                service=item['service'],
                price=item.get('price', item['service'].price),
                quantity=item.get('quantity', 1),
                position=index,
            )
            for index, item in enumerate(items)
        ])

    @transaction.atomic
    def create(self, validated_data):
        items = validated_data.pop('items')
        package = Package.objects.create(**validated_data)
        self._write_items(package, items)
        return package

    @transaction.atomic
    def update(self, instance, validated_data):
        items = validated_data.pop('items', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if items is not None:
            self._write_items(instance, items)
        return instance
