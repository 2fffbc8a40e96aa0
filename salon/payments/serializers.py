from decimal import Decimal
from django.db import transaction
from rest_framework import serializers
from salon.catalog.models import Package
from .composer import (
    SERVICE_TYPE_SERVICOS, MSG_CLIENT_REQUIRED, MSG_METHOD_REQUIRED, MSG_NEGATIVE_VALUE,
    billed_services, check_lines, check_package_lines, package_service_counts,
)
from .models import Payment, PaymentLine

PACKAGE_FIELDS = {'lines', 'package', 'service_type'}


class PaymentLineSerializer(serializers.ModelSerializer):
    professional_name = serializers.CharField(source='professional.name', read_only=True)
    service_name = serializers.CharField(max_length=200, required=False, allow_blank=True)
    value = serializers.DecimalField(
        max_digits=10, decimal_places=2, min_value=Decimal('0.00'),
        error_messages={'min_value': MSG_NEGATIVE_VALUE}
    )

    class Meta:
        model = PaymentLine
        fields = [
            'id', 'service', 'service_name', 'service_category', 'value',
            'professional', 'professional_name', 'is_package_service', 'position'
        ]
        read_only_fields = ['position']
        extra_kwargs = {
            'service': {'required': False, 'allow_null': True},
            'service_category': {'required': False},
            # Missing professionals are reported for the whole grid in PaymentSerializer.validate
            'professional': {'required': False, 'allow_null': True},
        }

    def validate(self, attrs):
        service = attrs.get('service')
        if not attrs.get('service_name'):
            if service is None:
                raise serializers.ValidationError({'service_name': 'Informe o serviço'})
            attrs['service_name'] = service.name
        if not attrs.get('service_category'):
            if service is None:
                raise serializers.ValidationError({'service_category': 'Selecione a categoria'})
            attrs['service_category'] = service.category
        return attrs


class PaymentSerializer(serializers.ModelSerializer):
    client_name = serializers.CharField(source='client.name', read_only=True)
    client_phone = serializers.CharField(source='client.phone', read_only=True)
    payment_method_display = serializers.CharField(source='get_payment_method_display', read_only=True)
    service_type_display = serializers.CharField(source='get_service_type_display', read_only=True)
    package = serializers.PrimaryKeyRelatedField(queryset=Package.objects.all(), required=False, allow_null=True)
    lines = PaymentLineSerializer(many=True)

    class Meta:
        model = Payment
        fields = [
            'id', 'client', 'client_name', 'client_phone', 'payment_method', 'payment_method_display',
            'value', 'is_partial_value', 'date', 'time', 'description', 'service_type',
            'service_type_display', 'package', 'package_name', 'lines', 'created_at', 'updated_at'
        ]
        read_only_fields = ['value', 'package_name']
        extra_kwargs = {
            'client': {'error_messages': {'required': MSG_CLIENT_REQUIRED, 'null': MSG_CLIENT_REQUIRED}},
            'payment_method': {'error_messages': {
                'required': MSG_METHOD_REQUIRED,
                'blank': MSG_METHOD_REQUIRED,
                'invalid_choice': MSG_METHOD_REQUIRED,
            }},
        }

    def _current_lines(self):
        if self.instance is None:
            return []
        return [
            {
                'service': line.service,
                'value': line.value,
                'professional': line.professional,
                'is_package_service': line.is_package_service,
            }
            for line in self.instance.lines.all()
        ]

    def validate(self, attrs):
        instance = self.instance
        if instance is None:
            service_type = attrs.get('service_type', SERVICE_TYPE_SERVICOS)
            package = attrs.get('package')
        else:
            service_type = attrs.get('service_type', instance.service_type)
            package = attrs.get('package', instance.package)
        package_changed = instance is None or package != instance.package
        current_lines = self._current_lines()
        lines = attrs['lines'] if 'lines' in attrs else current_lines

        errors = {}
        lines_error = check_lines(lines)
        if lines_error:
            errors['total_value'] = lines_error
        if instance is None or PACKAGE_FIELDS & set(attrs):
            package_counts = package_service_counts(package) if package is not None else None
            if package_changed:
                package_error = check_package_lines(service_type, package, lines, expected=package_counts)
            else:
                # Existing package payments keep the services they were sold with
                sold = billed_services(line for line in current_lines if line['is_package_service'])
                package_error = check_package_lines(service_type, package, lines, instance.package_name, sold)
                if package_error and package_counts is not None:
                    package_error = check_package_lines(service_type, package, lines, expected=package_counts)
            if package_error:
                errors['package'] = package_error
        if errors:
            raise serializers.ValidationError(errors)
        return attrs

    def _write_lines(self, payment, lines):
        payment.lines.all().delete()
        PaymentLine.objects.bulk_create([
            PaymentLine(
                payment=payment,
                service=line.get('service'),
                service_name=line['service_name'],
                service_category=line['service_category'],
                value=line['value'],
                professional=line['professional'],
                is_package_service=line.get('is_package_service', False),
                position=index,
            )
            for index, line in enumerate(lines)
        ])

    @transaction.atomic
    def create(self, validated_data):
        lines = validated_data.pop('lines')
        package = validated_data.get('package')
        payment = Payment.objects.create(package_name=package.name if package else '', **validated_data)
        self._write_lines(payment, lines)
        payment.recalculate_value()
        return payment

    @transaction.atomic
    def update(self, instance, validated_data):
        lines = validated_data.pop('lines', None)
        if 'package' in validated_data and validated_data['package'] != instance.package:
            package = validated_data['package']
            instance.package_name = package.name if package else ''
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()
        if lines is not None:
            self._write_lines(instance, lines)
        instance.recalculate_value()
        return instance
