"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from salon.core.models import Category
from salon.clients.models import Client
from salon.professionals.models import Professional
from salon.catalog.models import Service, Package, PackageItem
from salon.scheduling.models import Appointment
from salon.payments.models import Payment, PaymentLine, PaymentMethod, ServiceType
from decimal import Decimal
from datetime import time
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        user = User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )
        return user

    @staticmethod
    def create_client(name=None, phone='11999990000', **kwargs):
        """Create a test client"""
        if not name:
            name = f'Cliente {TestDataFactory.random_string(6)}'
        return Client.objects.create(name=name, phone=phone, **kwargs)

    @staticmethod
    def create_professional(name=None, category=Category.SALAO, is_active=True):
        """Create a test professional"""
        if not name:
            name = f'Profissional {TestDataFactory.random_string(6)}'
        return Professional.objects.create(name=name, category=category, is_active=is_active)

    @staticmethod
    def create_service(name=None, category=Category.SALAO, price=Decimal('50.00'), is_active=True):
        """Create a test service"""
        if not name:
            name = f'Serviço {TestDataFactory.random_string(6)}'
        return Service.objects.create(name=name, category=category, price=price, is_active=is_active)

    @staticmethod
    def create_package(name=None, services=None, is_active=True):
        """
        Create a test package.

        services is a list of Service objects or (service, price, quantity)
        tuples; plain services use their own price and quantity 1.
        """
        if not name:
            name = f'Pacote {TestDataFactory.random_string(6)}'
        package = Package.objects.create(name=name, is_active=is_active)
        for position, entry in enumerate(services or []):
            if isinstance(entry, tuple):
                service, price, quantity = entry
            else:
                service, price, quantity = entry, entry.price, 1
            PackageItem.objects.create(
                package=package, service=service, price=price, quantity=quantity, position=position
            )
        return package

    @staticmethod
    def create_appointment(client=None, professional=None, date=None, appointment_time=None, **kwargs):
        """Create a test appointment"""
        client = client or TestDataFactory.create_client()
        professional = professional or TestDataFactory.create_professional()
        return Appointment.objects.create(
            client=client,
            professional=professional,
            category=kwargs.pop('category', professional.category),
            date=date or timezone.localdate(),
            time=appointment_time or time(10, 0),
            service=kwargs.pop('service', 'Corte'),
            **kwargs
        )

    @staticmethod
    def create_payment(client=None, lines=None, payment_method=PaymentMethod.PIX, date=None,
                       service_type=ServiceType.SERVICOS, package=None):
        """
        Create a test payment.

        lines is a list of (service, professional, value) tuples; the payment
        value is recalculated from them.
        """
        client = client or TestDataFactory.create_client()
        payment = Payment.objects.create(
            client=client,
            payment_method=payment_method,
            date=date or timezone.localdate(),
            time=time(14, 0),
            service_type=service_type,
            package=package,
            package_name=package.name if package else '',
        )
        for position, (service, professional, value) in enumerate(lines or []):
            PaymentLine.objects.create(
                payment=payment,
                service=service,
                service_name=service.name,
                service_category=service.category,
                value=value,
                professional=professional,
                is_package_service=package is not None,
                position=position,
            )
        payment.recalculate_value()
        return payment


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
