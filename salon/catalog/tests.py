"""
Tests for the catalog: services, packages and the seed_services command
"""
from decimal import Decimal
from io import StringIO
from django.core.management import call_command
from django.test import TestCase
from rest_framework import status
from salon.core.models import Category
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from salon.catalog.models import Service, Package, PackageItem
from salon.catalog.management.commands.seed_services import DEFAULT_SERVICES


class PackageModelTests(TestCase):

    def test_price_and_service_count(self):
        cut = TestDataFactory.create_service(price=Decimal('80.00'))
        nails = TestDataFactory.create_service(price=Decimal('35.00'), category=Category.ESTETICA)
        package = TestDataFactory.create_package(services=[
            (cut, Decimal('70.00'), 1),
            (nails, Decimal('30.00'), 2),
        ])
        self.assertEqual(package.get_price(), Decimal('130.00'))
        self.assertEqual(package.get_service_count(), 3)


class ServiceAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)

    def test_create_service(self):
        response = self.api.post('/api/v1/services/', {
            'name': 'Escova', 'category': 'salao', 'price': '50.00'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(str(response.data['price'])), Decimal('50.00'))
        self.assertEqual(response.data['category_display'], 'Salão')

    def test_price_defaults_to_zero(self):
        response = self.api.post('/api/v1/services/', {'name': 'Avaliação', 'category': 'estetica'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Service.objects.get(name='Avaliação').price, Decimal('0.00'))

    def test_create_service_validation_messages(self):
        response = self.api.post('/api/v1/services/', {'name': '', 'price': '-1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['name'], ['Informe o nome'])
        self.assertEqual(response.data['category'], ['Selecione a categoria'])
        self.assertIn('price', response.data)

    def test_active_and_all_status_lists(self):
        TestDataFactory.create_service(name='Corte')
        TestDataFactory.create_service(name='Luzes', is_active=False)
        response = self.api.get('/api/v1/services/')
        self.assertEqual([s['name'] for s in response.data], ['Corte'])
        response = self.api.get('/api/v1/services/all-status/')
        self.assertEqual([s['name'] for s in response.data], ['Corte', 'Luzes'])

    def test_filter_by_category(self):
        TestDataFactory.create_service(name='Corte', category=Category.SALAO)
        TestDataFactory.create_service(name='Jato', category=Category.BRONZE)
        response = self.api.get('/api/v1/services/?category=bronze')
        self.assertEqual([s['name'] for s in response.data], ['Jato'])

    def test_delete_service_in_package_conflicts(self):
        service = TestDataFactory.create_service()
        TestDataFactory.create_package(services=[service])
        response = self.api.delete(f'/api/v1/services/{service.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_delete_service(self):
        service = TestDataFactory.create_service()
        response = self.api.delete(f'/api/v1/services/{service.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Service.objects.filter(pk=service.pk).exists())


class PackageAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.cut = TestDataFactory.create_service(name='Corte', price=Decimal('80.00'))
        self.brush = TestDataFactory.create_service(name='Escova', price=Decimal('50.00'))

    def test_create_package_uses_service_price_by_default(self):
        response = self.api.post('/api/v1/packages/', {
            'name': 'Dia da noiva',
            'items': [
                {'service': self.cut.id},
                {'service': self.brush.id, 'price': '40.00', 'quantity': 2},
            ],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(str(response.data['price'])), Decimal('160.00'))
        self.assertEqual(response.data['service_count'], 3)
        self.assertEqual([i['service_name'] for i in response.data['items']], ['Corte', 'Escova'])

    def test_package_requires_name(self):
        response = self.api.post('/api/v1/packages/', {
            'name': '', 'items': [{'service': self.cut.id}]
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['name'], ['O nome do pacote é obrigatório.'])

    def test_package_requires_a_service(self):
        response = self.api.post('/api/v1/packages/', {'name': 'Vazio', 'items': []}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['items'], ['O pacote deve conter pelo menos um serviço.'])

    def test_package_rejects_duplicate_services(self):
        response = self.api.post('/api/v1/packages/', {
            'name': 'Duplicado',
            'items': [{'service': self.cut.id}, {'service': self.cut.id}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('items', response.data)

    def test_update_replaces_items(self):
        package = TestDataFactory.create_package(name='Combo', services=[self.cut, self.brush])
        response = self.api.put(f'/api/v1/packages/{package.id}/', {
            'name': 'Combo',
            'items': [{'service': self.brush.id, 'price': '45.00'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(list(package.items.values_list('service__name', flat=True)), ['Escova'])
        self.assertEqual(Decimal(str(response.data['price'])), Decimal('45.00'))

    def test_patch_without_items_keeps_items(self):
        package = TestDataFactory.create_package(name='Combo', services=[self.cut])
        response = self.api.patch(f'/api/v1/packages/{package.id}/', {'is_active': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(package.items.count(), 1)
        self.assertEqual(self.api.get('/api/v1/packages/').data, [])
        self.assertEqual(len(self.api.get('/api/v1/packages/all-status/').data), 1)

    def test_delete_package_removes_items(self):
        package = TestDataFactory.create_package(services=[self.cut])
        response = self.api.delete(f'/api/v1/packages/{package.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Package.objects.exists())
        self.assertFalse(PackageItem.objects.exists())


class SeedServicesCommandTests(TestCase):

    def test_seed_creates_default_services_once(self):
        out = StringIO()
        call_command('seed_services', stdout=out)
        self.assertEqual(Service.objects.count(), len(DEFAULT_SERVICES))
        call_command('seed_services', stdout=out)
        self.assertEqual(Service.objects.count(), len(DEFAULT_SERVICES))
        self.assertIn('already existed', out.getvalue())

    def test_clear_deactivates_other_services(self):
        custom = TestDataFactory.create_service(name='Serviço antigo')
        call_command('seed_services', '--clear', stdout=StringIO())
        custom.refresh_from_db()
        self.assertFalse(custom.is_active)
        self.assertEqual(Service.objects.filter(is_active=True).count(), len(DEFAULT_SERVICES))
