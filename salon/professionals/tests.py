"""
Tests for the professionals API
"""
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from salon.core.models import Category
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from salon.professionals.models import Professional


class ProfessionalAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.active = TestDataFactory.create_professional(name='Carla', category=Category.SALAO)
        self.esthetics = TestDataFactory.create_professional(name='Denise', category=Category.ESTETICA)
        self.inactive = TestDataFactory.create_professional(name='Eva', is_active=False)

    def test_default_list_only_has_active(self):
        response = self.api.get('/api/v1/professionals/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p['name'] for p in response.data], ['Carla', 'Denise'])

    def test_all_status_list(self):
        response = self.api.get('/api/v1/professionals/all-status/')
        self.assertEqual([p['name'] for p in response.data], ['Carla', 'Denise', 'Eva'])

    def test_filter_by_category_and_search(self):
        response = self.api.get('/api/v1/professionals/?category=estetica')
        self.assertEqual([p['name'] for p in response.data], ['Denise'])
        response = self.api.get('/api/v1/professionals/all-status/?search=ev')
        self.assertEqual([p['name'] for p in response.data], ['Eva'])

    def test_invalid_category_filter(self):
        response = self.api.get('/api/v1/professionals/?category=barbearia')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_professional(self):
        response = self.api.post('/api/v1/professionals/', {
            'name': 'Fabiana', 'category': 'bronze', 'phone': '11977776666'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['category_display'], 'Bronze')
        self.assertTrue(response.data['is_active'])

    def test_deactivate_professional(self):
        response = self.api.patch(f'/api/v1/professionals/{self.active.id}/', {'is_active': False}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.active.refresh_from_db()
        self.assertFalse(self.active.is_active)

    def test_delete_professional(self):
        response = self.api.delete(f'/api/v1/professionals/{self.inactive.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Professional.objects.filter(pk=self.inactive.pk).exists())

    def test_delete_professional_with_payment_lines_conflicts(self):
        service = TestDataFactory.create_service()
        TestDataFactory.create_payment(lines=[(service, self.active, Decimal('40.00'))])
        response = self.api.delete(f'/api/v1/professionals/{self.active.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertIn('error', response.data)

    def test_delete_professional_with_appointments_conflicts(self):
        TestDataFactory.create_appointment(professional=self.esthetics)
        response = self.api.delete(f'/api/v1/professionals/{self.esthetics.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
