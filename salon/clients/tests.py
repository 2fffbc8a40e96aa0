"""
Tests for the clients API: CRUD, search, pagination and protected deletes
"""
from decimal import Decimal
from django.test import TestCase
from rest_framework import status
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from salon.clients.models import Client
from salon.clients.views import search_clients
from salon.scheduling.models import Appointment


class ClientModelTests(TestCase):

    def test_display_name(self):
        self.assertEqual(TestDataFactory.create_client(name='Ana', phone='1199').display_name, 'Ana (1199)')
        self.assertEqual(TestDataFactory.create_client(name='Bia', phone='').display_name, 'Bia')


class ClientAPITests(TestCase):
    """Test client CRUD endpoints"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)

    def test_create_client(self):
        response = self.api.post('/api/v1/clients/', {
            'name': 'Ana Souza',
            'phone': '11988887777',
            'email': 'ana@example.com',
            'birth_date': '1990-05-20',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['display_name'], 'Ana Souza (11988887777)')
        self.assertTrue(Client.objects.filter(name='Ana Souza').exists())

    def test_create_client_requires_name(self):
        response = self.api.post('/api/v1/clients/', {'phone': '11988887777'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('name', response.data)

    def test_list_returns_plain_list_without_page(self):
        TestDataFactory.create_client()
        TestDataFactory.create_client()
        response = self.api.get('/api/v1/clients/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsInstance(response.data, list)
        self.assertEqual(len(response.data), 2)

    def test_list_search_by_name_or_phone(self):
        TestDataFactory.create_client(name='Ana Souza', phone='11988887777')
        TestDataFactory.create_client(name='Beatriz Melo', phone='21955554444')
        response = self.api.get('/api/v1/clients/?search=souza')
        self.assertEqual([c['name'] for c in response.data], ['Ana Souza'])
        response = self.api.get('/api/v1/clients/?search=2195')
        self.assertEqual([c['name'] for c in response.data], ['Beatriz Melo'])

    def test_paginated_list(self):
        for _ in range(5):
            TestDataFactory.create_client()
        response = self.api.get('/api/v1/clients/?page=2&limit=2')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 5)
        self.assertEqual(response.data['page'], 2)
        self.assertEqual(response.data['page_size'], 2)
        self.assertEqual(response.data['total_pages'], 3)
        self.assertEqual(response.data['next'], 3)
        self.assertEqual(response.data['previous'], 1)
        self.assertEqual(len(response.data['results']), 2)

    def test_paginated_list_rejects_non_numeric_page(self):
        response = self.api.get('/api/v1/clients/?page=abc')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_update_client(self):
        client = TestDataFactory.create_client(name='Ana')
        response = self.api.patch(f'/api/v1/clients/{client.id}/', {'observations': 'Alergia a amônia'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        client.refresh_from_db()
        self.assertEqual(client.observations, 'Alergia a amônia')

    def test_get_missing_client(self):
        response = self.api.get('/api/v1/clients/99999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_client_removes_appointments(self):
        client = TestDataFactory.create_client()
        TestDataFactory.create_appointment(client=client)
        response = self.api.delete(f'/api/v1/clients/{client.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Appointment.objects.exists())

    def test_delete_client_with_payments_conflicts(self):
        client = TestDataFactory.create_client()
        service = TestDataFactory.create_service()
        professional = TestDataFactory.create_professional()
        TestDataFactory.create_payment(client=client, lines=[(service, professional, Decimal('50.00'))])
        response = self.api.delete(f'/api/v1/clients/{client.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertTrue(Client.objects.filter(pk=client.pk).exists())


class ClientSearchTests(TestCase):
    """Test the autocomplete endpoint"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        TestDataFactory.create_client(name='Ana Souza', phone='11988887777')
        TestDataFactory.create_client(name='Mariana Lima', phone='')

    def test_short_query_returns_nothing(self):
        response = self.api.get('/api/v1/clients/search/?q=a')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, [])

    def test_search_matches_name_and_phone(self):
        response = self.api.get('/api/v1/clients/search/?q=ana')
        self.assertEqual({c['name'] for c in response.data}, {'Ana Souza', 'Mariana Lima'})
        response = self.api.get('/api/v1/clients/search/', {'q': 'Souza 1198'})
        self.assertEqual([c['display_name'] for c in response.data], ['Ana Souza (11988887777)'])

    def test_search_is_limited(self):
        for index in range(25):
            TestDataFactory.create_client(name=f'Teste {index}')
        self.assertEqual(len(search_clients('teste')), 20)
