"""
Tests for the HTTP client and the list-screen helpers.

The client talks to the real views through DRF's RequestsClient, which
routes requests to the WSGI app in-process.
"""
from datetime import date
from decimal import Decimal
from django.core.cache import cache
from django.test import TestCase, SimpleTestCase
from rest_framework.test import RequestsClient
from salon.api_client import ApiError, SalonApiClient, filter_by_tab, filter_by_text, default_appointment_window
from salon.core.models import Category
from salon.core.test_utils import TestDataFactory
from salon.payments.composer import PaymentDraft

BASE_URL = 'http://testserver/api/v1'


class SalonApiClientTests(TestCase):

    def setUp(self):
        cache.clear()
        TestDataFactory.create_user(username='recepcao', password='senha-forte-123')
        self.api = SalonApiClient(BASE_URL, session=RequestsClient())
        self.api.login('recepcao', 'senha-forte-123')

    def test_login_stores_token(self):
        self.assertTrue(self.api.token)

    def test_requests_without_token_fail(self):
        anonymous = SalonApiClient(BASE_URL, session=RequestsClient())
        with self.assertRaises(ApiError) as ctx:
            anonymous.clients.get_all()
        self.assertEqual(ctx.exception.status_code, 401)

    def test_client_crud(self):
        created = self.api.clients.create({'name': 'Ana Souza', 'phone': '11988887777'})
        self.assertEqual(self.api.clients.get_by_id(created['id'])['display_name'], 'Ana Souza (11988887777)')

        updated = self.api.clients.update(created['id'], {'name': 'Ana Souza Lima', 'phone': '11988887777'})
        self.assertEqual(updated['name'], 'Ana Souza Lima')

        self.assertEqual([c['id'] for c in self.api.clients.search('lima')], [created['id']])
        self.assertIsNone(self.api.clients.delete(created['id']))
        with self.assertRaises(ApiError) as ctx:
            self.api.clients.get_by_id(created['id'])
        self.assertEqual(ctx.exception.status_code, 404)

    def test_validation_errors_carry_payload(self):
        with self.assertRaises(ApiError) as ctx:
            self.api.services.create({'name': ''})
        self.assertEqual(ctx.exception.status_code, 400)
        self.assertEqual(ctx.exception.payload['name'], ['Informe o nome'])

    def test_get_page(self):
        for _ in range(3):
            TestDataFactory.create_client()
        page = self.api.clients.get_page(1, 2)
        self.assertEqual(page['count'], 3)
        self.assertEqual(len(page['results']), 2)
        self.assertEqual(page['next'], 2)

    def test_all_status(self):
        TestDataFactory.create_professional(name='Carla')
        TestDataFactory.create_professional(name='Eva', is_active=False)
        self.assertEqual([p['name'] for p in self.api.professionals.get_all()], ['Carla'])
        self.assertEqual([p['name'] for p in self.api.professionals.get_all_status()], ['Carla', 'Eva'])
        self.assertEqual(self.api.professionals.get_all_status(search='ev')[0]['name'], 'Eva')

    def test_payment_from_draft(self):
        client = TestDataFactory.create_client(name='Ana Souza')
        professional = TestDataFactory.create_professional(name='Carla')
        service = TestDataFactory.create_service(name='Corte', price=Decimal('80.00'))

        draft = PaymentDraft(services=self.api.services.get_all())
        draft.set_client(str(client.id))
        draft.set_payment_method('pix')
        draft.set_service_type('servicos')
        key = draft.add_service(service.id)
        draft.update_line(key, professional=professional.id)
        self.assertEqual(draft.validate(), {})

        payment = self.api.payments.create(draft.to_payload())
        self.assertEqual(Decimal(str(payment['value'])), Decimal('80.00'))

        editing = PaymentDraft.from_payment(self.api.payments.get_by_id(payment['id']))
        self.assertEqual(editing.total, Decimal('80.00'))
        self.assertEqual(editing.lines[0]['professional_name'], 'Carla')

    def test_report_data(self):
        service = TestDataFactory.create_service(category=Category.BRONZE)
        professional = TestDataFactory.create_professional(category=Category.BRONZE)
        TestDataFactory.create_payment(lines=[(service, professional, Decimal('120.00'))], date=date(2024, 6, 3))
        report = self.api.reports.get_data(date(2024, 6, 1), date(2024, 6, 30), category='bronze')
        self.assertEqual(report['total_revenue'], 120.0)
        self.assertEqual(report['revenue_by_category'][0]['label'], 'Bronze')


APPOINTMENTS = [
    {'id': 1, 'client_name': 'Ana Souza', 'status': 'agendado'},
    {'id': 2, 'client_name': 'Beatriz Melo', 'status': 'confirmado'},
    {'id': 3, 'client_name': 'Carla Souza', 'status': 'concluido'},
]


class ScreenHelperTests(SimpleTestCase):

    def test_filter_by_tab(self):
        self.assertEqual(len(filter_by_tab(APPOINTMENTS, 'Todos')), 3)
        self.assertEqual([a['id'] for a in filter_by_tab(APPOINTMENTS, 'Confirmados')], [2])
        self.assertEqual([a['id'] for a in filter_by_tab(APPOINTMENTS, 'Concluídos')], [3])
        with self.assertRaises(ValueError):
            filter_by_tab(APPOINTMENTS, 'Cancelados')

    def test_filter_by_text(self):
        self.assertEqual([a['id'] for a in filter_by_text(APPOINTMENTS, 'SOUZA')], [1, 3])
        self.assertEqual(len(filter_by_text(APPOINTMENTS, '')), 3)

    def test_default_appointment_window(self):
        self.assertEqual(default_appointment_window(date(2024, 2, 28)), (date(2024, 2, 28), date(2024, 3, 1)))
