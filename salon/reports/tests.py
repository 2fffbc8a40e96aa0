"""
Tests for the revenue report endpoint
"""
from datetime import date
from decimal import Decimal
from unittest import mock
from django.core.cache import cache
from django.test import TestCase
from rest_framework import status
from salon.core.models import Category
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient

TODAY = date(2024, 6, 10)


@mock.patch('salon.reports.views.local_today', return_value=TODAY)
@mock.patch('salon.core.utils.local_today', return_value=TODAY)
class ReportTests(TestCase):

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.carla = TestDataFactory.create_professional(name='Carla', category=Category.SALAO)
        self.denise = TestDataFactory.create_professional(name='Denise', category=Category.ESTETICA)
        self.cut = TestDataFactory.create_service(name='Corte', category=Category.SALAO)
        self.nails = TestDataFactory.create_service(name='Manicure', category=Category.ESTETICA)

        TestDataFactory.create_payment(
            lines=[(self.cut, self.carla, Decimal('100.00')), (self.nails, self.denise, Decimal('50.00'))],
            date=date(2024, 6, 3), payment_method='pix',
        )
        TestDataFactory.create_payment(
            lines=[(self.cut, self.carla, Decimal('60.00'))],
            date=TODAY, payment_method='dinheiro',
        )
        # Outside the current month
        TestDataFactory.create_payment(
            lines=[(self.cut, self.carla, Decimal('500.00'))],
            date=date(2024, 5, 31), payment_method='pix',
        )

    def test_defaults_to_current_month(self, *_mocks):
        response = self.api.get('/api/v1/reports/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data
        self.assertEqual(data['period'], {'start_date': '2024-06-01', 'end_date': '2024-06-30'})
        self.assertEqual(data['total_revenue'], 210.0)
        self.assertEqual(data['today_revenue'], 60.0)
        self.assertEqual(data['total_services'], 3)
        self.assertEqual(data['average_ticket'], 70.0)

    def test_daily_revenue(self, *_mocks):
        data = self.api.get('/api/v1/reports/').data
        self.assertEqual(data['daily_revenue'], [
            {'date': '2024-06-03', 'value': 150.0},
            {'date': '2024-06-10', 'value': 60.0},
        ])

    def test_revenue_by_category(self, *_mocks):
        data = self.api.get('/api/v1/reports/').data
        self.assertEqual(data['revenue_by_category'], [
            {'category': 'salao', 'label': 'Salão', 'value': 160.0, 'percentage': 76.19},
            {'category': 'estetica', 'label': 'Estética', 'value': 50.0, 'percentage': 23.81},
        ])

    def test_revenue_by_professional(self, *_mocks):
        data = self.api.get('/api/v1/reports/').data
        self.assertEqual(data['revenue_by_professional'], [
            {'professional_id': self.carla.id, 'name': 'Carla', 'services': 2, 'average': 80.0, 'total': 160.0},
            {'professional_id': self.denise.id, 'name': 'Denise', 'services': 1, 'average': 50.0, 'total': 50.0},
        ])

    def test_payment_methods(self, *_mocks):
        data = self.api.get('/api/v1/reports/').data
        self.assertEqual(data['payment_methods'], [
            {'method': 'pix', 'label': 'PIX', 'value': 150.0},
            {'method': 'dinheiro', 'label': 'Dinheiro', 'value': 60.0},
        ])

    def test_category_filter(self, *_mocks):
        data = self.api.get('/api/v1/reports/?category=estetica').data
        self.assertEqual(data['total_revenue'], 50.0)
        self.assertEqual(data['today_revenue'], 0.0)
        self.assertEqual(data['total_services'], 1)
        self.assertEqual([row['name'] for row in data['revenue_by_professional']], ['Denise'])

    def test_explicit_window(self, *_mocks):
        data = self.api.get('/api/v1/reports/?start_date=2024-05-01&end_date=2024-05-31').data
        self.assertEqual(data['total_revenue'], 500.0)
        self.assertEqual(data['today_revenue'], 60.0)

    def test_empty_window(self, *_mocks):
        data = self.api.get('/api/v1/reports/?start_date=2023-01-01&end_date=2023-01-31').data
        self.assertEqual(data['total_revenue'], 0.0)
        self.assertEqual(data['average_ticket'], 0.0)
        self.assertEqual(data['revenue_by_category'], [])

    def test_bad_dates(self, *_mocks):
        response = self.api.get('/api/v1/reports/?start_date=2024-13-01')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        response = self.api.get('/api/v1/reports/?start_date=2024-06-30&end_date=2024-06-01')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_bad_category(self, *_mocks):
        response = self.api.get('/api/v1/reports/?category=barbearia')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_new_payment_invalidates_cached_report(self, *_mocks):
        self.assertEqual(self.api.get('/api/v1/reports/').data['total_revenue'], 210.0)
        TestDataFactory.create_payment(lines=[(self.nails, self.denise, Decimal('40.00'))], date=TODAY)
        self.assertEqual(self.api.get('/api/v1/reports/').data['total_revenue'], 250.0)

    def test_deleted_payment_invalidates_cached_report(self, *_mocks):
        payment = TestDataFactory.create_payment(lines=[(self.nails, self.denise, Decimal('40.00'))], date=TODAY)
        self.assertEqual(self.api.get('/api/v1/reports/').data['total_revenue'], 250.0)
        payment.delete()
        self.assertEqual(self.api.get('/api/v1/reports/').data['total_revenue'], 210.0)
