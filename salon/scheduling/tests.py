"""
Tests for the appointments API: date window, filters and search
"""
from datetime import date, time, timedelta
from unittest import mock
from django.test import TestCase
from rest_framework import status
from salon.core.models import Category
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from salon.scheduling.models import Appointment, AppointmentStatus

TODAY = date(2024, 6, 10)


@mock.patch('salon.core.utils.local_today', return_value=TODAY)
class AppointmentListTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.ana = TestDataFactory.create_client(name='Ana Souza')
        self.bia = TestDataFactory.create_client(name='Beatriz Melo')
        self.carla = TestDataFactory.create_professional(name='Carla', category=Category.SALAO)
        self.denise = TestDataFactory.create_professional(name='Denise', category=Category.ESTETICA)

    def _create(self, client, professional, days, hour=10, **kwargs):
        return TestDataFactory.create_appointment(
            client=client, professional=professional,
            date=TODAY + timedelta(days=days), appointment_time=time(hour, 0), **kwargs
        )

    def test_default_window_is_today_plus_two_days(self, _today):
        self._create(self.ana, self.carla, -1)
        inside = [self._create(self.ana, self.carla, 0), self._create(self.bia, self.denise, 2)]
        self._create(self.bia, self.carla, 3)
        response = self.api.get('/api/v1/appointments/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([a['id'] for a in response.data], [a.id for a in inside])

    def test_explicit_window_is_inclusive(self, _today):
        self._create(self.ana, self.carla, -5)
        self._create(self.ana, self.carla, 10)
        response = self.api.get('/api/v1/appointments/', {
            'start_date': (TODAY - timedelta(days=5)).isoformat(),
            'end_date': (TODAY + timedelta(days=10)).isoformat(),
        })
        self.assertEqual(len(response.data), 2)

    def test_ordered_by_date_then_time(self, _today):
        late = self._create(self.ana, self.carla, 0, hour=16)
        early = self._create(self.bia, self.carla, 0, hour=9)
        tomorrow = self._create(self.ana, self.carla, 1, hour=8)
        response = self.api.get('/api/v1/appointments/')
        self.assertEqual([a['id'] for a in response.data], [early.id, late.id, tomorrow.id])
        self.assertEqual(response.data[0]['time'], '09:00')

    def test_filters(self, _today):
        self._create(self.ana, self.carla, 0, category=Category.SALAO)
        confirmed = self._create(self.bia, self.denise, 1, category=Category.ESTETICA,
                                 status=AppointmentStatus.CONFIRMADO)
        response = self.api.get('/api/v1/appointments/?category=estetica')
        self.assertEqual([a['id'] for a in response.data], [confirmed.id])
        response = self.api.get(f'/api/v1/appointments/?professional={self.denise.id}')
        self.assertEqual([a['id'] for a in response.data], [confirmed.id])
        response = self.api.get('/api/v1/appointments/?status=confirmado')
        self.assertEqual([a['id'] for a in response.data], [confirmed.id])
        response = self.api.get('/api/v1/appointments/?search=melo')
        self.assertEqual([a['client_name'] for a in response.data], ['Beatriz Melo'])

    def test_bad_date_is_rejected(self, _today):
        response = self.api.get('/api/v1/appointments/?start_date=10-06-2024')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class AppointmentCRUDTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.client_record = TestDataFactory.create_client(name='Ana Souza')
        self.professional = TestDataFactory.create_professional(name='Carla')

    def test_create_appointment(self):
        response = self.api.post('/api/v1/appointments/', {
            'client': self.client_record.id,
            'professional': self.professional.id,
            'category': 'salao',
            'date': '2024-06-11',
            'time': '14:30',
            'service': 'Corte e escova',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'agendado')
        self.assertEqual(response.data['client_name'], 'Ana Souza')
        self.assertEqual(response.data['professional_name'], 'Carla')

    def test_create_requires_client(self):
        response = self.api.post('/api/v1/appointments/', {
            'professional': self.professional.id,
            'category': 'salao',
            'date': '2024-06-11',
            'time': '14:30',
            'service': 'Corte',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['client'], ['Selecione um cliente'])

    def test_update_status(self):
        appointment = TestDataFactory.create_appointment(client=self.client_record, professional=self.professional)
        response = self.api.patch(f'/api/v1/appointments/{appointment.id}/', {'status': 'concluido'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status_display'], 'Concluído')

    def test_delete_appointment(self):
        appointment = TestDataFactory.create_appointment(client=self.client_record, professional=self.professional)
        response = self.api.delete(f'/api/v1/appointments/{appointment.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Appointment.objects.exists())


class AppointmentSearchTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)

    def test_search_by_client_name_newest_first(self):
        ana = TestDataFactory.create_client(name='Ana Souza')
        older = TestDataFactory.create_appointment(client=ana, date=date(2024, 1, 5))
        newer = TestDataFactory.create_appointment(client=ana, date=date(2024, 3, 5))
        TestDataFactory.create_appointment(client=TestDataFactory.create_client(name='Beatriz'))
        response = self.api.get('/api/v1/appointments/search/?q=souza')
        self.assertEqual([a['id'] for a in response.data], [newer.id, older.id])

    def test_short_query_returns_nothing(self):
        TestDataFactory.create_appointment()
        response = self.api.get('/api/v1/appointments/search/?q=a')
        self.assertEqual(response.data, [])
