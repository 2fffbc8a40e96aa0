"""
Tests for core: authentication, audit logs, the autocomplete widget and
the shared cache/date helpers
"""
from datetime import date
from unittest import mock

from django.core.cache import cache
from django.test import TestCase, SimpleTestCase
from rest_framework import status
from rest_framework.test import APIClient

from salon.core.cache_utils import cached_query, invalidate_reports_cache, get_generation, REPORTS_CACHE_PREFIX
from salon.core.models import AuditLog, User
from salon.core.search import AutocompleteSearch, client_display, PROMPT_MESSAGE, NO_CLIENT_MESSAGE
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from salon.core.utils import parse_date_param, current_month_window, default_appointment_window, create_audit_log


class AuthTests(TestCase):
    """Test JWT login, refresh and the current-user endpoint"""

    def setUp(self):
        self.user = TestDataFactory.create_user(username='recepcao', password='senha-forte-123')
        self.client = APIClient()

    def test_login_returns_token_pair(self):
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'recepcao', 'password': 'senha-forte-123'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)

    def test_login_with_wrong_password(self):
        response = self.client.post('/api/v1/auth/login/', {
            'username': 'recepcao', 'password': 'errada'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refresh_returns_new_access_token(self):
        login = self.client.post('/api/v1/auth/login/', {
            'username': 'recepcao', 'password': 'senha-forte-123'
        }, format='json')
        response = self.client.post('/api/v1/auth/refresh/', {'refresh': login.data['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)

    def test_me_requires_authentication(self):
        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_returns_current_user(self):
        api = AuthenticatedAPIClient().authenticate_user(self.user)
        response = api.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], 'recepcao')

    def test_accounts_cannot_be_self_registered(self):
        response = self.client.post('/api/v1/auth/register/', {
            'username': 'novo',
            'password': 'Senha-Longa-987',
            'password_confirm': 'Senha-Longa-987',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(User.objects.filter(username='novo').exists())

    def test_domain_endpoints_require_authentication(self):
        for url in ['/api/v1/clients/', '/api/v1/professionals/', '/api/v1/services/',
                    '/api/v1/packages/', '/api/v1/appointments/', '/api/v1/payments/', '/api/v1/reports/']:
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, url)


class AuditLogTests(TestCase):
    """Test audit log creation and the admin-only endpoints"""

    def setUp(self):
        self.admin = TestDataFactory.create_user(is_staff=True)
        self.user = TestDataFactory.create_user()

    def test_client_creation_is_audited(self):
        api = AuthenticatedAPIClient().authenticate_user(self.user)
        response = api.post('/api/v1/clients/', {'name': 'Ana Souza'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        entry = AuditLog.objects.get(model_name='Client', action='create')
        self.assertEqual(entry.object_id, str(response.data['id']))
        self.assertEqual(entry.user, self.user)

    def test_audit_log_list_is_admin_only(self):
        api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.assertEqual(api.get('/api/v1/audit-logs/').status_code, status.HTTP_403_FORBIDDEN)

        api.authenticate_user(self.admin)
        response = api.get('/api/v1/audit-logs/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_audit_log_filters(self):
        create_audit_log(user=self.admin, action='create', model_name='Client', object_id=1)
        create_audit_log(user=self.admin, action='delete', model_name='Payment', object_id=2)
        api = AuthenticatedAPIClient().authenticate_user(self.admin)
        response = api.get('/api/v1/audit-logs/?model_name=Payment')
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['action'], 'delete')

    def test_missing_fields_skip_the_entry(self):
        self.assertIsNone(create_audit_log(user=self.admin, action='create', model_name='Client'))
        self.assertEqual(AuditLog.objects.count(), 0)

    def test_failures_never_propagate(self):
        with mock.patch('salon.core.utils.AuditLog.objects.create', side_effect=RuntimeError('db down')):
            self.assertIsNone(create_audit_log(user=self.admin, action='create', model_name='Client', object_id=1))


CLIENTS = [
    {'id': 1, 'name': 'Ana Souza', 'phone': '11988887777'},
    {'id': 2, 'name': 'Mariana Lima', 'phone': None},
    {'id': 3, 'name': 'Joana Ana', 'phone': '11911112222'},
]


class AutocompleteSearchTests(SimpleTestCase):
    """Test the keyboard-driven client picker"""

    def setUp(self):
        self.changes = []
        self.widget = AutocompleteSearch(CLIENTS, on_change=lambda *args: self.changes.append(args))

    def test_short_query_has_no_matches(self):
        self.widget.type('a')
        self.assertEqual(self.widget.matches, [])
        self.assertEqual(self.widget.status_message, PROMPT_MESSAGE)
        self.assertEqual(self.widget.highlighted_index, -1)

    def test_matches_name_and_phone_case_insensitively(self):
        self.widget.type('ANA')
        self.assertEqual([c['id'] for c in self.widget.matches], [1, 2, 3])
        self.widget.type('1191111')
        self.assertEqual([c['id'] for c in self.widget.matches], [3])

    def test_no_match_message(self):
        self.widget.type('zzz')
        self.assertEqual(self.widget.status_message, NO_CLIENT_MESSAGE)

    def test_highlight_starts_at_first_match(self):
        self.widget.type('an')
        self.assertTrue(self.widget.is_open)
        self.assertEqual(self.widget.highlighted_index, 0)

    def test_arrow_keys_clamp_within_matches(self):
        self.widget.type('ana')
        for _ in range(5):
            self.widget.move_down()
        self.assertEqual(self.widget.highlighted_index, 2)
        for _ in range(5):
            self.widget.move_up()
        self.assertEqual(self.widget.highlighted_index, 0)

    def test_arrow_key_on_closed_list_opens_it(self):
        self.widget.type('ana')
        self.widget.escape()
        self.assertFalse(self.widget.is_open)
        self.widget.move_down()
        self.assertTrue(self.widget.is_open)
        self.assertEqual(self.widget.highlighted_index, 0)

    def test_enter_selects_highlighted_and_closes(self):
        self.widget.type('ana')
        self.widget.move_down()
        record = self.widget.enter()
        self.assertEqual(record['id'], 2)
        self.assertFalse(self.widget.is_open)
        self.assertEqual(self.widget.query, 'Mariana Lima')
        self.assertEqual(self.changes, [('2', 'Mariana Lima')])

    def test_enter_on_closed_list_does_nothing(self):
        self.widget.type('ana')
        self.widget.escape()
        self.assertIsNone(self.widget.enter())
        self.assertEqual(self.changes, [])

    def test_pick_uses_display_with_phone(self):
        self.widget.type('souza')
        self.widget.pick(0)
        self.assertEqual(self.changes, [('1', 'Ana Souza (11988887777)')])

    def test_hover_moves_highlight(self):
        self.widget.type('ana')
        self.widget.hover(2)
        self.assertEqual(self.widget.highlighted['id'], 3)
        self.widget.hover(10)
        self.assertEqual(self.widget.highlighted_index, 2)

    def test_set_value_shows_display_text(self):
        self.widget.set_value(3)
        self.assertEqual(self.widget.query, 'Joana Ana (11911112222)')
        self.widget.set_value(99)
        self.assertEqual(self.widget.query, '')

    def test_client_display_without_phone(self):
        self.assertEqual(client_display({'name': 'Mariana Lima', 'phone': ''}), 'Mariana Lima')


class CacheUtilsTests(TestCase):
    """Test cached_query and report cache invalidation"""

    def setUp(self):
        cache.clear()
        self.calls = 0

    def test_cached_query_reuses_result_until_invalidated(self):
        @cached_query(cache_ttl=60, key_prefix=REPORTS_CACHE_PREFIX)
        def compute(value):
            self.calls += 1
            return {'value': value}

        self.assertEqual(compute(1), {'value': 1})
        self.assertEqual(compute(1), {'value': 1})
        self.assertEqual(self.calls, 1)

        compute(2)
        self.assertEqual(self.calls, 2)

        invalidate_reports_cache()
        compute(1)
        self.assertEqual(self.calls, 3)

    def test_invalidation_bumps_generation(self):
        generation = get_generation(REPORTS_CACHE_PREFIX)
        invalidate_reports_cache()
        self.assertEqual(get_generation(REPORTS_CACHE_PREFIX), generation + 1)


class DateHelperTests(SimpleTestCase):

    def test_parse_date_param(self):
        self.assertEqual(parse_date_param('2024-03-15', 'start_date'), date(2024, 3, 15))
        self.assertIsNone(parse_date_param('', 'start_date'))
        with self.assertRaises(ValueError):
            parse_date_param('15/03/2024', 'start_date')

    @mock.patch('salon.core.utils.local_today', return_value=date(2024, 2, 10))
    def test_current_month_window_handles_leap_year(self, _today):
        self.assertEqual(current_month_window(), (date(2024, 2, 1), date(2024, 2, 29)))

    @mock.patch('salon.core.utils.local_today', return_value=date(2024, 12, 30))
    def test_default_appointment_window_crosses_year(self, _today):
        self.assertEqual(default_appointment_window(), (date(2024, 12, 30), date(2025, 1, 1)))
