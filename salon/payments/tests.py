"""
Comprehensive test suite for Payments module
Tests: the payment form state, line validation, package rules, API writes and audit logging
"""
from datetime import date, datetime
from decimal import Decimal
from django.core.cache import cache
from django.test import TestCase, SimpleTestCase
from rest_framework import status
from salon.core.models import AuditLog, Category
from salon.catalog.models import PackageItem
from salon.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from salon.payments.composer import (
    PaymentDraft, to_decimal, MSG_NO_LINES, MSG_PROFESSIONAL_REQUIRED, MSG_MIN_TOTAL,
    MSG_CLIENT_REQUIRED, MSG_METHOD_REQUIRED, MSG_PACKAGE_LINES, MSG_PACKAGE_NOT_ALLOWED,
    MSG_NEGATIVE_VALUE,
)
from salon.payments.models import Payment, PaymentLine

NOW = datetime(2024, 6, 10, 15, 45, 30)

SERVICES = [
    {'id': 1, 'name': 'Corte', 'category': 'salao', 'price': 80.0},
    {'id': 2, 'name': 'Manicure', 'category': 'estetica', 'price': 35.0},
    {'id': 3, 'name': 'Avaliação', 'category': 'estetica', 'price': None},
]

PACKAGES = [
    {
        'id': 10,
        'name': 'Dia de beleza',
        'items': [
            {'service': 1, 'service_name': 'Corte', 'service_category': 'salao', 'price': 70.0, 'quantity': 1},
            {'service': 2, 'service_name': 'Manicure', 'service_category': 'estetica', 'price': 30.0, 'quantity': 2},
        ],
    },
]


class ToDecimalTests(SimpleTestCase):

    def test_parses_numbers_and_strings(self):
        self.assertEqual(to_decimal('12.50'), Decimal('12.50'))
        self.assertEqual(to_decimal('12,50'), Decimal('12.50'))
        self.assertEqual(to_decimal(7), Decimal('7'))

    def test_non_numeric_counts_as_zero(self):
        for value in ['', 'abc', None, 'NaN', 'Infinity']:
            self.assertEqual(to_decimal(value), Decimal('0'), value)


class PaymentDraftTests(SimpleTestCase):
    """Test the payment form state transitions"""

    def setUp(self):
        self.draft = PaymentDraft(services=SERVICES, packages=PACKAGES, now=NOW)

    def test_initial_state(self):
        self.assertEqual(self.draft.date, date(2024, 6, 10))
        self.assertEqual(self.draft.time.strftime('%H:%M:%S'), '15:45:00')
        self.assertEqual(self.draft.lines, [])
        self.assertEqual(self.draft.total, Decimal('0.00'))

    def test_add_service_uses_catalog_price(self):
        self.draft.set_service_type('servicos')
        key = self.draft.add_service(1)
        line = self.draft.lines[0]
        self.assertEqual(line['key'], key)
        self.assertEqual(line['service_name'], 'Corte')
        self.assertEqual(line['value'], Decimal('80.0'))
        self.assertIsNone(line['professional'])
        self.assertFalse(line['is_package_service'])

    def test_add_service_without_price_starts_at_zero(self):
        self.draft.set_service_type('servicos')
        self.draft.add_service(3)
        self.assertEqual(self.draft.total, Decimal('0.00'))

    def test_add_unknown_service_is_ignored(self):
        self.draft.set_service_type('servicos')
        self.assertIsNone(self.draft.add_service(99))
        self.assertEqual(self.draft.lines, [])

    def test_add_service_requires_single_services_mode(self):
        self.draft.set_service_type('pacote')
        with self.assertRaises(ValueError):
            self.draft.add_service(1)

    def test_total_counts_non_numeric_as_zero(self):
        self.draft.set_service_type('servicos')
        first = self.draft.add_service(1)
        second = self.draft.add_service(2)
        self.draft.update_line(first, value='abc')
        self.draft.update_line(second, value='12.5')
        self.assertEqual(self.draft.total, Decimal('12.50'))

    def test_update_line_rejects_other_fields(self):
        self.draft.set_service_type('servicos')
        key = self.draft.add_service(1)
        with self.assertRaises(ValueError):
            self.draft.update_line(key, service_name='Outro')
        with self.assertRaises(KeyError):
            self.draft.update_line('missing', value=1)

    def test_switching_type_clears_lines_and_package(self):
        self.draft.set_service_type('pacote')
        self.draft.select_package(10)
        self.draft.set_service_type('servicos')
        self.assertEqual(self.draft.lines, [])
        self.assertIsNone(self.draft.package)
        self.assertEqual(self.draft.package_name, '')

    def test_selecting_same_type_keeps_lines(self):
        self.draft.set_service_type('servicos')
        self.draft.add_service(1)
        self.draft.set_service_type('servicos')
        self.assertEqual(len(self.draft.lines), 1)

    def test_unknown_service_type(self):
        with self.assertRaises(ValueError):
            self.draft.set_service_type('avulso')

    def test_select_package_seeds_one_line_per_unit(self):
        self.draft.set_service_type('pacote')
        self.draft.select_package(10)
        self.assertEqual(self.draft.package_name, 'Dia de beleza')
        self.assertEqual([line['service'] for line in self.draft.lines], [1, 2, 2])
        self.assertTrue(all(line['is_package_service'] for line in self.draft.lines))
        self.assertTrue(all(line['professional'] is None for line in self.draft.lines))
        self.assertEqual(self.draft.total, Decimal('130.00'))

    def test_select_package_requires_package_mode(self):
        self.draft.set_service_type('servicos')
        with self.assertRaises(ValueError):
            self.draft.select_package(10)

    def test_package_lines_cannot_be_removed(self):
        self.draft.set_service_type('pacote')
        self.draft.select_package(10)
        key = self.draft.lines[0]['key']
        self.assertFalse(self.draft.remove_line(key))
        self.assertEqual(len(self.draft.lines), 3)

    def test_single_service_lines_can_be_removed(self):
        self.draft.set_service_type('servicos')
        key = self.draft.add_service(1)
        self.assertTrue(self.draft.remove_line(key))
        self.assertEqual(self.draft.lines, [])

    def test_validate_empty_form(self):
        errors = self.draft.validate()
        self.assertEqual(errors, {
            'client': MSG_CLIENT_REQUIRED,
            'payment_method': MSG_METHOD_REQUIRED,
            'total_value': MSG_NO_LINES,
        })

    def test_validate_missing_professional(self):
        self.draft.set_client('5', 'Ana')
        self.draft.set_payment_method('pix')
        self.draft.set_service_type('servicos')
        self.draft.add_service(1)
        self.assertEqual(self.draft.validate(), {'total_value': MSG_PROFESSIONAL_REQUIRED})

    def test_validate_minimum_total(self):
        self.draft.set_client('5')
        self.draft.set_payment_method('pix')
        self.draft.set_service_type('servicos')
        key = self.draft.add_service(1)
        self.draft.update_line(key, professional='7', value='0.99')
        self.assertEqual(self.draft.validate(), {'total_value': MSG_MIN_TOTAL})
        self.draft.update_line(key, value='1')
        self.assertEqual(self.draft.validate(), {})

    def test_validate_complete_package(self):
        self.draft.set_client('5')
        self.draft.set_payment_method('dinheiro')
        self.draft.set_service_type('pacote')
        self.draft.select_package(10)
        for line in self.draft.lines:
            self.draft.update_line(line['key'], professional='7')
        self.assertEqual(self.draft.validate(), {})

    def test_validate_package_with_missing_line(self):
        self.draft.set_client('5')
        self.draft.set_payment_method('dinheiro')
        self.draft.set_service_type('pacote')
        self.draft.select_package(10)
        self.draft.lines.pop()
        for line in self.draft.lines:
            line['professional'] = '7'
        self.assertEqual(self.draft.validate(), {'package': MSG_PACKAGE_LINES})

    def test_to_payload(self):
        self.draft.set_client('5')
        self.draft.set_payment_method('pix')
        self.draft.set_service_type('servicos')
        key = self.draft.add_service(2)
        self.draft.update_line(key, professional='7', value='40')
        payload = self.draft.to_payload()
        self.assertEqual(payload['client'], '5')
        self.assertEqual(payload['date'], '2024-06-10')
        self.assertEqual(payload['time'], '15:45')
        self.assertIsNone(payload['package'])
        self.assertNotIn('value', payload)
        self.assertEqual(payload['lines'], [{
            'service': 2,
            'service_name': 'Manicure',
            'service_category': 'estetica',
            'value': '40.00',
            'professional': '7',
            'is_package_service': False,
        }])

    def test_from_payment_keeps_saved_lines(self):
        saved = {
            'id': 3,
            'client': 5,
            'client_name': 'Ana',
            'payment_method': 'pix',
            'is_partial_value': True,
            'date': '2024-06-01',
            'time': '10:00',
            'description': '',
            'service_type': 'pacote',
            'package': 10,
            'package_name': 'Dia de beleza',
            'lines': [
                {'id': 21, 'service': 1, 'service_name': 'Corte', 'service_category': 'salao',
                 'value': 75.0, 'professional': 7, 'professional_name': 'Carla', 'is_package_service': True},
                {'id': 22, 'service': 2, 'service_name': 'Manicure', 'service_category': 'estetica',
                 'value': 30.0, 'professional': 8, 'professional_name': 'Denise', 'is_package_service': True},
                {'id': 23, 'service': 2, 'service_name': 'Manicure', 'service_category': 'estetica',
                 'value': 30.0, 'professional': 8, 'professional_name': 'Denise', 'is_package_service': True},
            ],
        }
        draft = PaymentDraft.from_payment(saved, services=SERVICES, packages=PACKAGES, now=NOW)
        self.assertEqual(draft.package['name'], 'Dia de beleza')
        self.assertEqual([line['key'] for line in draft.lines], ['21', '22', '23'])
        self.assertEqual(draft.total, Decimal('135.00'))
        self.assertTrue(draft.is_partial_value)
        self.assertEqual(draft.validate(), {})

    def test_validate_rejects_negative_line_value(self):
        self.draft.set_client('5')
        self.draft.set_payment_method('pix')
        self.draft.set_service_type('servicos')
        first = self.draft.add_service(1)
        second = self.draft.add_service(2)
        self.draft.update_line(first, professional='7', value='100')
        self.draft.update_line(second, professional='7', value='-50')
        self.assertEqual(self.draft.total, Decimal('50.00'))
        self.assertEqual(self.draft.validate(), {'total_value': MSG_NEGATIVE_VALUE})

    def _saved_package_payment(self, **extra):
        saved = {
            'id': 4,
            'client': 5,
            'payment_method': 'pix',
            'service_type': 'pacote',
            'package': 10,
            'package_name': 'Dia de beleza',
            'lines': [
                {'id': 31, 'service': 1, 'service_name': 'Corte', 'service_category': 'salao',
                 'value': 70.0, 'professional': 7, 'is_package_service': True},
            ],
        }
        saved.update(extra)
        return saved

    def test_from_payment_with_package_outside_catalog(self):
        # Deactivated packages drop out of the catalog the form receives
        draft = PaymentDraft.from_payment(self._saved_package_payment(), services=SERVICES, packages=[], now=NOW)
        self.assertEqual(draft.package, 10)
        self.assertEqual(draft.validate(), {})
        self.assertEqual(draft.to_payload()['package'], 10)

    def test_from_payment_with_changed_package(self):
        # PACKAGES[0] now bundles Corte and two Manicures; the payment sold only Corte
        draft = PaymentDraft.from_payment(self._saved_package_payment(), services=SERVICES, packages=PACKAGES, now=NOW)
        self.assertEqual(draft.validate(), {})

    def test_from_payment_with_deleted_package(self):
        draft = PaymentDraft.from_payment(self._saved_package_payment(package=None), now=NOW)
        self.assertIsNone(draft.package)
        self.assertEqual(draft.package_name, 'Dia de beleza')
        self.assertEqual(draft.validate(), {})

    def test_from_payment_package_lines_still_checked(self):
        draft = PaymentDraft.from_payment(self._saved_package_payment(), packages=PACKAGES, now=NOW)
        draft.lines[0]['service'] = 2
        self.assertEqual(draft.validate(), {'package': MSG_PACKAGE_LINES})


class PaymentAPITests(TestCase):
    """Test payment creation, updates and deletion through the API"""

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.client_record = TestDataFactory.create_client(name='Ana Souza', phone='11988887777')
        self.carla = TestDataFactory.create_professional(name='Carla', category=Category.SALAO)
        self.denise = TestDataFactory.create_professional(name='Denise', category=Category.ESTETICA)
        self.cut = TestDataFactory.create_service(name='Corte', price=Decimal('80.00'))
        self.nails = TestDataFactory.create_service(name='Manicure', category=Category.ESTETICA, price=Decimal('35.00'))

    def _line(self, service, professional, value, **extra):
        line = {
            'service': service.id,
            'value': str(value),
            'professional': professional.id if professional else None,
        }
        line.update(extra)
        return line

    def _payload(self, lines, **extra):
        payload = {
            'client': self.client_record.id,
            'payment_method': 'pix',
            'date': '2024-06-10',
            'time': '15:00',
            'service_type': 'servicos',
            'lines': lines,
        }
        payload.update(extra)
        return payload

    def test_create_payment_computes_value(self):
        response = self.api.post('/api/v1/payments/', self._payload([
            self._line(self.cut, self.carla, '80.00'),
            self._line(self.nails, self.denise, '30.00'),
        ]), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(Decimal(str(response.data['value'])), Decimal('110.00'))
        self.assertEqual(response.data['client_name'], 'Ana Souza')
        self.assertEqual([line['service_name'] for line in response.data['lines']], ['Corte', 'Manicure'])
        self.assertEqual(response.data['lines'][1]['service_category'], 'estetica')
        self.assertEqual(response.data['lines'][1]['professional_name'], 'Denise')

    def test_client_supplied_value_is_ignored(self):
        response = self.api.post('/api/v1/payments/', self._payload(
            [self._line(self.cut, self.carla, '80.00')], value='999.00'
        ), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Payment.objects.get().value, Decimal('80.00'))

    def test_create_requires_lines(self):
        response = self.api.post('/api/v1/payments/', self._payload([]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['total_value'], [MSG_NO_LINES])

    def test_create_requires_professional_on_every_line(self):
        response = self.api.post('/api/v1/payments/', self._payload([
            self._line(self.cut, self.carla, '80.00'),
            self._line(self.nails, None, '30.00'),
        ]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['total_value'], [MSG_PROFESSIONAL_REQUIRED])

    def test_create_requires_minimum_total(self):
        response = self.api.post('/api/v1/payments/', self._payload([
            self._line(self.cut, self.carla, '0.50'),
        ]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['total_value'], [MSG_MIN_TOTAL])

    def test_create_requires_client_and_method(self):
        payload = self._payload([self._line(self.cut, self.carla, '80.00')])
        del payload['client']
        payload['payment_method'] = ''
        response = self.api.post('/api/v1/payments/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['client'], [MSG_CLIENT_REQUIRED])
        self.assertEqual(response.data['payment_method'], [MSG_METHOD_REQUIRED])

    def test_package_payment(self):
        package = TestDataFactory.create_package(name='Dia de beleza', services=[
            (self.cut, Decimal('70.00'), 1),
            (self.nails, Decimal('30.00'), 2),
        ])
        lines = [
            self._line(self.cut, self.carla, '70.00', is_package_service=True),
            self._line(self.nails, self.denise, '30.00', is_package_service=True),
            self._line(self.nails, self.denise, '30.00', is_package_service=True),
        ]
        response = self.api.post('/api/v1/payments/', self._payload(
            lines, service_type='pacote', package=package.id
        ), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data['package_name'], 'Dia de beleza')
        self.assertEqual(Decimal(str(response.data['value'])), Decimal('130.00'))

    def test_package_payment_must_bill_every_package_service(self):
        package = TestDataFactory.create_package(services=[self.cut, self.nails])
        response = self.api.post('/api/v1/payments/', self._payload(
            [self._line(self.cut, self.carla, '80.00', is_package_service=True)],
            service_type='pacote', package=package.id
        ), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['package'], [MSG_PACKAGE_LINES])

    def test_single_services_payment_rejects_package(self):
        package = TestDataFactory.create_package(services=[self.cut])
        response = self.api.post('/api/v1/payments/', self._payload(
            [self._line(self.cut, self.carla, '80.00')], package=package.id
        ), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['package'], [MSG_PACKAGE_NOT_ALLOWED])

    def test_update_replaces_lines(self):
        payment = TestDataFactory.create_payment(
            client=self.client_record,
            lines=[(self.cut, self.carla, Decimal('80.00')), (self.nails, self.denise, Decimal('35.00'))]
        )
        response = self.api.put(f'/api/v1/payments/{payment.id}/', self._payload([
            self._line(self.nails, self.denise, '40.00'),
        ], payment_method='cartao_credito'), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        payment.refresh_from_db()
        self.assertEqual(payment.value, Decimal('40.00'))
        self.assertEqual(payment.payment_method, 'cartao_credito')
        self.assertEqual(PaymentLine.objects.filter(payment=payment).count(), 1)

    def test_patch_header_keeps_lines(self):
        payment = TestDataFactory.create_payment(
            client=self.client_record, lines=[(self.cut, self.carla, Decimal('80.00'))]
        )
        response = self.api.patch(f'/api/v1/payments/{payment.id}/', {'description': 'Pago na saída'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(len(response.data['lines']), 1)
        self.assertEqual(Decimal(str(response.data['value'])), Decimal('80.00'))

    def test_invalid_update_leaves_payment_untouched(self):
        payment = TestDataFactory.create_payment(
            client=self.client_record, lines=[(self.cut, self.carla, Decimal('80.00'))]
        )
        response = self.api.put(f'/api/v1/payments/{payment.id}/', self._payload([]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(payment.lines.count(), 1)

    def test_delete_payment_removes_lines(self):
        payment = TestDataFactory.create_payment(lines=[(self.cut, self.carla, Decimal('80.00'))])
        response = self.api.delete(f'/api/v1/payments/{payment.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(PaymentLine.objects.exists())

    def test_writes_are_audited(self):
        response = self.api.post('/api/v1/payments/', self._payload([
            self._line(self.cut, self.carla, '80.00'),
        ]), format='json')
        payment_id = response.data['id']
        self.api.patch(f'/api/v1/payments/{payment_id}/', {'payment_method': 'dinheiro'}, format='json')
        self.api.delete(f'/api/v1/payments/{payment_id}/')
        actions = list(AuditLog.objects.filter(model_name='Payment', object_id=str(payment_id))
                       .order_by('id').values_list('action', flat=True))
        self.assertEqual(actions, ['create', 'update', 'delete'])

    def test_deleting_service_keeps_line_snapshot(self):
        payment = TestDataFactory.create_payment(lines=[(self.cut, self.carla, Decimal('80.00'))])
        self.cut.delete()
        line = payment.lines.get()
        self.assertIsNone(line.service)
        self.assertEqual(line.service_name, 'Corte')

    def _package_payment(self):
        package = TestDataFactory.create_package(name='Só corte', services=[self.cut])
        payment = TestDataFactory.create_payment(
            client=self.client_record, lines=[(self.cut, self.carla, Decimal('80.00'))],
            service_type='pacote', package=package,
        )
        return package, payment

    def test_patch_after_package_edit(self):
        package, payment = self._package_payment()
        PackageItem.objects.create(package=package, service=self.nails, price=Decimal('35.00'), quantity=1, position=1)
        response = self.api.patch(f'/api/v1/payments/{payment.id}/', {'description': 'obs'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['description'], 'obs')

    def test_patch_after_package_delete(self):
        package, payment = self._package_payment()
        package.delete()
        response = self.api.patch(f'/api/v1/payments/{payment.id}/', {'description': 'obs'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIsNone(response.data['package'])
        self.assertEqual(response.data['package_name'], 'Só corte')

    def test_edit_lines_after_package_edit(self):
        package, payment = self._package_payment()
        PackageItem.objects.create(package=package, service=self.nails, price=Decimal('35.00'), quantity=1, position=1)
        url = f'/api/v1/payments/{payment.id}/'
        response = self.api.patch(url, {'lines': [
            self._line(self.cut, self.denise, '90.00', is_package_service=True),
        ]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(Decimal(str(response.data['value'])), Decimal('90.00'))

        response = self.api.patch(url, {'lines': [
            self._line(self.nails, self.denise, '90.00', is_package_service=True),
        ]}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['package'], [MSG_PACKAGE_LINES])

    def test_draft_of_inactive_package_payment_saves(self):
        package, payment = self._package_payment()
        package.is_active = False
        package.save()
        package.items.all().delete()
        draft = PaymentDraft.from_payment(Payment.objects.get(pk=payment.pk), packages=[])
        self.assertEqual(draft.validate(), {})
        draft.description = 'Pacote antigo'
        response = self.api.put(f'/api/v1/payments/{payment.id}/', draft.to_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        payment.refresh_from_db()
        self.assertEqual(payment.description, 'Pacote antigo')
        self.assertEqual(payment.package_name, 'Só corte')

    def test_draft_of_deleted_package_payment_keeps_snapshot(self):
        package, payment = self._package_payment()
        package.delete()
        draft = PaymentDraft.from_payment(Payment.objects.get(pk=payment.pk))
        self.assertEqual(draft.validate(), {})
        response = self.api.put(f'/api/v1/payments/{payment.id}/', draft.to_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        payment.refresh_from_db()
        self.assertEqual(payment.package_name, 'Só corte')

    def test_negative_line_value_rejected_by_draft_and_api(self):
        draft = PaymentDraft(services=[self.cut, self.nails])
        draft.set_client(self.client_record.id)
        draft.set_payment_method('pix')
        draft.set_service_type('servicos')
        first = draft.add_service(self.cut.id)
        second = draft.add_service(self.nails.id)
        draft.update_line(first, professional=self.carla.id, value='100')
        draft.update_line(second, professional=self.denise.id, value='-50')
        self.assertEqual(draft.validate(), {'total_value': MSG_NEGATIVE_VALUE})

        response = self.api.post('/api/v1/payments/', draft.to_payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn(MSG_NEGATIVE_VALUE, str(response.data['lines']))
        self.assertFalse(Payment.objects.exists())


class PaymentListTests(TestCase):
    """Test payment list filters"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.api = AuthenticatedAPIClient().authenticate_user(self.user)
        self.carla = TestDataFactory.create_professional(name='Carla')
        self.denise = TestDataFactory.create_professional(name='Denise', category=Category.ESTETICA)
        cut = TestDataFactory.create_service(name='Corte')
        nails = TestDataFactory.create_service(name='Manicure', category=Category.ESTETICA)
        self.salon_payment = TestDataFactory.create_payment(
            client=TestDataFactory.create_client(name='Ana Souza'),
            lines=[(cut, self.carla, Decimal('80.00'))],
            date=date(2024, 6, 1), payment_method='pix',
        )
        self.mixed_payment = TestDataFactory.create_payment(
            client=TestDataFactory.create_client(name='Beatriz Melo'),
            lines=[(cut, self.carla, Decimal('80.00')), (nails, self.denise, Decimal('35.00'))],
            date=date(2024, 6, 5), payment_method='dinheiro',
        )

    def _ids(self, query=''):
        response = self.api.get(f'/api/v1/payments/{query}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return [p['id'] for p in response.data]

    def test_newest_first(self):
        self.assertEqual(self._ids(), [self.mixed_payment.id, self.salon_payment.id])

    def test_date_range(self):
        self.assertEqual(self._ids('?start_date=2024-06-02&end_date=2024-06-30'), [self.mixed_payment.id])
        self.assertEqual(self._ids('?end_date=2024-06-01'), [self.salon_payment.id])

    def test_category_matches_any_line_without_duplicates(self):
        self.assertEqual(self._ids('?category=estetica'), [self.mixed_payment.id])
        self.assertEqual(self._ids('?category=salao'), [self.mixed_payment.id, self.salon_payment.id])

    def test_professional_filter(self):
        self.assertEqual(self._ids(f'?professional={self.denise.id}'), [self.mixed_payment.id])

    def test_payment_method_and_search(self):
        self.assertEqual(self._ids('?payment_method=pix'), [self.salon_payment.id])
        self.assertEqual(self._ids('?search=melo'), [self.mixed_payment.id])
