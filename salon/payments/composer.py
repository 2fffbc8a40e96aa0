"""
Payment composition rules.

PaymentDraft is the state of the payment form: the header fields plus the
grid of service lines, each billed to one professional. PaymentSerializer
runs the same check helpers.

Records (clients, services, packages, payments) may be API dicts or model
instances.
"""
from collections import Counter
from decimal import Decimal, InvalidOperation
import uuid

from django.utils import timezone

from salon.core.search import get_field

SERVICE_TYPE_SERVICOS = 'servicos'
SERVICE_TYPE_PACOTE = 'pacote'
SERVICE_TYPES = (SERVICE_TYPE_SERVICOS, SERVICE_TYPE_PACOTE)

MIN_TOTAL = Decimal('1.00')
CENTS = Decimal('0.01')

MSG_CLIENT_REQUIRED = 'Selecione um cliente'
MSG_METHOD_REQUIRED = 'Selecione o método de pagamento'
MSG_NO_LINES = 'É necessário adicionar pelo menos um serviço ou pacote.'
MSG_PROFESSIONAL_REQUIRED = 'Todos os serviços devem ter um profissional selecionado.'
MSG_NEGATIVE_VALUE = 'O valor dos serviços não pode ser negativo.'
MSG_MIN_TOTAL = 'O valor total deve ser no mínimo R$ 1,00.'
MSG_PACKAGE_REQUIRED = 'Selecione o pacote.'
MSG_PACKAGE_NOT_ALLOWED = 'Pagamentos de serviços avulsos não podem conter pacote.'
MSG_PACKAGE_LINES = 'Os serviços do pacote não podem ser removidos nem substituídos.'

EDITABLE_LINE_FIELDS = ('value', 'professional', 'professional_name')


def to_decimal(value):
    """Parse a line value; blank or non-numeric input counts as zero"""
    if value is None or value == '' or isinstance(value, bool):
        return Decimal('0')
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal('0')
    try:
        result = Decimal(str(value).strip().replace(',', '.'))
    except (InvalidOperation, ValueError):
        return Decimal('0')
    return result if result.is_finite() else Decimal('0')


def record_id(value):
    """Primary key of a record, or the value itself when it already is one"""
    if value is None or isinstance(value, (int, str)):
        return value
    return get_field(value, 'id')


def lines_total(lines):
    total = sum((to_decimal(get_field(line, 'value')) for line in lines), Decimal('0'))
    return total.quantize(CENTS)


def _package_items(package):
    items = get_field(package, 'items') or []
    if hasattr(items, 'all'):
        items = items.all()
    return items


def _item_service(item):
    """(id, name, category) of the service a package item bundles"""
    service = get_field(item, 'service')
    if service is None or isinstance(service, (int, str)):
        return service, get_field(item, 'service_name'), get_field(item, 'service_category')
    return service.id, service.name, service.category


def package_service_counts(package):
    """How many lines each service of the package contributes"""
    counts = Counter()
    for item in _package_items(package):
        service_id, _, _ = _item_service(item)
        counts[str(service_id)] += int(get_field(item, 'quantity') or 1)
    return counts


def expand_package(package):
    """One line per unit of each package item, priced from the item"""
    lines = []
    for item in _package_items(package):
        service_id, name, category = _item_service(item)
        for _ in range(int(get_field(item, 'quantity') or 1)):
            lines.append({
                'key': uuid.uuid4().hex,
                'service': service_id,
                'service_name': name,
                'service_category': category,
                'value': to_decimal(get_field(item, 'price')),
                'professional': None,
                'professional_name': '',
                'is_package_service': True,
            })
    return lines


def billed_services(lines):
    """How many lines each service takes up in a grid"""
    return Counter(str(record_id(get_field(line, 'service'))) for line in lines)


def check_lines(lines):
    """First problem with the line grid, or None"""
    if not lines:
        return MSG_NO_LINES
    if any(not record_id(get_field(line, 'professional')) for line in lines):
        return MSG_PROFESSIONAL_REQUIRED
    if any(to_decimal(get_field(line, 'value')) < 0 for line in lines):
        return MSG_NEGATIVE_VALUE
    if lines_total(lines) < MIN_TOTAL:
        return MSG_MIN_TOTAL
    return None


def check_package_lines(service_type, package, lines, package_name='', expected=None):
    """
    Package mode bills only package lines and, when expected is given,
    exactly that many lines per service. Single-services mode carries no
    package at all.

    package_name is the snapshot saved with a payment; it stands in for a
    package deleted since.
    """
    package_lines = [line for line in lines if get_field(line, 'is_package_service')]
    if service_type == SERVICE_TYPE_PACOTE:
        if package is None and not package_name:
            return MSG_PACKAGE_REQUIRED
        if len(package_lines) != len(lines):
            return MSG_PACKAGE_LINES
        if expected is not None and billed_services(package_lines) != expected:
            return MSG_PACKAGE_LINES
    elif package is not None or package_lines:
        return MSG_PACKAGE_NOT_ALLOWED
    return None


def validate_payment(client, payment_method, service_type, package, lines, package_name='', expected=None):
    """Field errors keyed the way the payment form shows them"""
    errors = {}
    if not record_id(client):
        errors['client'] = MSG_CLIENT_REQUIRED
    if not payment_method:
        errors['payment_method'] = MSG_METHOD_REQUIRED
    lines_error = check_lines(lines)
    if lines_error:
        errors['total_value'] = lines_error
    package_error = check_package_lines(service_type, package, lines, package_name, expected)
    if package_error and lines:
        errors['package'] = package_error
    return errors


class PaymentDraft:
    """
    In-memory state of the payment form.

    services and packages are the catalog the form offers; add_service and
    select_package accept either a record or an id found in them.
    """

    def __init__(self, services=(), packages=(), now=None):
        self.services = list(services)
        self.packages = list(packages)
        now = now or timezone.localtime()
        self.client = ''
        self.client_label = ''
        self.payment_method = ''
        self.is_partial_value = False
        self.date = now.date()
        self.time = now.time().replace(second=0, microsecond=0)
        self.description = ''
        self.service_type = ''
        self.package = None
        self.package_name = ''
        self.package_services = None
        self.lines = []

    def _lookup(self, records, value):
        if value is None or not isinstance(value, (int, str)):
            return value
        for record in records:
            if str(get_field(record, 'id')) == str(value):
                return record
        return None

    def _line(self, key):
        for line in self.lines:
            if line['key'] == key:
                return line
        raise KeyError(key)

    def set_client(self, client_id, label=''):
        self.client = client_id or ''
        self.client_label = label

    def set_payment_method(self, method):
        self.payment_method = method or ''

    def set_service_type(self, service_type):
        """Switching between single services and a package starts the grid over"""
        if service_type not in SERVICE_TYPES:
            raise ValueError(f"Unknown service type '{service_type}'")
        if service_type == self.service_type:
            return
        self.service_type = service_type
        self.package = None
        self.package_name = ''
        self.package_services = None
        self.lines = []

    def select_package(self, package):
        """Replace the grid with the services bundled in package"""
        if self.service_type != SERVICE_TYPE_PACOTE:
            raise ValueError('Packages can only be selected in package mode')
        record = self._lookup(self.packages, package)
        if record is None:
            return None
        self.package = record
        self.package_name = get_field(record, 'name') or ''
        self.package_services = package_service_counts(record)
        self.lines = expand_package(record)
        return record

    def add_service(self, service):
        """Append a single-service line; returns its key, or None for an unknown service"""
        if self.service_type != SERVICE_TYPE_SERVICOS:
            raise ValueError('Single services can only be added in single-services mode')
        record = self._lookup(self.services, service)
        if record is None:
            return None
        line = {
            'key': uuid.uuid4().hex,
            'service': record_id(record),
            'service_name': get_field(record, 'name'),
            'service_category': get_field(record, 'category'),
            'value': to_decimal(get_field(record, 'price')),
            'professional': None,
            'professional_name': '',
            'is_package_service': False,
        }
        self.lines.append(line)
        return line['key']

    def update_line(self, key, **changes):
        unknown = set(changes) - set(EDITABLE_LINE_FIELDS)
        if unknown:
            raise ValueError(f"Line fields not editable: {', '.join(sorted(unknown))}")
        line = self._line(key)
        line.update(changes)
        return line

    def remove_line(self, key):
        """Drop a single-service line; package lines stay with their package"""
        line = self._line(key)
        if line['is_package_service']:
            return False
        self.lines.remove(line)
        return True

    @property
    def total(self):
        return lines_total(self.lines)

    def validate(self):
        return validate_payment(
            self.client, self.payment_method, self.service_type, self.package, self.lines,
            package_name=self.package_name, expected=self.package_services,
        )

    def to_payload(self):
        """Request body for POST/PUT /payments/"""
        return {
            'client': self.client,
            'payment_method': self.payment_method,
            'is_partial_value': self.is_partial_value,
            'date': self.date.isoformat() if hasattr(self.date, 'isoformat') else self.date,
            'time': self.time.strftime('%H:%M') if hasattr(self.time, 'strftime') else self.time,
            'description': self.description,
            'service_type': self.service_type,
            'package': record_id(self.package),
            'lines': [
                {
                    'service': line['service'],
                    'service_name': line['service_name'],
                    'service_category': line['service_category'],
                    'value': str(to_decimal(line['value']).quantize(CENTS)),
                    'professional': record_id(line['professional']),
                    'is_package_service': line['is_package_service'],
                }
                for line in self.lines
            ],
        }

    @classmethod
    def from_payment(cls, payment, services=(), packages=(), now=None):
        """
        Load an existing payment for editing, keeping its lines as saved.

        The package need not be in packages: a payment whose package was
        edited, deactivated or deleted stays editable.
        """
        draft = cls(services=services, packages=packages, now=now)
        draft.client = record_id(get_field(payment, 'client')) or ''
        draft.client_label = get_field(payment, 'client_name') or ''
        draft.payment_method = get_field(payment, 'payment_method') or ''
        draft.is_partial_value = bool(get_field(payment, 'is_partial_value'))
        draft.date = get_field(payment, 'date') or draft.date
        draft.time = get_field(payment, 'time') or draft.time
        draft.description = get_field(payment, 'description') or ''
        draft.service_type = get_field(payment, 'service_type') or ''
        package = get_field(payment, 'package')
        draft.package = draft._lookup(draft.packages, package) or package
        draft.package_name = get_field(payment, 'package_name') or ''

        lines = get_field(payment, 'lines') or []
        if hasattr(lines, 'all'):
            lines = lines.all()
        draft.lines = [
            {
                'key': str(get_field(line, 'id') or uuid.uuid4().hex),
                'service': record_id(get_field(line, 'service')),
                'service_name': get_field(line, 'service_name'),
                'service_category': get_field(line, 'service_category'),
                'value': to_decimal(get_field(line, 'value')),
                'professional': record_id(get_field(line, 'professional')),
                'professional_name': get_field(line, 'professional_name') or '',
                'is_package_service': bool(get_field(line, 'is_package_service')),
            }
            for line in lines
        ]
        if draft.service_type == SERVICE_TYPE_PACOTE:
            # Edits keep the services the payment was sold with
            draft.package_services = billed_services(
                line for line in draft.lines if line['is_package_service']
            )
        return draft
