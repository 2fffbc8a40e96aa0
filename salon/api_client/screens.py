"""Client-side filtering the list screens apply to already fetched records"""
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from salon.core.search import get_field

SALON_TIME_ZONE = ZoneInfo('America/Sao_Paulo')

# Agenda tabs and the appointment status each one shows; "Todos" shows everything
STATUS_TABS = {
    'Todos': None,
    'Agendados': 'agendado',
    'Confirmados': 'confirmado',
    'Concluídos': 'concluido',
}


def filter_by_tab(appointments, tab):
    if tab not in STATUS_TABS:
        raise ValueError(f"Unknown tab '{tab}'")
    status = STATUS_TABS[tab]
    if status is None:
        return list(appointments)
    return [a for a in appointments if get_field(a, 'status') == status]


def filter_by_text(records, text, field='client_name'):
    """Case-insensitive contains match on one field; blank text keeps everything"""
    if not text:
        return list(records)
    needle = text.lower()
    return [r for r in records if needle in (get_field(r, field) or '').lower()]


def default_appointment_window(today=None):
    """Today through two days ahead in salon local time"""
    today = today or datetime.now(SALON_TIME_ZONE).date()
    return today, today + timedelta(days=2)
