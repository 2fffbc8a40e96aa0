from .client import ApiError, SalonApiClient
from .screens import default_appointment_window, filter_by_tab, filter_by_text

__all__ = ['ApiError', 'SalonApiClient', 'default_appointment_window', 'filter_by_tab', 'filter_by_text']
