from django.apps import AppConfig


class PaymentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'salon.payments'
    label = 'payments'
    verbose_name = 'Pagamentos'

    def ready(self):
        """Import signals when app is ready"""
        import salon.payments.signals  # noqa: F401  # Report cache invalidation
