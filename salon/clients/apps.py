from django.apps import AppConfig


class ClientsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'salon.clients'
    label = 'clients'
    verbose_name = 'Clientes'
