from django.apps import AppConfig


class CatalogConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'salon.catalog'
    label = 'catalog'
    verbose_name = 'Serviços e pacotes'
