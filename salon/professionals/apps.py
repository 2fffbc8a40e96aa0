from django.apps import AppConfig


class ProfessionalsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'salon.professionals'
    label = 'professionals'
    verbose_name = 'Profissionais'
