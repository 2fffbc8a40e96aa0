from django.apps import AppConfig


class SchedulingConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'salon.scheduling'
    label = 'scheduling'
    verbose_name = 'Agendamentos'
