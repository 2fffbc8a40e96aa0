from django.db import models
from salon.core.models import Category
from salon.clients.models import Client
from salon.professionals.models import Professional


class AppointmentStatus(models.TextChoices):
    AGENDADO = 'agendado', 'Agendado'
    CONFIRMADO = 'confirmado', 'Confirmado'
    CONCLUIDO = 'concluido', 'Concluído'


class Appointment(models.Model):
    """Client appointments with a professional"""
    client = models.ForeignKey(Client, on_delete=models.CASCADE, related_name='appointments')
    professional = models.ForeignKey(Professional, on_delete=models.PROTECT, related_name='appointments')
    category = models.CharField(max_length=20, choices=Category.choices)
    status = models.CharField(max_length=20, choices=AppointmentStatus.choices, default=AppointmentStatus.AGENDADO)
    date = models.DateField(db_index=True)
    time = models.TimeField()
    service = models.CharField(max_length=255, help_text='Description of the work booked')
    observations = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.client.name} - {self.date} {self.time:%H:%M}"

    class Meta:
        db_table = 'appointments'
        ordering = ['date', 'time']
        indexes = [
            models.Index(fields=['date', 'category'], name='idx_appt_date_category'),
            models.Index(fields=['professional', 'date'], name='idx_appt_prof_date'),
        ]
