from django.db import models
from django.utils import timezone
from decimal import Decimal
from salon.core.models import Category
from salon.clients.models import Client
from salon.professionals.models import Professional
from salon.catalog.models import Service, Package


class PaymentMethod(models.TextChoices):
    DINHEIRO = 'dinheiro', 'Dinheiro'
    CARTAO_CREDITO = 'cartao_credito', 'Cartão de Crédito'
    CARTAO_DEBITO = 'cartao_debito', 'Cartão de Débito'
    PIX = 'pix', 'PIX'


class ServiceType(models.TextChoices):
    SERVICOS = 'servicos', 'Serviços avulsos'
    PACOTE = 'pacote', 'Pacote'


class Payment(models.Model):
    """A client's payment for one visit; the billed work lives in its lines"""
    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name='payments')
    payment_method = models.CharField(max_length=20, choices=PaymentMethod.choices)
    value = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    is_partial_value = models.BooleanField(default=False)
    date = models.DateField(default=timezone.localdate, db_index=True)
    time = models.TimeField(null=True, blank=True)
    description = models.TextField(blank=True)
    service_type = models.CharField(max_length=20, choices=ServiceType.choices, default=ServiceType.SERVICOS)
    package = models.ForeignKey(Package, on_delete=models.SET_NULL, null=True, blank=True, related_name='payments')
    package_name = models.CharField(max_length=200, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.client.name} - R$ {self.value} ({self.date})"

    def recalculate_value(self):
        """Store the sum of the line values as the payment total"""
        total = self.lines.aggregate(total=models.Sum('value'))['total'] or Decimal('0.00')
        self.value = total
        self.save(update_fields=['value', 'updated_at'])
        return total

    class Meta:
        db_table = 'payments'
        ordering = ['-date', '-time', '-id']
        indexes = [
            models.Index(fields=['date', 'payment_method'], name='idx_payment_date_method'),
        ]


class PaymentLine(models.Model):
    """One service performed by a professional within a payment"""
    payment = models.ForeignKey(Payment, on_delete=models.CASCADE, related_name='lines')
    service = models.ForeignKey(Service, on_delete=models.SET_NULL, null=True, blank=True, related_name='payment_lines')
    service_name = models.CharField(max_length=200)
    service_category = models.CharField(max_length=20, choices=Category.choices)
    value = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    professional = models.ForeignKey(Professional, on_delete=models.PROTECT, related_name='payment_lines')
    is_package_service = models.BooleanField(default=False)
    position = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.service_name} - {self.professional.name}"

    class Meta:
        db_table = 'payment_lines'
        ordering = ['position', 'id']
        indexes = [
            models.Index(fields=['service_category'], name='idx_line_category'),
            models.Index(fields=['professional', 'payment'], name='idx_line_prof_payment'),
        ]
