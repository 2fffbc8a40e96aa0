# Generated manually
import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        ('clients', '0001_initial'),
        ('professionals', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Payment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('payment_method', models.CharField(choices=[('dinheiro', 'Dinheiro'), ('cartao_credito', 'Cartão de Crédito'), ('cartao_debito', 'Cartão de Débito'), ('pix', 'PIX')], max_length=20)),
                ('value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('is_partial_value', models.BooleanField(default=False)),
                ('date', models.DateField(db_index=True, default=django.utils.timezone.localdate)),
                ('time', models.TimeField(blank=True, null=True)),
                ('description', models.TextField(blank=True)),
                ('service_type', models.CharField(choices=[('servicos', 'Serviços avulsos'), ('pacote', 'Pacote')], default='servicos', max_length=20)),
                ('package_name', models.CharField(blank=True, max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='clients.client')),
                ('package', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payments', to='catalog.package')),
            ],
            options={
                'db_table': 'payments',
                'ordering': ['-date', '-time', '-id'],
                'indexes': [
                    models.Index(fields=['date', 'payment_method'], name='idx_payment_date_method'),
                ],
            },
        ),
        migrations.CreateModel(
            name='PaymentLine',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('service_name', models.CharField(max_length=200)),
                ('service_category', models.CharField(choices=[('salao', 'Salão'), ('estetica', 'Estética'), ('bronze', 'Bronze'), ('loja_roupas', 'Loja de roupas')], max_length=20)),
                ('value', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('is_package_service', models.BooleanField(default=False)),
                ('position', models.PositiveIntegerField(default=0)),
                ('payment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lines', to='payments.payment')),
                ('professional', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payment_lines', to='professionals.professional')),
                ('service', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='payment_lines', to='catalog.service')),
            ],
            options={
                'db_table': 'payment_lines',
                'ordering': ['position', 'id'],
                'indexes': [
                    models.Index(fields=['service_category'], name='idx_line_category'),
                    models.Index(fields=['professional', 'payment'], name='idx_line_prof_payment'),
                ],
            },
        ),
    ]
