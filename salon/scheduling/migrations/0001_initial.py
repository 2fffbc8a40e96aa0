# Generated manually
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('clients', '0001_initial'),
        ('professionals', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Appointment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('category', models.CharField(choices=[('salao', 'Salão'), ('estetica', 'Estética'), ('bronze', 'Bronze'), ('loja_roupas', 'Loja de roupas')], max_length=20)),
                ('status', models.CharField(choices=[('agendado', 'Agendado'), ('confirmado', 'Confirmado'), ('concluido', 'Concluído')], default='agendado', max_length=20)),
                ('date', models.DateField(db_index=True)),
                ('time', models.TimeField()),
                ('service', models.CharField(help_text='Description of the work booked', max_length=255)),
                ('observations', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('client', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='appointments', to='clients.client')),
                ('professional', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='appointments', to='professionals.professional')),
            ],
            options={
                'db_table': 'appointments',
                'ordering': ['date', 'time'],
                'indexes': [
                    models.Index(fields=['date', 'category'], name='idx_appt_date_category'),
                    models.Index(fields=['professional', 'date'], name='idx_appt_prof_date'),
                ],
            },
        ),
    ]
