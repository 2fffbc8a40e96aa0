"""
Management command to add the predefined service catalog to the database
"""
from decimal import Decimal
from django.core.management.base import BaseCommand
from salon.catalog.models import Service
from salon.core.models import Category

DEFAULT_SERVICES = [
    ('Corte feminino', Category.SALAO, Decimal('80.00')),
    ('Corte masculino', Category.SALAO, Decimal('45.00')),
    ('Escova', Category.SALAO, Decimal('50.00')),
    ('Coloração', Category.SALAO, Decimal('150.00')),
    ('Hidratação', Category.SALAO, Decimal('70.00')),
    ('Manicure', Category.ESTETICA, Decimal('35.00')),
    ('Pedicure', Category.ESTETICA, Decimal('40.00')),
    ('Design de sobrancelhas', Category.ESTETICA, Decimal('45.00')),
    ('Limpeza de pele', Category.ESTETICA, Decimal('120.00')),
    ('Bronzeamento natural', Category.BRONZE, Decimal('100.00')),
    ('Bronzeamento a jato', Category.BRONZE, Decimal('130.00')),
]


class Command(BaseCommand):
    help = "Adds the predefined salon services to the database"

    def add_arguments(self, parser):
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Deactivate all existing services before adding the defaults',
        )

    def handle(self, *args, **options):
        if options['clear']:
            deactivated = Service.objects.filter(is_active=True).update(is_active=False)
            self.stdout.write(self.style.WARNING(f'Deactivated {deactivated} existing services'))

        created_count = 0
        existing_count = 0
        for name, category, price in DEFAULT_SERVICES:
            service, created = Service.objects.get_or_create(
                name=name,
                category=category,
                defaults={'price': price},
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'✓ Created service: {name}'))
            else:
                existing_count += 1
                if not service.is_active:
                    service.is_active = True
                    service.save(update_fields=['is_active', 'updated_at'])
                self.stdout.write(f'- Service already exists: {name}')

        self.stdout.write(self.style.SUCCESS(
            f'\nSummary: {created_count} created, {existing_count} already existed'
        ))
