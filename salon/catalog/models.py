from django.db import models
from decimal import Decimal
from salon.core.models import Category


class Service(models.Model):
    """Services offered by the salon"""
    name = models.CharField(max_length=200, db_index=True)
    category = models.CharField(max_length=20, choices=Category.choices)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'services'
        ordering = ['name']


class Package(models.Model):
    """Named bundle of services sold as one item"""
    name = models.CharField(max_length=200, db_index=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    def get_price(self):
        """Aggregate price of the bundled services"""
        total = Decimal('0.00')
        for item in self.items.all():
            total += item.get_line_total()
        return total

    def get_service_count(self):
        return sum(item.quantity for item in self.items.all())

    class Meta:
        db_table = 'packages'
        ordering = ['name']


class PackageItem(models.Model):
    """A service included in a package, with its price inside the package"""
    package = models.ForeignKey(Package, on_delete=models.CASCADE, related_name='items')
    service = models.ForeignKey(Service, on_delete=models.PROTECT, related_name='package_items')
    price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.PositiveIntegerField(default=1)
    position = models.PositiveIntegerField(default=0)

    def get_line_total(self):
        return self.price * self.quantity

    class Meta:
        db_table = 'package_items'
        ordering = ['position', 'id']
        constraints = [
            models.UniqueConstraint(fields=['package', 'service'], name='uniq_package_service'),
        ]
