from django.db import models
from salon.core.models import Category


class Professional(models.Model):
    """Salon professionals who perform services"""
    name = models.CharField(max_length=200, db_index=True)
    category = models.CharField(max_length=20, choices=Category.choices)
    phone = models.CharField(max_length=20, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    class Meta:
        db_table = 'professionals'
        ordering = ['name']
