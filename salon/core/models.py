from django.contrib.auth.models import AbstractUser
from django.db import models


class Category(models.TextChoices):
    """Business areas of the salon; tags professionals, services and appointments"""
    SALAO = 'salao', 'Salão'
    ESTETICA = 'estetica', 'Estética'
    BRONZE = 'bronze', 'Bronze'
    LOJA_ROUPAS = 'loja_roupas', 'Loja de roupas'


class User(AbstractUser):
    """Extended user model with additional fields"""
    phone = models.CharField(max_length=20, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'


class AuditLog(models.Model):
    """Audit log for write operations on business records"""
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
    ]

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    object_name = models.CharField(max_length=255, blank=True, null=True, help_text="Human-readable name of the object (e.g., client name)")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_logs_created_2b5f1e_idx'),
            models.Index(fields=['action'], name='audit_logs_action_8c1d3a_idx'),
            models.Index(fields=['model_name'], name='audit_logs_model_n_4e7b9c_idx'),
        ]
