from django.db import models


class Client(models.Model):
    """Salon clients"""
    name = models.CharField(max_length=200, db_index=True)
    phone = models.CharField(max_length=20, blank=True)
    email = models.EmailField(blank=True)
    birth_date = models.DateField(null=True, blank=True)
    observations = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.name

    @property
    def display_name(self):
        """Name followed by the phone in parentheses, as shown in pickers"""
        if self.phone:
            return f"{self.name} ({self.phone})"
        return self.name

    class Meta:
        db_table = 'clients'
        ordering = ['-created_at']
