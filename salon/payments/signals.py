"""
Cache invalidation signals
Drop cached reports whenever a payment or one of its lines changes
"""
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from salon.core.cache_utils import invalidate_reports_cache
from .models import Payment, PaymentLine

logger = logging.getLogger(__name__)


@receiver([post_save, post_delete], sender=Payment)
@receiver([post_save, post_delete], sender=PaymentLine)
def invalidate_reports_on_payment_change(sender, instance, **kwargs):
    """Invalidate report aggregates when payments/lines change"""
    logger.debug(f"{sender.__name__} {instance.pk} changed, invalidating reports")
    invalidate_reports_cache()
