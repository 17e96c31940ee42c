"""
Low-stock alerts raised whenever a variant's stock is saved at or below
a user's threshold.
"""
import logging

from django.db.models.signals import post_save
from django.dispatch import receiver

from fintracks.catalog.models import ProductVariant
from fintracks.core.models import UserSettings
from .models import Notification

logger = logging.getLogger(__name__)


def notify_low_stock(variant):
    """Create one unread warning per opted-in user; returns the number created"""
    if not variant.is_active:
        return 0

    subscribers = UserSettings.objects.select_related('user').filter(
        low_stock_alerts=True,
        low_stock_threshold__gte=variant.stok,
        user__is_active=True,
    )
    created = 0
    for user_settings in subscribers:
        user = user_settings.user
        if Notification.objects.filter(user=user, product_variant=variant, read=False).exists():
            continue
        if variant.stok <= 0:
            title = 'Stok Habis'
            message = f"Stok {variant} sudah habis"
        else:
            title = 'Stok Menipis'
            message = f"Stok {variant} tersisa {variant.stok} (batas {user_settings.low_stock_threshold})"
        Notification.objects.create(
            user=user,
            title=title,
            message=message,
            type='warning',
            action_url=f"/product-variants/{variant.id}/",
            product_variant=variant,
        )
        created += 1
    if created:
        logger.info(f"Low stock alert for variant {variant.id} (stok={variant.stok}) sent to {created} user(s)")
    return created


@receiver(post_save, sender=ProductVariant)
def product_variant_stock_saved(sender, instance, created, update_fields=None, **kwargs):
    if created or (update_fields is not None and 'stok' not in update_fields):
        return
    notify_low_stock(instance)
