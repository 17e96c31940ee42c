"""
Drop cached stock reads when variants or products change
"""
import logging

from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from fintracks.catalog.models import Product, ProductVariant
from fintracks.core.cache_utils import query_cache

logger = logging.getLogger(__name__)


def invalidate_low_stock_cache():
    query_cache.clear()
    logger.debug("Invalidated low-stock cache")


@receiver([post_save, post_delete], sender=ProductVariant)
@receiver([post_save, post_delete], sender=Product)
def catalog_changed(sender, instance, **kwargs):
    invalidate_low_stock_cache()
    # a concurrent read may have refilled the cache before commit
    transaction.on_commit(invalidate_low_stock_cache)
