"""
Stock ledger operations

Every change to ``ProductVariant.stok`` goes through here so that the
variant row is locked for the read-modify-write and a matching
``StockMovement`` row is written in the same transaction.
"""
import logging
from datetime import timedelta

from django.conf import settings
from django.db import transaction
from django.db.models import Count, Max, Q, Sum
from django.db.models.functions import Abs
from django.utils import timezone

from fintracks.catalog.models import ProductVariant
from fintracks.core.cache_utils import apply_filters, build_query_key, query_cache
from fintracks.core.exceptions import InsufficientStock, InvalidOperation
from .models import StockMovement

logger = logging.getLogger(__name__)

SUMMARY_PERIODS = ('day', 'week', 'month')
LOW_STOCK_TABLE = 'product_variants_low_stock'


def apply_stock_change(variant_id, quantity, movement_type, reference_type='manual',
                       reference_id=None, notes='', user=None, check_available=True):
    """
    Lock the variant, apply an ``in``/``out`` change and record it.

    Must be called inside ``transaction.atomic()``. For ``out`` with
    ``check_available`` set, raises InsufficientStock when the on-hand
    quantity is lower than ``quantity``; without it the stock is floored
    at zero and the movement records what was actually removed.
    Returns the created StockMovement, or None when nothing moved.
    """
    if movement_type not in ('in', 'out'):
        raise InvalidOperation(f"Unsupported movement type for a stock change: {movement_type}")
    quantity = int(quantity)
    if quantity <= 0:
        raise InvalidOperation("Quantity must be greater than zero")

    variant = ProductVariant.objects.select_for_update().get(pk=variant_id)
    old_stock = variant.stok

    if movement_type == 'out':
        if old_stock < quantity:
            if check_available:
                raise InsufficientStock(variant, quantity, old_stock)
            quantity = max(old_stock, 0)
        new_stock = old_stock - quantity
    else:
        new_stock = old_stock + quantity

    if quantity == 0:
        logger.warning(f"No stock to remove for variant {variant_id} ({reference_type} #{reference_id})")
        return None

    variant.stok = new_stock
    variant.save(update_fields=['stok', 'updated_at'])

    movement = StockMovement.objects.create(
        product_variant=variant,
        movement_type=movement_type,
        quantity=quantity,
        reference_type=reference_type,
        reference_id=reference_id,
        notes=notes,
        created_by=user,
    )
    logger.info(f"Stock {movement_type} {quantity} for variant {variant_id}: {old_stock} -> {new_stock} "
                f"({reference_type} #{reference_id})")
    return movement


def create_movement(variant_id, movement_type, quantity, reference_type='manual',
                    reference_id=None, notes='', user=None):
    """Insert a single ledger row without touching the on-hand quantity"""
    return StockMovement.objects.create(
        product_variant_id=variant_id,
        movement_type=movement_type,
        quantity=quantity,
        reference_type=reference_type,
        reference_id=reference_id,
        notes=notes or '',
        created_by=user,
    )


def bulk_create_movements(rows, user=None):
    """Insert many ledger rows in one statement"""
    movements = [
        StockMovement(
            product_variant_id=row['product_variant'],
            movement_type=row['movement_type'],
            quantity=row['quantity'],
            reference_type=row.get('reference_type', 'manual'),
            reference_id=row.get('reference_id'),
            notes=row.get('notes', ''),
            created_by=user,
        )
        for row in rows
    ]
    return StockMovement.objects.bulk_create(movements)


@transaction.atomic
def adjust_stock(variant_id, new_stock, notes='', user=None):
    """Set the absolute on-hand quantity and record an adjustment movement"""
    new_stock = int(new_stock)
    if new_stock < 0:
        raise InvalidOperation("Stock cannot be negative")

    variant = ProductVariant.objects.select_for_update().get(pk=variant_id)
    old_stock = variant.stok
    variant.stok = new_stock
    variant.save(update_fields=['stok', 'updated_at'])

    movement = StockMovement.objects.create(
        product_variant=variant,
        movement_type='adjustment',
        quantity=new_stock,
        reference_type='adjustment',
        notes=notes or f"Penyesuaian stok dari {old_stock} ke {new_stock}",
        created_by=user,
    )
    logger.info(f"Stock adjusted for variant {variant_id}: {old_stock} -> {new_stock}")
    return movement


def get_movement_history(variant_id=None, limit=50):
    queryset = StockMovement.objects.select_related('product_variant__product', 'created_by')
    if variant_id:
        queryset = queryset.filter(product_variant_id=variant_id)
    return queryset.order_by('-created_at', '-id')[:limit]


def period_start(period, now=None):
    """Start of the summary window: today, the last 7 days or this month"""
    now = timezone.localtime(now or timezone.now())
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == 'day':
        return today
    if period == 'week':
        return today - timedelta(days=7)
    if period == 'month':
        return today.replace(day=1)
    raise InvalidOperation(f"Unknown period: {period}. Use one of {', '.join(SUMMARY_PERIODS)}")


def get_stock_summary(period='day', variant_id=None, now=None):
    """Totals of in/out/adjustment movements since the start of ``period``"""
    queryset = StockMovement.objects.filter(created_at__gte=period_start(period, now))
    if variant_id:
        queryset = queryset.filter(product_variant_id=variant_id)

    totals = queryset.aggregate(
        total_in=Sum(Abs('quantity'), filter=Q(movement_type='in')),
        total_out=Sum(Abs('quantity'), filter=Q(movement_type='out')),
        total_adjustments=Sum(Abs('quantity'), filter=Q(movement_type='adjustment')),
        transaction_count=Count('id'),
        last_movement=Max('created_at'),
    )
    return {
        'period': period,
        'total_in': totals['total_in'] or 0,
        'total_out': totals['total_out'] or 0,
        'total_adjustments': totals['total_adjustments'] or 0,
        'transaction_count': totals['transaction_count'],
        'last_movement': totals['last_movement'],
    }


def low_stock_status(stok):
    if stok <= 0:
        return 'critical'
    if stok <= 2:
        return 'low'
    return 'warning'


def get_low_stock_variants(threshold=None):
    """Active variants at or below ``threshold`` with their alert status, read through the query cache"""
    if threshold is None:
        threshold = settings.LOW_STOCK_THRESHOLD
    filters = {'is_active': True, 'product__is_active': True, 'stok': f'lte.{threshold}'}
    order = ['stok', 'product__nama_produk']
    key = build_query_key(LOW_STOCK_TABLE, filters=filters, order=order)

    def fetch():
        queryset = ProductVariant.objects.select_related('product')
        variants = apply_filters(queryset, filters).order_by(*order)
        return [
            {
                'id': variant.id,
                'product_id': variant.product_id,
                'nama_produk': variant.product.nama_produk,
                'warna': variant.warna,
                'size': variant.size,
                'sku': variant.sku,
                'stok': variant.stok,
                'threshold': threshold,
                'status': low_stock_status(variant.stok),
            }
            for variant in variants
        ]

    return query_cache.get_or_fetch(key, fetch)
