"""
Sale lifecycle: totals, status-driven stock ledger and store balance.

Stock leaves the warehouse when an order is shipped or delivered and comes
back when a shipped/delivered order is cancelled or returned. The store's
``saldo_dashboard`` follows the ``delivered`` status only. Each operation
runs in one transaction, so a failure (e.g. insufficient stock on any line)
leaves stock, balance and status untouched.
"""
import logging
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from fintracks.core.exceptions import InvalidOperation, SaleHasAdjustments
from fintracks.inventory.services import apply_stock_change
from fintracks.locations.models import Store
from .models import Sale, SaleItem, SalesAdjustment

logger = logging.getLogger(__name__)

STATUS_LABELS = dict(Sale.STATUS_CHOICES)

OPEN_STATUSES = frozenset(['pending', 'processing'])
SHIPPED_STATUSES = frozenset(['shipped', 'delivered'])
REVERSED_STATUSES = frozenset(['cancelled', 'returned'])

ADJUSTMENT_TYPE_ALIASES = {
    'denda': 'penalty',
    'pinalti': 'penalty',
    'selisih_ongkir': 'shipping_diff',
    'komisi': 'commission',
    'lainnya': 'other',
}


def stock_direction(old_status, new_status):
    """Return 'out', 'in' or None for a status transition"""
    if old_status == new_status:
        return None
    if old_status in OPEN_STATUSES and new_status in SHIPPED_STATUSES:
        return 'out'
    if old_status in SHIPPED_STATUSES and new_status in REVERSED_STATUSES:
        return 'in'
    if old_status in REVERSED_STATUSES and new_status in SHIPPED_STATUSES:
        return 'out'
    return None


def saldo_delta(old_status, new_status, total):
    """Balance change for a transition: +total entering delivered, -total leaving it"""
    if old_status == new_status:
        return Decimal('0')
    if new_status == 'delivered':
        return total
    if old_status == 'delivered':
        return -total
    return Decimal('0')


def update_store_saldo(store_id, delta):
    """Atomically add ``delta`` to the store balance"""
    if not delta:
        return
    Store.objects.filter(pk=store_id).update(saldo_dashboard=F('saldo_dashboard') + delta)
    logger.info(f"Store {store_id} saldo_dashboard changed by {delta}")


def compute_totals(items, ongkir=Decimal('0'), diskon=Decimal('0')):
    """subtotal = sum(qty * harga_satuan); total = subtotal + ongkir - diskon"""
    subtotal = sum(
        (Decimal(item['qty']) * Decimal(str(item['harga_satuan'])) for item in items),
        Decimal('0.00')
    )
    total = subtotal + Decimal(str(ongkir or 0)) - Decimal(str(diskon or 0))
    return subtotal, total


def _variant_id(value):
    return getattr(value, 'pk', value)


def _move_items_stock(sale, direction, notes, user, reference_type='sale_status_change', items=None):
    # Consistent lock order across concurrent requests
    items = items if items is not None else sale.items.all()
    for item in sorted(items, key=lambda i: i.product_variant_id):
        apply_stock_change(
            item.product_variant_id, item.qty, direction,
            reference_type=reference_type,
            reference_id=sale.id,
            notes=notes,
            user=user,
        )


def _apply_status_effects(sale, old_status, new_status, user):
    direction = stock_direction(old_status, new_status)
    if direction:
        label = STATUS_LABELS.get(new_status, new_status)
        if direction == 'out':
            notes = f"Pengurangan stok - status berubah ke {label}"
        else:
            notes = f"Pengembalian stok - status berubah ke {label}"
        _move_items_stock(sale, direction, notes, user)

    update_store_saldo(sale.store_id, saldo_delta(old_status, new_status, sale.total))


def _create_items(sale, items):
    created = []
    for item in items:
        created.append(SaleItem.objects.create(
            sale=sale,
            product_variant_id=_variant_id(item['product_variant']),
            qty=item['qty'],
            harga_satuan=item['harga_satuan'],
        ))
    return created


@transaction.atomic
def change_sale_status(sale, new_status, user=None):
    """Move a sale to ``new_status`` applying its stock and balance effects"""
    if new_status not in STATUS_LABELS:
        raise InvalidOperation(f"Status tidak valid: {new_status}")

    sale = Sale.objects.select_for_update().get(pk=sale.pk)
    old_status = sale.status
    if old_status == new_status:
        return sale

    _apply_status_effects(sale, old_status, new_status, user)

    sale.status = new_status
    sale.save(update_fields=['status', 'updated_at'])
    logger.info(f"Sale {sale.no_pesanan_platform} (id={sale.id}) status {old_status} -> {new_status}")
    return sale


@transaction.atomic
def create_sale(data, items, user=None):
    """Create a sale with its items; a non-pending initial status applies its effects"""
    if not items:
        raise InvalidOperation("Penjualan harus memiliki minimal satu item")

    data = dict(data)
    status = data.pop('status', 'pending')
    subtotal, total = compute_totals(items, data.get('ongkir'), data.get('diskon'))

    sale = Sale.objects.create(
        **data,
        subtotal=subtotal,
        total=total,
        status='pending',
        created_by=user,
    )
    _create_items(sale, items)

    if status != 'pending':
        sale = change_sale_status(sale, status, user)
    logger.info(f"Sale created: {sale.no_pesanan_platform} (id={sale.id}, total={sale.total})")
    return sale


@transaction.atomic
def update_sale(sale, data, items=None, user=None):
    """
    Update header fields and optionally replace the items.

    Replacing the items of a shipped/delivered sale returns the old
    quantities to stock and takes the new ones out. A total change on a
    delivered sale is reflected in the store balance, and moving it to another
    store moves its balance along. A ``status`` in
    ``data`` is applied last through change_sale_status.
    """
    sale = Sale.objects.select_for_update().get(pk=sale.pk)
    data = dict(data)
    new_status = data.pop('status', None)
    old_total = sale.total
    old_store_id = sale.store_id

    if items is not None:
        if not items:
            raise InvalidOperation("Penjualan harus memiliki minimal satu item")
        old_items = list(sale.items.all())
        if sale.status in SHIPPED_STATUSES:
            _move_items_stock(sale, 'in', "Pengembalian stok - item penjualan diperbarui", user,
                              reference_type='sale', items=old_items)
        sale.items.all().delete()
        new_items = _create_items(sale, items)
        if sale.status in SHIPPED_STATUSES:
            _move_items_stock(sale, 'out', "Pengurangan stok - item penjualan diperbarui", user,
                              reference_type='sale', items=new_items)

    for field, value in data.items():
        setattr(sale, field, value)

    line_items = [{'qty': i.qty, 'harga_satuan': i.harga_satuan} for i in sale.items.all()]
    sale.subtotal, sale.total = compute_totals(line_items, sale.ongkir, sale.diskon)
    sale.save()

    if sale.status == 'delivered':
        if sale.store_id != old_store_id:
            update_store_saldo(old_store_id, -old_total)
            update_store_saldo(sale.store_id, sale.total)
            if sale.validated_at is not None:
                deducted = sum((a.amount for a in sale.adjustments.all()), Decimal('0'))
                update_store_saldo(old_store_id, deducted)
                update_store_saldo(sale.store_id, -deducted)
        elif sale.total != old_total:
            update_store_saldo(sale.store_id, sale.total - old_total)

    if new_status and new_status != sale.status:
        sale = change_sale_status(sale, new_status, user)
    return sale


@transaction.atomic
def delete_sale(sale, user=None):
    """Delete a sale, returning shipped stock and reversing a delivered balance"""
    sale = Sale.objects.select_for_update().get(pk=sale.pk)
    if sale.adjustments.exists():
        raise SaleHasAdjustments(
            "Penjualan tidak dapat dihapus karena sudah memiliki penyesuaian"
        )

    if sale.status in SHIPPED_STATUSES:
        _move_items_stock(sale, 'in', "Pengembalian stok - penjualan dihapus", user, reference_type='sale')
    if sale.status == 'delivered':
        update_store_saldo(sale.store_id, -sale.total)

    sale_id = sale.id
    sale.delete()
    logger.info(f"Sale deleted: id={sale_id}")


def get_pending_validation_sales():
    """Delivered sales not validated yet"""
    return Sale.objects.select_related('store__platform').filter(
        status='delivered', validated_at__isnull=True
    ).order_by('tanggal', 'id')


def normalize_adjustment_type(value):
    value = (value or '').strip().lower()
    value = ADJUSTMENT_TYPE_ALIASES.get(value, value)
    if value not in dict(SalesAdjustment.ADJUSTMENT_TYPE_CHOICES):
        raise InvalidOperation(f"Jenis penyesuaian tidak valid: {value}")
    return value


@transaction.atomic
def validate_sale_with_adjustments(sale, adjustments, user=None, notes=''):
    """
    Mark a delivered sale as validated, recording any deductions.

    The total of all its adjustments, including ones recorded beforehand,
    is taken off the store balance.
    """
    sale = Sale.objects.select_for_update().get(pk=sale.pk)
    if sale.status != 'delivered':
        raise InvalidOperation("Hanya penjualan dengan status Selesai yang dapat divalidasi")
    if sale.validated_at is not None:
        raise InvalidOperation("Penjualan sudah divalidasi")

    created = []
    for adjustment in adjustments or []:
        amount = Decimal(str(adjustment.get('amount', 0)))
        if amount <= 0:
            raise InvalidOperation("Jumlah penyesuaian harus lebih dari 0")
        created.append(SalesAdjustment.objects.create(
            sale=sale,
            adjustment_type=normalize_adjustment_type(adjustment.get('type') or adjustment.get('adjustment_type')),
            amount=amount,
            notes=adjustment.get('notes', ''),
            created_by=user,
        ))

    adjustment_total = sum((a.amount for a in sale.adjustments.all()), Decimal('0'))
    sale.validated_at = timezone.now()
    sale.needs_adjustment = adjustment_total > 0
    sale.adjustment_notes = notes or '; '.join(a.notes for a in created if a.notes)
    sale.save(update_fields=['validated_at', 'needs_adjustment', 'adjustment_notes', 'updated_at'])

    update_store_saldo(sale.store_id, -adjustment_total)
    logger.info(f"Sale {sale.id} validated with {len(created)} adjustment(s) totalling {adjustment_total}")
    return sale, created


def get_sale_adjustments(sale_id):
    return SalesAdjustment.objects.filter(sale_id=sale_id).order_by('-created_at')


@transaction.atomic
def create_adjustment(sale, adjustment_type, amount, notes='', user=None):
    """
    Record an adjustment on a sale.

    An adjustment added after validation is taken off the store balance at
    once; earlier ones are deducted when the sale is validated.
    """
    sale = Sale.objects.select_for_update().get(pk=sale.pk)
    adjustment = SalesAdjustment.objects.create(
        sale=sale,
        adjustment_type=normalize_adjustment_type(adjustment_type),
        amount=amount,
        notes=notes,
        created_by=user,
    )
    if sale.validated_at is not None:
        update_store_saldo(sale.store_id, -adjustment.amount)
        if not sale.needs_adjustment:
            sale.needs_adjustment = True
            sale.save(update_fields=['needs_adjustment', 'updated_at'])
    return adjustment
