"""
Purchase bookkeeping: totals and the stock effect of receiving goods.

Stock is added while a purchase is ``received``. Leaving that status,
replacing its items or deleting it takes the quantities back out, floored
at zero, since some of the received goods may already have been sold.
"""
import logging
from decimal import Decimal

from django.db import transaction

from fintracks.core.exceptions import InvalidOperation
from fintracks.inventory.models import StockMovement
from fintracks.inventory.services import apply_stock_change
from .models import Purchase, PurchaseItem

logger = logging.getLogger(__name__)


def compute_totals(items):
    """subtotal = total = sum(qty * harga_beli_satuan)"""
    subtotal = sum(
        (Decimal(item['qty']) * Decimal(str(item['harga_beli_satuan'])) for item in items),
        Decimal('0.00')
    )
    return subtotal, subtotal


def _variant_id(value):
    return getattr(value, 'pk', value)


def _create_items(purchase, items):
    return [
        PurchaseItem.objects.create(
            purchase=purchase,
            product_variant_id=_variant_id(item['product_variant']),
            qty=item['qty'],
            harga_beli_satuan=item['harga_beli_satuan'],
        )
        for item in items
    ]


def _receive_items(purchase, items, user):
    for item in sorted(items, key=lambda i: i.product_variant_id):
        apply_stock_change(
            item.product_variant_id, item.qty, 'in',
            reference_type='purchase',
            reference_id=purchase.id,
            notes=f"Pembelian barang masuk ({purchase})",
            user=user,
        )


def _reverse_items(purchase, items, user, reference_type='purchase', notes=None):
    for item in sorted(items, key=lambda i: i.product_variant_id):
        apply_stock_change(
            item.product_variant_id, item.qty, 'out',
            reference_type=reference_type,
            reference_id=purchase.id,
            notes=notes or f"Pembatalan penerimaan pembelian ({purchase})",
            user=user,
            check_available=False,
        )


@transaction.atomic
def create_purchase(data, items, user=None):
    if not items:
        raise InvalidOperation("Pembelian harus memiliki minimal satu item")

    subtotal, total = compute_totals(items)
    purchase = Purchase.objects.create(**data, subtotal=subtotal, total=total, created_by=user)
    created = _create_items(purchase, items)

    if purchase.status == 'received':
        _receive_items(purchase, created, user)
    logger.info(f"Purchase created: {purchase} (id={purchase.id}, status={purchase.status}, total={total})")
    return purchase


@transaction.atomic
def update_purchase(purchase, data, items=None, user=None):
    """Update a purchase, keeping stock consistent with its received state"""
    purchase = Purchase.objects.select_for_update().get(pk=purchase.pk)
    if purchase.is_return:
        raise InvalidOperation("Retur pembelian tidak dapat diubah")

    was_received = purchase.status == 'received'
    will_be_received = data.get('status', purchase.status) == 'received'
    old_items = list(purchase.items.all())

    if was_received and (not will_be_received or items is not None):
        _reverse_items(purchase, old_items, user)

    current_items = old_items
    if items is not None:
        if not items:
            raise InvalidOperation("Pembelian harus memiliki minimal satu item")
        purchase.items.all().delete()
        current_items = _create_items(purchase, items)

    for field, value in data.items():
        setattr(purchase, field, value)

    line_items = [{'qty': i.qty, 'harga_beli_satuan': i.harga_beli_satuan} for i in current_items]
    purchase.subtotal, purchase.total = compute_totals(line_items)
    purchase.save()

    if will_be_received and (not was_received or items is not None):
        _receive_items(purchase, current_items, user)
    return purchase


@transaction.atomic
def create_purchase_return(original, items, data=None, user=None):
    """
    Record goods sent back to the supplier as a purchase with
    payment_status 'returned' and take them out of stock.
    """
    original = Purchase.objects.select_for_update().get(pk=original.pk)
    if original.is_return:
        raise InvalidOperation("Tidak dapat meretur sebuah retur")
    if original.status != 'received':
        raise InvalidOperation("Hanya pembelian yang sudah diterima yang dapat diretur")
    if not items:
        raise InvalidOperation("Retur harus memiliki minimal satu item")

    purchased = {}
    for item in original.items.all():
        purchased[item.product_variant_id] = purchased.get(item.product_variant_id, 0) + item.qty
    for ret in original.returns.all():
        for item in ret.items.all():
            purchased[item.product_variant_id] = purchased.get(item.product_variant_id, 0) - item.qty

    for item in items:
        variant_id = _variant_id(item['product_variant'])
        if item['qty'] > purchased.get(variant_id, 0):
            raise InvalidOperation(f"Jumlah retur melebihi jumlah pembelian untuk varian {variant_id}")

    data = dict(data or {})
    subtotal, total = compute_totals(items)
    notes = f"Return dari pembelian: {original}. {data.pop('notes', '')}".strip()
    purchase_return = Purchase.objects.create(
        tanggal=data.pop('tanggal', original.tanggal),
        supplier=original.supplier,
        no_invoice=data.pop('no_invoice', ''),
        subtotal=subtotal,
        total=total,
        status='cancelled',
        payment_status='returned',
        payment_method=original.payment_method,
        original_purchase=original,
        notes=notes,
        created_by=user,
    )
    created = _create_items(purchase_return, items)
    _reverse_items(purchase_return, created, user, reference_type='return',
                   notes=f"Retur pembelian ke supplier ({original})")
    logger.info(f"Purchase return {purchase_return.id} created for purchase {original.id} (total={total})")
    return purchase_return


@transaction.atomic
def delete_purchase(purchase, user=None):
    """Delete a purchase, undoing its stock effect and its ledger rows"""
    purchase = Purchase.objects.select_for_update().get(pk=purchase.pk)
    if purchase.returns.exists():
        raise InvalidOperation("Pembelian memiliki retur, hapus retur terlebih dahulu")

    items = list(purchase.items.all())
    if purchase.is_return:
        _receive_items(purchase, items, user)
    elif purchase.status == 'received':
        _reverse_items(purchase, items, user)

    StockMovement.objects.filter(
        reference_type__in=['purchase', 'return'], reference_id=purchase.id
    ).delete()

    purchase_id = purchase.id
    purchase.delete()
    logger.info(f"Purchase deleted: id={purchase_id}")
