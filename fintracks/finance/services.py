"""
Cash bookkeeping: settlements, bank balances and asset depreciation
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from fintracks.core.exceptions import InvalidOperation
from fintracks.locations.models import Store
from .models import Bank, Category, Expense, Income, Settlement

logger = logging.getLogger(__name__)

SETTLEMENT_CATEGORY_NAME = 'Pencairan Saldo Toko'
CENT = Decimal('0.01')


def update_bank_balance(bank_id, delta):
    """Atomically add ``delta`` to a bank's saldo_akhir"""
    if not bank_id or not delta:
        return
    Bank.objects.filter(pk=bank_id).update(saldo_akhir=F('saldo_akhir') + delta)
    logger.info(f"Bank {bank_id} saldo_akhir changed by {delta}")


def get_settlement_category():
    category, created = Category.objects.get_or_create(
        nama_kategori=SETTLEMENT_CATEGORY_NAME,
        tipe_kategori='income',
    )
    if created:
        logger.info(f"Created income category '{SETTLEMENT_CATEGORY_NAME}'")
    return category


@transaction.atomic
def process_settlement(store, bank, amount, admin_fee=Decimal('0'), notes='', tanggal=None, user=None):
    """
    Move ``amount`` out of the store's dashboard balance into the bank.

    The bank receives ``amount - admin_fee`` and the same net amount is
    booked as income under the settlement category.
    """
    amount = Decimal(str(amount))
    admin_fee = Decimal(str(admin_fee or 0))
    if amount <= 0:
        raise InvalidOperation("Jumlah pencairan harus lebih dari 0")
    if admin_fee < 0:
        raise InvalidOperation("Biaya admin tidak boleh negatif")
    if admin_fee > amount:
        raise InvalidOperation("Biaya admin tidak boleh melebihi jumlah pencairan")

    store = Store.objects.select_for_update().get(pk=getattr(store, 'pk', store))
    bank = Bank.objects.select_for_update().get(pk=getattr(bank, 'pk', bank))
    if not bank.is_active:
        raise InvalidOperation("Rekening bank tidak aktif")
    if store.saldo_dashboard < amount:
        raise InvalidOperation(
            f"Saldo toko tidak mencukupi. Tersedia: {store.saldo_dashboard}, Dicairkan: {amount}"
        )

    tanggal = tanggal or timezone.localdate()
    net_amount = amount - admin_fee

    Store.objects.filter(pk=store.pk).update(saldo_dashboard=F('saldo_dashboard') - amount)
    update_bank_balance(bank.pk, net_amount)

    settlement = Settlement.objects.create(
        tanggal=tanggal,
        store=store,
        bank=bank,
        jumlah_dicairkan=amount,
        biaya_admin=admin_fee,
        keterangan=notes or '',
        created_by=user,
    )
    Income.objects.create(
        tanggal=tanggal,
        category=get_settlement_category(),
        jumlah=net_amount,
        bank=bank,
        keterangan=f"Pencairan saldo {store.nama_toko}" + (f" - {notes}" if notes else ''),
        settlement=settlement,
        created_by=user,
    )
    logger.info(f"Settlement {settlement.id}: {amount} from store {store.id} to bank {bank.id} "
                f"(admin fee {admin_fee})")
    return settlement


@transaction.atomic
def create_expense(data, user=None):
    expense = Expense.objects.create(**data, created_by=user)
    update_bank_balance(expense.bank_id, -expense.jumlah)
    return expense


@transaction.atomic
def update_expense(expense, data):
    expense = Expense.objects.select_for_update().get(pk=expense.pk)
    update_bank_balance(expense.bank_id, expense.jumlah)
    for field, value in data.items():
        setattr(expense, field, value)
    expense.save()
    update_bank_balance(expense.bank_id, -expense.jumlah)
    return expense


@transaction.atomic
def delete_expense(expense):
    update_bank_balance(expense.bank_id, expense.jumlah)
    expense.delete()


@transaction.atomic
def create_income(data, user=None):
    income = Income.objects.create(**data, created_by=user)
    update_bank_balance(income.bank_id, income.jumlah)
    return income


@transaction.atomic
def update_income(income, data):
    income = Income.objects.select_for_update().get(pk=income.pk)
    if income.settlement_id:
        raise InvalidOperation("Pemasukan dari pencairan saldo tidak dapat diubah")
    update_bank_balance(income.bank_id, -income.jumlah)
    for field, value in data.items():
        setattr(income, field, value)
    income.save()
    update_bank_balance(income.bank_id, income.jumlah)
    return income


@transaction.atomic
def delete_income(income):
    if income.settlement_id:
        raise InvalidOperation("Pemasukan dari pencairan saldo tidak dapat dihapus")
    update_bank_balance(income.bank_id, -income.jumlah)
    income.delete()


def monthly_depreciation(harga_perolehan, umur_ekonomis_bulan):
    if not umur_ekonomis_bulan:
        return Decimal('0.00')
    return (Decimal(harga_perolehan) / Decimal(umur_ekonomis_bulan)).quantize(CENT, rounding=ROUND_HALF_UP)


def months_used(tanggal_perolehan, as_of):
    """Whole 30-day months elapsed since acquisition"""
    return max((as_of - tanggal_perolehan).days // 30, 0)


def update_depreciation(asset, as_of=None):
    """Recompute accumulated depreciation and book value as of a date"""
    as_of = as_of or timezone.localdate()
    per_bulan = monthly_depreciation(asset.harga_perolehan, asset.umur_ekonomis_bulan)
    akumulasi = min(months_used(asset.tanggal_perolehan, as_of) * per_bulan, asset.harga_perolehan)

    asset.penyusutan_per_bulan = per_bulan
    asset.akumulasi_penyusutan = akumulasi
    asset.nilai_buku = asset.harga_perolehan - akumulasi
    asset.save(update_fields=['penyusutan_per_bulan', 'akumulasi_penyusutan', 'nilai_buku', 'updated_at'])
    return asset
