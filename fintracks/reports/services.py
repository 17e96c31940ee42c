"""
Financial aggregations for the report pages and the dashboard.

Everything here is read-only and safe to re-run for the same inputs.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum, Value
from django.db.models.functions import Coalesce

from fintracks.catalog.models import ProductVariant
from fintracks.core.cache_utils import DASHBOARD_CACHE_TTL, dashboard_cache, make_cache_key
from fintracks.core.models import UserSettings
from fintracks.finance.models import Asset, Bank, Expense, Income, Settlement
from fintracks.locations.models import Platform, Store
from fintracks.purchasing.models import Purchase
from fintracks.sales.models import Sale, SaleItem

logger = logging.getLogger(__name__)

UNKNOWN_PLATFORM = 'Tidak Diketahui'
UNCATEGORIZED = 'Lainnya'
COGS_PAYMENT_STATUSES = ('paid', 'partial')
ZERO = Decimal('0.00')


def _sum(queryset, field):
    return queryset.aggregate(
        total=Coalesce(Sum(field), Value(ZERO), output_field=DecimalField(max_digits=15, decimal_places=2))
    )['total']


def gross_margin(revenue, gross_profit):
    """(gross / revenue) * 100, 0 when there is no revenue"""
    if not revenue:
        return ZERO
    return (gross_profit / revenue * 100).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def calculate_profit_loss(start, end):
    """Revenue by platform, COGS, expenses by category and the derived profits"""
    sales = Sale.objects.filter(status='delivered', tanggal__gte=start, tanggal__lte=end)
    revenue_by_platform = {}
    for row in sales.values('store__platform__nama_platform').annotate(total_revenue=Sum('total')):
        name = row['store__platform__nama_platform'] or UNKNOWN_PLATFORM
        revenue_by_platform[name] = revenue_by_platform.get(name, ZERO) + (row['total_revenue'] or ZERO)
    total_revenue = sum(revenue_by_platform.values(), ZERO)

    purchases = Purchase.objects.filter(
        payment_status__in=COGS_PAYMENT_STATUSES, tanggal__gte=start, tanggal__lte=end
    )
    cogs = _sum(purchases, 'total')

    expenses = Expense.objects.filter(tanggal__gte=start, tanggal__lte=end)
    expenses_by_category = {}
    for row in expenses.values('category__nama_kategori').annotate(total_expense=Sum('jumlah')):
        name = row['category__nama_kategori'] or UNCATEGORIZED
        expenses_by_category[name] = expenses_by_category.get(name, ZERO) + (row['total_expense'] or ZERO)
    total_expenses = sum(expenses_by_category.values(), ZERO)

    gross_profit = total_revenue - cogs
    return {
        'period': {'start': start, 'end': end},
        'revenue': {
            'total': total_revenue,
            'by_platform': revenue_by_platform,
        },
        'cogs': cogs,
        'gross_profit': gross_profit,
        'gross_margin': gross_margin(total_revenue, gross_profit),
        'expenses': {
            'total': total_expenses,
            'by_category': expenses_by_category,
        },
        'net_profit': gross_profit - total_expenses,
    }


def calculate_cash_flow(start, end):
    """Operating, investing and financing cash movements for a period"""
    in_period = Q(tanggal__gte=start, tanggal__lte=end)

    settlements = Settlement.objects.filter(in_period).aggregate(
        dicairkan=Coalesce(Sum('jumlah_dicairkan'), Value(ZERO), output_field=DecimalField(max_digits=15, decimal_places=2)),
        admin=Coalesce(Sum('biaya_admin'), Value(ZERO), output_field=DecimalField(max_digits=15, decimal_places=2)),
    )
    penerimaan_penjualan = settlements['dicairkan'] - settlements['admin']
    pembayaran_supplier = _sum(
        Purchase.objects.filter(in_period, payment_method='cash').exclude(payment_status='returned'), 'total'
    )
    pembayaran_operasional = _sum(Expense.objects.filter(in_period), 'jumlah')
    net_operating = penerimaan_penjualan - pembayaran_supplier - pembayaran_operasional

    pembelian_aset = _sum(
        Asset.objects.filter(tanggal_perolehan__gte=start, tanggal_perolehan__lte=end), 'harga_perolehan'
    )
    net_investing = -pembelian_aset

    # Settlement payouts are already counted as operating cash
    tambahan_modal = _sum(Income.objects.filter(in_period, settlement__isnull=True), 'jumlah')
    penarikan_modal = ZERO
    net_financing = tambahan_modal - penarikan_modal

    banks = Bank.objects.filter(is_active=True)
    return {
        'period': {'start': start, 'end': end},
        'operating_activities': {
            'penerimaan_dari_penjualan': penerimaan_penjualan,
            'pembayaran_ke_supplier': pembayaran_supplier,
            'pembayaran_biaya_operasional': pembayaran_operasional,
            'net_operating_cash': net_operating,
        },
        'investing_activities': {
            'pembelian_aset': pembelian_aset,
            'net_investing_cash': net_investing,
        },
        'financing_activities': {
            'tambahan_modal': tambahan_modal,
            'penarikan_modal': penarikan_modal,
            'net_financing_cash': net_financing,
        },
        'net_cash_flow': net_operating + net_investing + net_financing,
        'beginning_cash': _sum(banks, 'saldo_awal'),
        'ending_cash': _sum(banks, 'saldo_akhir'),
    }


def get_company_settings(user):
    """Company profile and initial capital for the given user"""
    user_settings = UserSettings.objects.filter(user=user).first() if user else None
    if user_settings is None:
        return {
            'company_name': '',
            'company_address': '',
            'company_phone': '',
            'company_email': '',
            'modal_awal': ZERO,
            'currency': 'IDR',
        }
    return {
        'company_name': user_settings.company_name,
        'company_address': user_settings.company_address,
        'company_phone': user_settings.company_phone,
        'company_email': user_settings.company_email,
        'modal_awal': user_settings.modal_awal,
        'currency': user_settings.currency,
    }


def calculate_balance_sheet(user=None):
    """Point-in-time balance sheet from current balances, stock and assets"""
    kas_bank = _sum(Bank.objects.filter(is_active=True), 'saldo_akhir')
    piutang = _sum(Store.objects.filter(is_active=True), 'saldo_dashboard')
    persediaan = ProductVariant.objects.filter(is_active=True).aggregate(
        total=Coalesce(
            Sum(ExpressionWrapper(F('stok') * F('product__harga_beli'), output_field=DecimalField(max_digits=15, decimal_places=2))),
            Value(ZERO), output_field=DecimalField(max_digits=15, decimal_places=2)
        )
    )['total']
    current_assets = kas_bank + piutang + persediaan

    assets = Asset.objects.all()
    equipment = _sum(assets, 'harga_perolehan')
    accumulated_depreciation = _sum(assets, 'akumulasi_penyusutan')
    fixed_assets = equipment - accumulated_depreciation

    hutang_usaha = _sum(Purchase.objects.filter(status='received', payment_status='unpaid'), 'total')

    modal_awal = get_company_settings(user)['modal_awal']
    laba_ditahan = _sum(Sale.objects.filter(status='delivered'), 'total') - _sum(Expense.objects.all(), 'jumlah')
    total_equity = modal_awal + laba_ditahan
    total_assets = current_assets + fixed_assets
    return {
        'assets': {
            'current_assets': {
                'kas_bank': kas_bank,
                'piutang': piutang,
                'persediaan': persediaan,
                'total': current_assets,
            },
            'fixed_assets': {
                'equipment': equipment,
                'accumulated_depreciation': accumulated_depreciation,
                'total': fixed_assets,
            },
            'total_assets': total_assets,
        },
        'liabilities': {
            'current_liabilities': {'hutang_usaha': hutang_usaha, 'total': hutang_usaha},
            'total_liabilities': hutang_usaha,
        },
        'equity': {
            'modal_awal': modal_awal,
            'laba_ditahan': laba_ditahan,
            'total': total_equity,
        },
        'is_balanced': abs(total_assets - (hutang_usaha + total_equity)) < 1,
    }


def compute_dashboard_metrics(start, end):
    total_penjualan = _sum(
        Sale.objects.filter(status='delivered', tanggal__gte=start, tanggal__lte=end), 'total'
    )
    total_pengeluaran = _sum(Expense.objects.filter(tanggal__gte=start, tanggal__lte=end), 'jumlah')
    total_cogs = _sum(
        Purchase.objects.filter(payment_status__in=COGS_PAYMENT_STATUSES, tanggal__gte=start, tanggal__lte=end),
        'total'
    )
    saldo_kas_bank = _sum(Bank.objects.filter(is_active=True), 'saldo_akhir')
    return {
        'period': {'start': start, 'end': end},
        'total_penjualan': total_penjualan,
        'total_pengeluaran': total_pengeluaran,
        'total_cogs': total_cogs,
        'saldo_kas_bank': saldo_kas_bank,
        'laba_bersih': total_penjualan - total_pengeluaran - total_cogs,
        'pending_validation': Sale.objects.filter(status='delivered', validated_at__isnull=True).count(),
    }


def get_dashboard_metrics(start, end, refresh=False):
    """Dashboard figures served through the short-TTL cache"""
    key = make_cache_key('dashboard_metrics', str(start), str(end))
    if refresh:
        dashboard_cache.invalidate(key)
    return dashboard_cache.get_or_fetch(key, lambda: compute_dashboard_metrics(start, end), ttl=DASHBOARD_CACHE_TTL)


def get_platform_performance(start, end):
    """Order count, delivered revenue and cancellations per platform"""
    in_period = Q(stores__sales__tanggal__gte=start, stores__sales__tanggal__lte=end)
    rows = Platform.objects.annotate(
        total_orders=Count('stores__sales', filter=in_period),
        delivered_orders=Count('stores__sales', filter=in_period & Q(stores__sales__status='delivered')),
        cancelled_orders=Count('stores__sales', filter=in_period & Q(stores__sales__status__in=['cancelled', 'returned'])),
        revenue=Coalesce(
            Sum('stores__sales__total', filter=in_period & Q(stores__sales__status='delivered')),
            Value(ZERO), output_field=DecimalField(max_digits=15, decimal_places=2)
        ),
    ).order_by('-revenue', 'nama_platform')

    return [
        {
            'platform_id': row.id,
            'nama_platform': row.nama_platform,
            'total_orders': row.total_orders,
            'delivered_orders': row.delivered_orders,
            'cancelled_orders': row.cancelled_orders,
            'revenue': row.revenue,
            'average_order_value': (row.revenue / row.delivered_orders).quantize(Decimal('0.01'))
            if row.delivered_orders else ZERO,
        }
        for row in rows
    ]


def get_top_products(start, end, limit=10):
    """Best-selling variants by quantity in delivered sales"""
    rows = SaleItem.objects.filter(
        sale__status='delivered', sale__tanggal__gte=start, sale__tanggal__lte=end
    ).values(
        'product_variant_id', 'product_variant__sku', 'product_variant__product__nama_produk',
        'product_variant__warna', 'product_variant__size'
    ).annotate(
        total_qty=Sum('qty'),
        total_revenue=Sum('subtotal'),
    ).order_by('-total_qty', '-total_revenue')[:limit]

    return [
        {
            'product_variant_id': row['product_variant_id'],
            'sku': row['product_variant__sku'],
            'nama_produk': row['product_variant__product__nama_produk'],
            'warna': row['product_variant__warna'],
            'size': row['product_variant__size'],
            'total_qty': row['total_qty'],
            'total_revenue': row['total_revenue'],
        }
        for row in rows
    ]
