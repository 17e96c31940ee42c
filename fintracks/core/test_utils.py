"""
Test utilities and factories for creating test data
"""
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from fintracks.core.models import UserSettings
from fintracks.locations.models import Platform, Store
from fintracks.catalog.models import Product, ProductVariant
from fintracks.parties.models import Supplier, Expedition
from fintracks.finance.models import Asset, Bank, Category, Expense
from fintracks.purchasing import services as purchase_services
from fintracks.sales import services as sale_services
from decimal import Decimal
from django.utils import timezone
import random
import string

User = get_user_model()


class TestDataFactory:
    """Factory class for creating test data"""

    @staticmethod
    def random_string(length=10):
        """Generate a random string"""
        return ''.join(random.choices(string.ascii_letters + string.digits, k=length))

    @staticmethod
    def create_user(username=None, email=None, password='testpass123', is_staff=False, is_superuser=False):
        """Create a test user"""
        if not username:
            username = f'testuser_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{username}@test.com'
        return User.objects.create_user(
            username=username,
            email=email,
            password=password,
            is_staff=is_staff,
            is_superuser=is_superuser
        )

    @staticmethod
    def create_user_settings(user, **kwargs):
        """Create settings for a user"""
        return UserSettings.objects.create(user=user, **kwargs)

    @staticmethod
    def create_platform(name=None, komisi=Decimal('5.00')):
        """Create a test platform"""
        if not name:
            name = f'Platform_{TestDataFactory.random_string(6)}'
        return Platform.objects.create(nama_platform=name, komisi_default_persen=komisi)

    @staticmethod
    def create_store(name=None, platform=None, saldo=Decimal('0.00')):
        """Create a test store"""
        if not name:
            name = f'Store_{TestDataFactory.random_string(6)}'
        if not platform:
            platform = TestDataFactory.create_platform()
        return Store.objects.create(platform=platform, nama_toko=name, saldo_dashboard=saldo)

    @staticmethod
    def create_product(name=None, harga_beli=Decimal('50000.00'), harga_jual=Decimal('80000.00')):
        """Create a test product"""
        if not name:
            name = f'Product_{TestDataFactory.random_string(6)}'
        return Product.objects.create(
            nama_produk=name,
            harga_beli=harga_beli,
            harga_jual_default=harga_jual
        )

    @staticmethod
    def create_variant(product=None, stok=10, warna='Hitam', size='M', sku=None):
        """Create a test product variant"""
        if not product:
            product = TestDataFactory.create_product()
        if not sku:
            sku = f'SKU_{TestDataFactory.random_string(8)}'
        return ProductVariant.objects.create(product=product, warna=warna, size=size, sku=sku, stok=stok)

    @staticmethod
    def create_expedition(name=None, kode=None):
        """Create a test expedition"""
        if not name:
            name = f'Expedition_{TestDataFactory.random_string(6)}'
        return Expedition.objects.create(nama_ekspedisi=name, kode=kode)

    @staticmethod
    def create_supplier(name=None, email=None):
        """Create a test supplier"""
        if not name:
            name = f'Supplier_{TestDataFactory.random_string(6)}'
        if not email:
            email = f'{name.lower()}@test.com'
        return Supplier.objects.create(nama_supplier=name, email=email)

    @staticmethod
    def create_sale(user=None, store=None, items=None, status='pending', tanggal=None,
                    ongkir=Decimal('0.00'), diskon=Decimal('0.00'), order_number=None):
        """
        Create a sale through the sale service.

        ``items`` is a list of (variant, qty, harga_satuan) tuples.
        """
        if not store:
            store = TestDataFactory.create_store()
        if items is None:
            items = [(TestDataFactory.create_variant(), 1, Decimal('100000.00'))]
        if not order_number:
            order_number = f'ORD-{TestDataFactory.random_string(8).upper()}'
        data = {
            'tanggal': tanggal or timezone.localdate(),
            'no_pesanan_platform': order_number,
            'store': store,
            'ongkir': ongkir,
            'diskon': diskon,
            'status': status,
        }
        line_items = [
            {'product_variant': variant, 'qty': qty, 'harga_satuan': price}
            for variant, qty, price in items
        ]
        return sale_services.create_sale(data, line_items, user=user)

    @staticmethod
    def create_purchase(user=None, supplier=None, items=None, status='pending', payment_status='unpaid',
                        payment_method='cash', tanggal=None):
        """
        Create a purchase through the purchase service.

        ``items`` is a list of (variant, qty, harga_beli_satuan) tuples.
        """
        if not supplier:
            supplier = TestDataFactory.create_supplier()
        if items is None:
            items = [(TestDataFactory.create_variant(stok=0), 10, Decimal('50000.00'))]
        data = {
            'tanggal': tanggal or timezone.localdate(),
            'supplier': supplier,
            'status': status,
            'payment_status': payment_status,
            'payment_method': payment_method,
        }
        line_items = [
            {'product_variant': variant, 'qty': qty, 'harga_beli_satuan': price}
            for variant, qty, price in items
        ]
        return purchase_services.create_purchase(data, line_items, user=user)

    @staticmethod
    def create_bank(name=None, saldo_awal=Decimal('0.00')):
        """Create a test bank account"""
        if not name:
            name = f'Bank_{TestDataFactory.random_string(4)}'
        return Bank.objects.create(
            nama_bank=name,
            nama_pemilik='PT Test',
            no_rekening=f'{random.randint(1000000000, 9999999999)}',
            saldo_awal=saldo_awal,
            saldo_akhir=saldo_awal
        )

    @staticmethod
    def create_category(name=None, tipe='expense'):
        """Create a test income/expense category"""
        if not name:
            name = f'Category_{TestDataFactory.random_string(6)}'
        return Category.objects.create(nama_kategori=name, tipe_kategori=tipe)

    @staticmethod
    def create_expense(jumlah=Decimal('100000.00'), category=None, bank=None, tanggal=None):
        """Create a test expense row (bank balance untouched)"""
        return Expense.objects.create(
            tanggal=tanggal or timezone.localdate(),
            category=category,
            jumlah=jumlah,
            bank=bank
        )

    @staticmethod
    def create_asset(kode=None, harga=Decimal('12000000.00'), umur=12, tanggal_perolehan=None):
        """Create a test fixed asset"""
        if not kode:
            kode = f'AST-{TestDataFactory.random_string(6).upper()}'
        return Asset.objects.create(
            kode_asset=kode,
            nama_asset=f'Asset {kode}',
            harga_perolehan=harga,
            tanggal_perolehan=tanggal_perolehan or timezone.localdate(),
            umur_ekonomis_bulan=umur
        )


class AuthenticatedAPIClient(APIClient):
    """APIClient with authentication helper"""

    def authenticate_user(self, user):
        """Authenticate the client with a user"""
        refresh = RefreshToken.for_user(user)
        self.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
        return self

    def logout(self):
        """Remove authentication"""
        self.credentials()
