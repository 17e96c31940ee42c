"""
Tests for finance: settlements, bank balances, incomes/expenses and depreciation
"""
from datetime import date
from io import StringIO
from django.core.management import call_command
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from decimal import Decimal
from fintracks.core.exceptions import InvalidOperation
from fintracks.core.models import AuditLog
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.finance import services
from fintracks.finance.models import Income, Settlement


class SettlementServiceTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.store = TestDataFactory.create_store(saldo=Decimal('1000000.00'))
        self.bank = TestDataFactory.create_bank(saldo_awal=Decimal('200000.00'))

    def test_settlement_moves_balance_net_of_fee(self):
        settlement = services.process_settlement(self.store, self.bank, Decimal('500000'),
                                                 admin_fee=Decimal('2500'), user=self.user)
        self.store.refresh_from_db()
        self.bank.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('500000.00'))
        self.assertEqual(self.bank.saldo_akhir, Decimal('697500.00'))
        self.assertEqual(settlement.jumlah_bersih, Decimal('497500'))

        income = Income.objects.get(settlement=settlement)
        self.assertEqual(income.jumlah, Decimal('497500.00'))
        self.assertEqual(income.category.nama_kategori, services.SETTLEMENT_CATEGORY_NAME)
        self.assertEqual(income.category.tipe_kategori, 'income')

    def test_settlement_exceeding_store_balance(self):
        with self.assertRaises(InvalidOperation):
            services.process_settlement(self.store, self.bank, Decimal('1000000.01'))
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('1000000.00'))
        self.assertFalse(Settlement.objects.exists())

    def test_invalid_amounts(self):
        with self.assertRaises(InvalidOperation):
            services.process_settlement(self.store, self.bank, Decimal('0'))
        with self.assertRaises(InvalidOperation):
            services.process_settlement(self.store, self.bank, Decimal('100'), admin_fee=Decimal('-1'))
        with self.assertRaises(InvalidOperation):
            services.process_settlement(self.store, self.bank, Decimal('100'), admin_fee=Decimal('101'))

    def test_inactive_bank(self):
        self.bank.is_active = False
        self.bank.save()
        with self.assertRaises(InvalidOperation):
            services.process_settlement(self.store, self.bank, Decimal('100'))

    def test_settlement_category_reused(self):
        services.process_settlement(self.store, self.bank, Decimal('100'))
        services.process_settlement(self.store, self.bank, Decimal('100'))
        self.assertEqual(Income.objects.values('category').distinct().count(), 1)

    def test_settlement_income_is_locked(self):
        settlement = services.process_settlement(self.store, self.bank, Decimal('100'))
        with self.assertRaises(InvalidOperation):
            services.delete_income(settlement.income)
        with self.assertRaises(InvalidOperation):
            services.update_income(settlement.income, {'jumlah': Decimal('1')})


class CashEntryTests(TestCase):

    def setUp(self):
        self.bank = TestDataFactory.create_bank(saldo_awal=Decimal('1000.00'))
        self.expense_category = TestDataFactory.create_category(tipe='expense')

    def _balance(self):
        self.bank.refresh_from_db()
        return self.bank.saldo_akhir

    def test_expense_lifecycle(self):
        expense = services.create_expense({
            'tanggal': timezone.localdate(), 'category': self.expense_category,
            'jumlah': Decimal('300.00'), 'bank': self.bank,
        })
        self.assertEqual(self._balance(), Decimal('700.00'))
        services.update_expense(expense, {'jumlah': Decimal('100.00')})
        self.assertEqual(self._balance(), Decimal('900.00'))
        services.delete_expense(expense)
        self.assertEqual(self._balance(), Decimal('1000.00'))

    def test_income_lifecycle(self):
        income = services.create_income({
            'tanggal': timezone.localdate(), 'jumlah': Decimal('250.00'), 'bank': self.bank,
        })
        self.assertEqual(self._balance(), Decimal('1250.00'))
        services.delete_income(income)
        self.assertEqual(self._balance(), Decimal('1000.00'))

    def test_expense_without_bank(self):
        services.create_expense({'tanggal': timezone.localdate(), 'jumlah': Decimal('10.00')})
        self.assertEqual(self._balance(), Decimal('1000.00'))


class DepreciationTests(TestCase):

    def test_monthly_depreciation(self):
        self.assertEqual(services.monthly_depreciation(Decimal('12000000'), 12), Decimal('1000000.00'))
        self.assertEqual(services.monthly_depreciation(Decimal('1000'), 3), Decimal('333.33'))
        self.assertEqual(services.monthly_depreciation(Decimal('1000'), 0), Decimal('0.00'))

    def test_months_used(self):
        self.assertEqual(services.months_used(date(2024, 1, 1), date(2024, 1, 30)), 0)
        self.assertEqual(services.months_used(date(2024, 1, 1), date(2024, 3, 1)), 2)
        self.assertEqual(services.months_used(date(2024, 3, 1), date(2024, 1, 1)), 0)

    def test_update_depreciation(self):
        asset = TestDataFactory.create_asset(harga=Decimal('12000000.00'), umur=12,
                                             tanggal_perolehan=date(2024, 1, 1))
        services.update_depreciation(asset, as_of=date(2024, 4, 1))
        asset.refresh_from_db()
        self.assertEqual(asset.akumulasi_penyusutan, Decimal('3000000.00'))
        self.assertEqual(asset.nilai_buku, Decimal('9000000.00'))

    def test_depreciation_capped_at_cost(self):
        asset = TestDataFactory.create_asset(harga=Decimal('1200.00'), umur=12,
                                             tanggal_perolehan=date(2020, 1, 1))
        services.update_depreciation(asset, as_of=date(2024, 1, 1))
        self.assertEqual(asset.akumulasi_penyusutan, Decimal('1200.00'))
        self.assertEqual(asset.nilai_buku, Decimal('0.00'))

    def test_management_command(self):
        asset = TestDataFactory.create_asset(harga=Decimal('1200.00'), umur=12,
                                             tanggal_perolehan=date(2024, 1, 1))
        out = StringIO()
        call_command('update_depreciation', '--as-of', '2024-03-01', stdout=out)
        asset.refresh_from_db()
        self.assertEqual(asset.akumulasi_penyusutan, Decimal('200.00'))
        self.assertIn('Updated depreciation for 1 asset(s)', out.getvalue())


class FinanceAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.store = TestDataFactory.create_store(saldo=Decimal('100000.00'))
        self.bank = TestDataFactory.create_bank()

    def test_bank_create_sets_closing_balance(self):
        response = self.client.post('/api/v1/banks/', {
            'nama_bank': 'BCA', 'nama_pemilik': 'PT Test', 'no_rekening': '123', 'saldo_awal': '5000.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['saldo_akhir']), Decimal('5000.00'))

    def test_settlement_endpoint(self):
        response = self.client.post('/api/v1/settlements/', {
            'store': self.store.id, 'bank': self.bank.id,
            'jumlah_dicairkan': '60000.00', 'biaya_admin': '1000.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['jumlah_bersih']), Decimal('59000.00'))
        self.assertTrue(AuditLog.objects.filter(action='settlement').exists())

    def test_settlement_endpoint_insufficient_balance(self):
        response = self.client.post('/api/v1/settlements/', {
            'store': self.store.id, 'bank': self.bank.id, 'jumlah_dicairkan': '200000.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Saldo toko tidak mencukupi', response.data['error'])

    def test_settlement_income_delete_refused(self):
        settlement = services.process_settlement(self.store, self.bank, Decimal('1000'))
        response = self.client.delete(f'/api/v1/incomes/{settlement.income.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_expense_category_type_checked(self):
        income_category = TestDataFactory.create_category(tipe='income')
        response = self.client.post('/api/v1/expenses/', {
            'tanggal': timezone.localdate().isoformat(), 'category': income_category.id, 'jumlah': '10.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_asset_create_computes_depreciation(self):
        response = self.client.post('/api/v1/assets/', {
            'kode_asset': 'LPT-01', 'nama_asset': 'Laptop', 'harga_perolehan': '6000000.00',
            'tanggal_perolehan': timezone.localdate().isoformat(), 'umur_ekonomis_bulan': 24,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['penyusutan_per_bulan']), Decimal('250000.00'))
        self.assertEqual(Decimal(response.data['nilai_buku']), Decimal('6000000.00'))
