"""
Tests for the financial reports and dashboard metrics
"""
from datetime import date, timedelta
from django.core.cache import cache
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from decimal import Decimal
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.finance import services as finance_services
from fintracks.reports import services


class ProfitLossTests(TestCase):

    def setUp(self):
        self.today = timezone.localdate()
        self.start = self.today - timedelta(days=30)

    def test_no_sales_only_expenses(self):
        category = TestDataFactory.create_category(name='Listrik')
        TestDataFactory.create_expense(jumlah=Decimal('150000.00'), category=category, tanggal=self.today)
        TestDataFactory.create_expense(jumlah=Decimal('50000.00'), tanggal=self.today)

        report = services.calculate_profit_loss(self.start, self.today)
        self.assertEqual(report['revenue']['total'], Decimal('0'))
        self.assertEqual(report['gross_margin'], Decimal('0'))
        self.assertEqual(report['expenses']['total'], Decimal('200000.00'))
        self.assertEqual(report['expenses']['by_category'], {
            'Listrik': Decimal('150000.00'),
            'Lainnya': Decimal('50000.00'),
        })
        self.assertEqual(report['net_profit'], Decimal('-200000.00'))

    def test_revenue_cogs_and_margin(self):
        shopee = TestDataFactory.create_platform(name='Shopee')
        store = TestDataFactory.create_store(platform=shopee)
        variant = TestDataFactory.create_variant(stok=10)
        TestDataFactory.create_sale(store=store, items=[(variant, 2, Decimal('100000'))], status='delivered')
        TestDataFactory.create_sale(store=store, items=[(variant, 1, Decimal('100000'))], status='shipped')
        TestDataFactory.create_purchase(items=[(variant, 1, Decimal('50000'))], payment_status='paid')
        TestDataFactory.create_purchase(items=[(variant, 1, Decimal('70000'))], payment_status='unpaid')

        report = services.calculate_profit_loss(self.start, self.today)
        self.assertEqual(report['revenue']['by_platform'], {'Shopee': Decimal('200000.00')})
        self.assertEqual(report['cogs'], Decimal('50000.00'))
        self.assertEqual(report['gross_profit'], Decimal('150000.00'))
        self.assertEqual(report['gross_margin'], Decimal('75.00'))
        self.assertEqual(report['net_profit'], Decimal('150000.00'))

    def test_sales_outside_range_ignored(self):
        variant = TestDataFactory.create_variant(stok=10)
        TestDataFactory.create_sale(items=[(variant, 1, Decimal('1000'))], status='delivered',
                                    tanggal=self.start - timedelta(days=1))
        report = services.calculate_profit_loss(self.start, self.today)
        self.assertEqual(report['revenue']['total'], Decimal('0'))

    def test_gross_margin_rounding(self):
        self.assertEqual(services.gross_margin(Decimal('3'), Decimal('1')), Decimal('33.33'))
        self.assertEqual(services.gross_margin(Decimal('0'), Decimal('-5')), Decimal('0'))


class CashFlowTests(TestCase):

    def test_cash_flow_sections(self):
        today = timezone.localdate()
        store = TestDataFactory.create_store(saldo=Decimal('500000.00'))
        bank = TestDataFactory.create_bank(saldo_awal=Decimal('100000.00'))
        finance_services.process_settlement(store, bank, Decimal('300000'), admin_fee=Decimal('5000'))
        finance_services.create_income({'tanggal': today, 'jumlah': Decimal('40000.00'), 'bank': bank})
        TestDataFactory.create_expense(jumlah=Decimal('20000.00'), tanggal=today)
        TestDataFactory.create_purchase(items=[(TestDataFactory.create_variant(), 1, Decimal('10000'))],
                                        payment_method='cash')
        TestDataFactory.create_asset(harga=Decimal('60000.00'), tanggal_perolehan=today)

        report = services.calculate_cash_flow(today - timedelta(days=1), today)
        operating = report['operating_activities']
        self.assertEqual(operating['penerimaan_dari_penjualan'], Decimal('295000.00'))
        self.assertEqual(operating['pembayaran_ke_supplier'], Decimal('10000.00'))
        self.assertEqual(operating['pembayaran_biaya_operasional'], Decimal('20000.00'))
        self.assertEqual(operating['net_operating_cash'], Decimal('265000.00'))
        self.assertEqual(report['investing_activities']['net_investing_cash'], Decimal('-60000.00'))
        self.assertEqual(report['financing_activities']['tambahan_modal'], Decimal('40000.00'))
        self.assertEqual(report['net_cash_flow'], Decimal('245000.00'))
        self.assertEqual(report['ending_cash'], Decimal('435000.00'))


class BalanceSheetTests(TestCase):

    def test_balance_sheet_totals(self):
        user = TestDataFactory.create_user()
        TestDataFactory.create_user_settings(user, modal_awal=Decimal('1000000.00'))
        TestDataFactory.create_bank(saldo_awal=Decimal('250000.00'))
        TestDataFactory.create_store(saldo=Decimal('75000.00'))
        product = TestDataFactory.create_product(harga_beli=Decimal('20000.00'))
        TestDataFactory.create_variant(product=product, stok=3)
        TestDataFactory.create_purchase(items=[(TestDataFactory.create_variant(product=product, stok=0),
                                                1, Decimal('20000'))],
                                        status='received', payment_status='unpaid')

        sheet = services.calculate_balance_sheet(user)
        current = sheet['assets']['current_assets']
        self.assertEqual(current['kas_bank'], Decimal('250000.00'))
        self.assertEqual(current['piutang'], Decimal('75000.00'))
        self.assertEqual(current['persediaan'], Decimal('80000.00'))
        self.assertEqual(sheet['liabilities']['total_liabilities'], Decimal('20000.00'))
        self.assertEqual(sheet['equity']['modal_awal'], Decimal('1000000.00'))
        self.assertIn('is_balanced', sheet)

    def test_defaults_without_settings(self):
        sheet = services.calculate_balance_sheet(None)
        self.assertEqual(sheet['equity']['modal_awal'], Decimal('0.00'))
        self.assertTrue(sheet['is_balanced'])


class DashboardTests(TestCase):

    def setUp(self):
        cache.clear()
        self.today = timezone.localdate()
        self.start = self.today - timedelta(days=7)
        self.variant = TestDataFactory.create_variant(stok=10)

    def test_metrics(self):
        TestDataFactory.create_sale(items=[(self.variant, 1, Decimal('90000'))], status='delivered')
        TestDataFactory.create_expense(jumlah=Decimal('10000.00'))
        metrics = services.compute_dashboard_metrics(self.start, self.today)
        self.assertEqual(metrics['total_penjualan'], Decimal('90000.00'))
        self.assertEqual(metrics['laba_bersih'], Decimal('80000.00'))
        self.assertEqual(metrics['pending_validation'], 1)

    def test_dashboard_served_from_cache_until_refresh(self):
        first = services.get_dashboard_metrics(self.start, self.today)
        TestDataFactory.create_sale(items=[(self.variant, 1, Decimal('90000'))], status='delivered')

        cached = services.get_dashboard_metrics(self.start, self.today)
        self.assertEqual(cached['total_penjualan'], first['total_penjualan'])

        fresh = services.get_dashboard_metrics(self.start, self.today, refresh=True)
        self.assertEqual(fresh['total_penjualan'], Decimal('90000.00'))

    def test_platform_performance_and_top_products(self):
        platform = TestDataFactory.create_platform(name='Tokopedia')
        store = TestDataFactory.create_store(platform=platform)
        other = TestDataFactory.create_variant(stok=10, warna='Putih')
        TestDataFactory.create_sale(store=store, items=[(self.variant, 3, Decimal('1000'))], status='delivered')
        TestDataFactory.create_sale(store=store, items=[(other, 1, Decimal('5000'))], status='delivered')
        TestDataFactory.create_sale(store=store, items=[(other, 1, Decimal('5000'))], status='cancelled')

        rows = services.get_platform_performance(self.start, self.today)
        row = next(r for r in rows if r['nama_platform'] == 'Tokopedia')
        self.assertEqual(row['total_orders'], 3)
        self.assertEqual(row['delivered_orders'], 2)
        self.assertEqual(row['cancelled_orders'], 1)
        self.assertEqual(row['revenue'], Decimal('8000.00'))
        self.assertEqual(row['average_order_value'], Decimal('4000.00'))

        top = services.get_top_products(self.start, self.today, limit=1)
        self.assertEqual(len(top), 1)
        self.assertEqual(top[0]['product_variant_id'], self.variant.id)
        self.assertEqual(top[0]['total_qty'], 3)


class ReportAPITests(TestCase):

    def setUp(self):
        cache.clear()
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_profit_loss_endpoint(self):
        response = self.client.get('/api/v1/reports/profit-loss/', {'date_from': '2024-01-01', 'date_to': '2024-01-31'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['period']['start'], date(2024, 1, 1))
        self.assertIn('company', response.data)

    def test_invalid_date(self):
        response = self.client.get('/api/v1/reports/profit-loss/', {'date_from': '01-01-2024'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_reversed_range(self):
        response = self.client.get('/api/v1/reports/cash-flow/', {'date_from': '2024-02-01', 'date_to': '2024-01-01'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_other_endpoints(self):
        for url in ('/api/v1/reports/cash-flow/', '/api/v1/reports/balance-sheet/',
                    '/api/v1/reports/dashboard/', '/api/v1/reports/platform-performance/',
                    '/api/v1/reports/top-products/'):
            response = self.client.get(url)
            self.assertEqual(response.status_code, status.HTTP_200_OK, url)

    def test_top_products_bad_limit(self):
        response = self.client.get('/api/v1/reports/top-products/', {'limit': 'ten'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
