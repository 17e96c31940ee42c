"""
Tests for the sale lifecycle: stock movements and store balance per status change,
item edits, deletion and validation with adjustments
"""
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from decimal import Decimal
from fintracks.core.exceptions import InsufficientStock, InvalidOperation, SaleHasAdjustments
from fintracks.core.models import AuditLog
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.inventory.models import StockMovement
from fintracks.sales import services
from fintracks.sales.models import Sale, SalesAdjustment


class SaleRuleTests(TestCase):
    """Pure helpers deciding stock and balance effects"""

    def test_stock_direction(self):
        self.assertEqual(services.stock_direction('pending', 'shipped'), 'out')
        self.assertEqual(services.stock_direction('processing', 'delivered'), 'out')
        self.assertIsNone(services.stock_direction('shipped', 'delivered'))
        self.assertEqual(services.stock_direction('delivered', 'returned'), 'in')
        self.assertEqual(services.stock_direction('shipped', 'cancelled'), 'in')
        self.assertEqual(services.stock_direction('cancelled', 'shipped'), 'out')
        self.assertIsNone(services.stock_direction('pending', 'cancelled'))
        self.assertIsNone(services.stock_direction('cancelled', 'pending'))
        self.assertIsNone(services.stock_direction('shipped', 'shipped'))

    def test_saldo_delta(self):
        total = Decimal('150000')
        self.assertEqual(services.saldo_delta('shipped', 'delivered', total), total)
        self.assertEqual(services.saldo_delta('delivered', 'returned', total), -total)
        self.assertEqual(services.saldo_delta('shipped', 'cancelled', total), 0)
        self.assertEqual(services.saldo_delta('delivered', 'delivered', total), 0)

    def test_compute_totals(self):
        items = [{'qty': 2, 'harga_satuan': Decimal('50000')}, {'qty': 1, 'harga_satuan': '25000.50'}]
        subtotal, total = services.compute_totals(items, Decimal('10000'), Decimal('5000'))
        self.assertEqual(subtotal, Decimal('125000.50'))
        self.assertEqual(total, Decimal('130000.50'))

    def test_normalize_adjustment_type(self):
        self.assertEqual(services.normalize_adjustment_type('Denda'), 'penalty')
        self.assertEqual(services.normalize_adjustment_type('selisih_ongkir'), 'shipping_diff')
        self.assertEqual(services.normalize_adjustment_type('commission'), 'commission')
        with self.assertRaises(InvalidOperation):
            services.normalize_adjustment_type('bonus')


class SaleStatusTransitionTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.store = TestDataFactory.create_store()
        self.variant_a = TestDataFactory.create_variant(stok=10)
        self.variant_b = TestDataFactory.create_variant(stok=1, warna='Putih')

    def _sale(self, items=None, status='pending'):
        items = items or [(self.variant_a, 3, Decimal('100000'))]
        return TestDataFactory.create_sale(user=self.user, store=self.store, items=items, status=status)

    def _stock(self, variant):
        variant.refresh_from_db()
        return variant.stok

    def _saldo(self):
        self.store.refresh_from_db()
        return self.store.saldo_dashboard

    def test_pending_sale_does_not_move_stock(self):
        sale = self._sale()
        self.assertEqual(sale.status, 'pending')
        self.assertEqual(sale.total, Decimal('300000'))
        self.assertEqual(self._stock(self.variant_a), 10)

    def test_shipping_takes_stock_out_once(self):
        sale = self._sale()
        services.change_sale_status(sale, 'shipped', user=self.user)
        self.assertEqual(self._stock(self.variant_a), 7)
        movement = StockMovement.objects.get(reference_type='sale_status_change', reference_id=sale.id)
        self.assertEqual(movement.movement_type, 'out')
        self.assertEqual(movement.notes, 'Pengurangan stok - status berubah ke Dikirim')

        services.change_sale_status(sale, 'delivered', user=self.user)
        self.assertEqual(self._stock(self.variant_a), 7)
        self.assertEqual(self._saldo(), Decimal('300000'))

    def test_delivered_to_returned_restores_stock_and_balance(self):
        sale = self._sale(status='delivered')
        self.assertEqual(self._stock(self.variant_a), 7)
        self.assertEqual(self._saldo(), Decimal('300000'))

        services.change_sale_status(sale, 'returned', user=self.user)
        self.assertEqual(self._stock(self.variant_a), 10)
        self.assertEqual(self._saldo(), Decimal('0'))
        movement = StockMovement.objects.filter(reference_id=sale.id, movement_type='in').get()
        self.assertEqual(movement.notes, 'Pengembalian stok - status berubah ke Retur')

    def test_shipped_to_cancelled_restores_stock_only(self):
        sale = self._sale(status='shipped')
        services.change_sale_status(sale, 'cancelled')
        self.assertEqual(self._stock(self.variant_a), 10)
        self.assertEqual(self._saldo(), Decimal('0'))

    def test_cancelled_back_to_shipped_takes_stock_again(self):
        sale = self._sale(status='shipped')
        services.change_sale_status(sale, 'cancelled')
        services.change_sale_status(sale, 'shipped')
        self.assertEqual(self._stock(self.variant_a), 7)

    def test_pending_to_cancelled_is_stock_neutral(self):
        sale = self._sale()
        services.change_sale_status(sale, 'cancelled')
        self.assertEqual(self._stock(self.variant_a), 10)
        self.assertFalse(StockMovement.objects.filter(reference_id=sale.id).exists())

    def test_insufficient_stock_aborts_whole_transition(self):
        sale = self._sale(items=[
            (self.variant_a, 2, Decimal('100000')),
            (self.variant_b, 5, Decimal('50000')),
        ])
        with self.assertRaises(InsufficientStock):
            services.change_sale_status(sale, 'delivered', user=self.user)

        self.assertEqual(self._stock(self.variant_a), 10)
        self.assertEqual(self._stock(self.variant_b), 1)
        self.assertEqual(self._saldo(), Decimal('0'))
        sale.refresh_from_db()
        self.assertEqual(sale.status, 'pending')
        self.assertFalse(StockMovement.objects.exists())

    def test_create_with_insufficient_stock_creates_nothing(self):
        with self.assertRaises(InsufficientStock):
            self._sale(items=[(self.variant_b, 2, Decimal('50000'))], status='shipped')
        self.assertFalse(Sale.objects.exists())
        self.assertEqual(self._stock(self.variant_b), 1)

    def test_invalid_status(self):
        sale = self._sale()
        with self.assertRaises(InvalidOperation):
            services.change_sale_status(sale, 'lost')


class SaleEditDeleteTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.store = TestDataFactory.create_store()
        self.variant = TestDataFactory.create_variant(stok=10)
        self.other = TestDataFactory.create_variant(stok=10, warna='Merah')

    def test_delete_shipped_sale_restores_stock(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 4, 1000)], status='shipped')
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 6)

        services.delete_sale(sale, user=self.user)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 10)
        self.assertFalse(Sale.objects.filter(pk=sale.pk).exists())

    def test_delete_delivered_sale_reverses_balance(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 5000)], status='delivered')
        services.delete_sale(sale)
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('0'))

    def test_delete_with_adjustments_refused(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 5000)], status='delivered')
        services.create_adjustment(sale, 'penalty', Decimal('500'))
        with self.assertRaises(SaleHasAdjustments):
            services.delete_sale(sale)
        self.assertTrue(Sale.objects.filter(pk=sale.pk).exists())

    def test_replace_items_on_shipped_sale(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 4, 1000)], status='shipped')
        services.update_sale(sale, {}, items=[{'product_variant': self.other, 'qty': 2, 'harga_satuan': 1500}])

        self.variant.refresh_from_db()
        self.other.refresh_from_db()
        self.assertEqual(self.variant.stok, 10)
        self.assertEqual(self.other.stok, 8)
        sale.refresh_from_db()
        self.assertEqual(sale.total, Decimal('3000'))

    def test_total_change_on_delivered_sale_moves_balance(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 10000)], status='delivered')
        services.update_sale(sale, {'ongkir': Decimal('2000')})
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('12000'))

    def test_moving_delivered_sale_to_another_store_moves_balance(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 10000)], status='delivered')
        other_store = TestDataFactory.create_store()
        services.update_sale(sale, {'store': other_store, 'ongkir': Decimal('2000')})
        self.store.refresh_from_db()
        other_store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('0'))
        self.assertEqual(other_store.saldo_dashboard, Decimal('12000'))

    def test_update_applies_status_last(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 10000)])
        sale = services.update_sale(sale, {'no_resi': 'JNE123', 'status': 'delivered'})
        self.assertEqual(sale.status, 'delivered')
        self.assertEqual(sale.no_resi, 'JNE123')
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 9)


class SaleValidationTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.store = TestDataFactory.create_store()
        self.variant = TestDataFactory.create_variant(stok=10)
        self.sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 100000)],
                                                status='delivered')

    def test_validate_with_adjustments_deducts_balance(self):
        sale, created = services.validate_sale_with_adjustments(self.sale, [
            {'type': 'denda', 'amount': '5000', 'notes': 'Telat kirim'},
            {'type': 'shipping_diff', 'amount': '2500'},
        ], user=self.user)

        self.assertEqual(len(created), 2)
        self.assertEqual(created[0].adjustment_type, 'penalty')
        self.assertIsNotNone(sale.validated_at)
        self.assertTrue(sale.needs_adjustment)
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('92500'))

    def test_validate_without_adjustments(self):
        sale, created = services.validate_sale_with_adjustments(self.sale, [])
        self.assertEqual(created, [])
        self.assertFalse(sale.needs_adjustment)
        self.assertFalse(services.get_pending_validation_sales().exists())

    def test_validate_twice_refused(self):
        services.validate_sale_with_adjustments(self.sale, [])
        with self.assertRaises(InvalidOperation):
            services.validate_sale_with_adjustments(self.sale, [])

    def test_validate_requires_delivered(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 1000)])
        with self.assertRaises(InvalidOperation):
            services.validate_sale_with_adjustments(sale, [])

    def test_non_positive_amount_rolls_back(self):
        with self.assertRaises(InvalidOperation):
            services.validate_sale_with_adjustments(self.sale, [
                {'type': 'penalty', 'amount': '1000'},
                {'type': 'penalty', 'amount': '0'},
            ])
        self.assertFalse(SalesAdjustment.objects.exists())
        self.sale.refresh_from_db()
        self.assertIsNone(self.sale.validated_at)

    def test_adjustment_recorded_before_validation_is_deducted_on_validation(self):
        services.create_adjustment(self.sale, 'commission', Decimal('3000'))
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('100000'))

        sale, created = services.validate_sale_with_adjustments(self.sale, [{'type': 'penalty', 'amount': '2000'}])
        self.assertEqual(len(created), 1)
        self.assertTrue(sale.needs_adjustment)
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('95000'))

    def test_adjustment_after_validation_deducts_balance(self):
        services.validate_sale_with_adjustments(self.sale, [])
        services.create_adjustment(self.sale, 'other', Decimal('4000'))
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('96000'))
        self.sale.refresh_from_db()
        self.assertTrue(self.sale.needs_adjustment)


class SaleAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.store = TestDataFactory.create_store()
        self.variant = TestDataFactory.create_variant(stok=5)

    def _payload(self, qty=2, status='pending'):
        return {
            'tanggal': timezone.localdate().isoformat(),
            'no_pesanan_platform': 'SHP-0001',
            'store': self.store.id,
            'ongkir': '10000.00',
            'status': status,
            'items': [{'product_variant': self.variant.id, 'qty': qty, 'harga_satuan': '75000.00'}],
        }

    def test_create_sale(self):
        response = self.client.post('/api/v1/sales/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['total']), Decimal('160000.00'))
        self.assertEqual(len(response.data['items']), 1)
        self.assertTrue(AuditLog.objects.filter(model_name='Sale', action='create').exists())

    def test_create_sale_without_items(self):
        payload = self._payload()
        payload['items'] = []
        response = self.client.post('/api/v1/sales/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_create_shipped_sale_with_insufficient_stock(self):
        response = self.client.post('/api/v1/sales/', self._payload(qty=9, status='shipped'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Sale.objects.exists())

    def test_change_status_endpoint(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 2, 1000)])
        response = self.client.post(f'/api/v1/sales/{sale.id}/status/', {'status': 'delivered'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status_label'], 'Selesai')
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 3)
        self.assertTrue(AuditLog.objects.filter(action='status_change', object_id=str(sale.id)).exists())

    def test_filter_by_status(self):
        TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 1000)])
        TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 1000)], status='shipped')
        response = self.client.get('/api/v1/sales/', {'status': 'shipped'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_delete_with_adjustments_conflict(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 1000)], status='delivered')
        services.create_adjustment(sale, 'other', Decimal('100'))
        response = self.client.delete(f'/api/v1/sales/{sale.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_validate_endpoint(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 1000)], status='delivered')
        response = self.client.get('/api/v1/sales/pending-validation/')
        self.assertEqual([s['id'] for s in response.data], [sale.id])

        response = self.client.post(f'/api/v1/sales/{sale.id}/validate/', {
            'adjustments': [{'type': 'komisi', 'amount': '100.00'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data['adjustments']), 1)
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('900.00'))

    def test_recorded_adjustment_cannot_be_changed(self):
        sale = TestDataFactory.create_sale(store=self.store, items=[(self.variant, 1, 100000)], status='delivered')
        response = self.client.post(f'/api/v1/sales/{sale.id}/validate/', {
            'adjustments': [{'type': 'denda', 'amount': '10000.00'}],
        }, format='json')
        adjustment_id = response.data['adjustments'][0]['id']

        response = self.client.patch(f'/api/v1/sales-adjustments/{adjustment_id}/', {'amount': '50000.00'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        response = self.client.delete(f'/api/v1/sales-adjustments/{adjustment_id}/')
        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)

        response = self.client.get(f'/api/v1/sales-adjustments/{adjustment_id}/')
        self.assertEqual(Decimal(response.data['amount']), Decimal('10000.00'))
        response = self.client.delete(f'/api/v1/sales/{sale.id}/')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.store.refresh_from_db()
        self.assertEqual(self.store.saldo_dashboard, Decimal('90000.00'))
