"""
Test suite for the purchasing module
Tests: totals, stock on receive/reverse, returns to supplier, deletion and the API
"""
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from decimal import Decimal
from fintracks.core.exceptions import InvalidOperation
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.inventory.models import StockMovement
from fintracks.purchasing import services
from fintracks.purchasing.models import Purchase


class PurchaseModelTests(TestCase):

    def test_purchase_str(self):
        purchase = TestDataFactory.create_purchase()
        self.assertEqual(str(purchase), f"Purchase-{purchase.id}")
        purchase.no_invoice = 'INV-001'
        self.assertEqual(str(purchase), 'INV-001')

    def test_totals(self):
        variant = TestDataFactory.create_variant(stok=0)
        purchase = TestDataFactory.create_purchase(items=[
            (variant, 10, Decimal('50000.00')),
            (variant, 5, Decimal('20000.00')),
        ])
        self.assertEqual(purchase.subtotal, Decimal('600000.00'))
        self.assertEqual(purchase.total, purchase.subtotal)
        self.assertEqual(purchase.items.first().subtotal, Decimal('500000.00'))


class PurchaseStockTests(TestCase):
    """Stock follows the received status"""

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.supplier = TestDataFactory.create_supplier()
        self.variant = TestDataFactory.create_variant(stok=2)

    def _stock(self):
        self.variant.refresh_from_db()
        return self.variant.stok

    def _purchase(self, qty=10, status='pending'):
        return TestDataFactory.create_purchase(user=self.user, supplier=self.supplier, status=status,
                                               items=[(self.variant, qty, Decimal('40000.00'))])

    def test_pending_purchase_does_not_add_stock(self):
        self._purchase()
        self.assertEqual(self._stock(), 2)

    def test_received_purchase_adds_stock(self):
        purchase = self._purchase(status='received')
        self.assertEqual(self._stock(), 12)
        movement = StockMovement.objects.get(reference_type='purchase', reference_id=purchase.id)
        self.assertEqual(movement.movement_type, 'in')
        self.assertEqual(movement.quantity, 10)

    def test_receiving_later_adds_stock(self):
        purchase = self._purchase()
        services.update_purchase(purchase, {'status': 'received'}, user=self.user)
        self.assertEqual(self._stock(), 12)

    def test_unreceiving_reverses_stock(self):
        purchase = self._purchase(status='received')
        services.update_purchase(purchase, {'status': 'cancelled'})
        self.assertEqual(self._stock(), 2)

    def test_reversal_is_floored_at_zero(self):
        purchase = self._purchase(status='received')
        self.variant.stok = 3
        self.variant.save()
        services.update_purchase(purchase, {'status': 'ordered'})
        self.assertEqual(self._stock(), 0)
        reversal = StockMovement.objects.filter(reference_id=purchase.id, movement_type='out').get()
        self.assertEqual(reversal.quantity, 3)

    def test_replacing_items_on_received_purchase(self):
        purchase = self._purchase(status='received')
        services.update_purchase(purchase, {}, items=[
            {'product_variant': self.variant, 'qty': 4, 'harga_beli_satuan': Decimal('40000.00')}
        ])
        self.assertEqual(self._stock(), 6)
        purchase.refresh_from_db()
        self.assertEqual(purchase.total, Decimal('160000.00'))

    def test_delete_received_purchase(self):
        purchase = self._purchase(status='received')
        services.delete_purchase(purchase)
        self.assertEqual(self._stock(), 2)
        self.assertFalse(Purchase.objects.filter(pk=purchase.pk).exists())
        self.assertFalse(StockMovement.objects.filter(reference_id=purchase.id).exists())

    def test_create_without_items(self):
        with self.assertRaises(InvalidOperation):
            services.create_purchase({'tanggal': timezone.localdate(), 'supplier': self.supplier}, [])


class PurchaseReturnTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.variant = TestDataFactory.create_variant(stok=0)
        self.purchase = TestDataFactory.create_purchase(
            user=self.user, status='received', payment_status='paid',
            items=[(self.variant, 10, Decimal('30000.00'))]
        )

    def _return(self, qty):
        return services.create_purchase_return(
            self.purchase,
            [{'product_variant': self.variant, 'qty': qty, 'harga_beli_satuan': Decimal('30000.00')}],
            user=self.user,
        )

    def test_return_takes_stock_out(self):
        purchase_return = self._return(4)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 6)
        self.assertTrue(purchase_return.is_return)
        self.assertEqual(purchase_return.status, 'cancelled')
        self.assertEqual(purchase_return.original_purchase, self.purchase)
        self.assertEqual(purchase_return.total, Decimal('120000.00'))
        self.assertTrue(purchase_return.notes.startswith('Return dari pembelian'))
        self.assertTrue(StockMovement.objects.filter(reference_type='return',
                                                     reference_id=purchase_return.id).exists())

    def test_returns_limited_to_purchased_quantity(self):
        self._return(7)
        with self.assertRaises(InvalidOperation):
            self._return(4)

    def test_return_of_unreceived_purchase(self):
        pending = TestDataFactory.create_purchase(items=[(self.variant, 1, Decimal('1000.00'))])
        with self.assertRaises(InvalidOperation):
            services.create_purchase_return(
                pending, [{'product_variant': self.variant, 'qty': 1, 'harga_beli_satuan': Decimal('1000.00')}]
            )

    def test_purchase_with_returns_cannot_be_deleted(self):
        self._return(1)
        with self.assertRaises(InvalidOperation):
            services.delete_purchase(self.purchase)

    def test_deleting_return_restores_stock(self):
        purchase_return = self._return(4)
        services.delete_purchase(purchase_return)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 10)

    def test_return_cannot_be_edited(self):
        purchase_return = self._return(1)
        with self.assertRaises(InvalidOperation):
            services.update_purchase(purchase_return, {'notes': 'x'})


class PurchaseAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.supplier = TestDataFactory.create_supplier()
        self.variant = TestDataFactory.create_variant(stok=0)

    def _payload(self, **extra):
        data = {
            'tanggal': timezone.localdate().isoformat(),
            'supplier': self.supplier.id,
            'status': 'received',
            'payment_status': 'paid',
            'items': [{'product_variant': self.variant.id, 'qty': 5, 'harga_beli_satuan': '20000.00'}],
        }
        data.update(extra)
        return data

    def test_create_purchase(self):
        response = self.client.post('/api/v1/purchases/', self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Decimal(response.data['total']), Decimal('100000.00'))
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 5)

    def test_returned_payment_status_rejected(self):
        response = self.client.post('/api/v1/purchases/', self._payload(payment_status='returned'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_return_endpoint(self):
        response = self.client.post('/api/v1/purchases/', self._payload(), format='json')
        purchase_id = response.data['id']
        response = self.client.post(f'/api/v1/purchases/{purchase_id}/return/', {
            'items': [{'product_variant': self.variant.id, 'qty': 2, 'harga_beli_satuan': '20000.00'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['payment_status'], 'returned')
        self.assertEqual(response.data['original_purchase'], purchase_id)

        response = self.client.get('/api/v1/purchases/', {'payment_status': 'returned'})
        self.assertEqual(len(response.data), 1)

    def test_return_over_quantity(self):
        response = self.client.post('/api/v1/purchases/', self._payload(), format='json')
        response = self.client.post(f"/api/v1/purchases/{response.data['id']}/return/", {
            'items': [{'product_variant': self.variant.id, 'qty': 6, 'harga_beli_satuan': '20000.00'}],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_purchase(self):
        purchase = TestDataFactory.create_purchase(supplier=self.supplier)
        response = self.client.delete(f'/api/v1/purchases/{purchase.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Purchase.objects.filter(id=purchase.id).exists())
