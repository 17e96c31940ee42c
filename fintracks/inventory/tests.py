"""
Tests for the stock ledger: stock changes, adjustments, summaries and low-stock lists
"""
from datetime import datetime, timedelta
from django.db import transaction
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from fintracks.catalog.models import ProductVariant
from fintracks.core.exceptions import InsufficientStock, InvalidOperation
from fintracks.core.models import AuditLog
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.inventory import services
from fintracks.inventory.models import StockMovement


class ApplyStockChangeTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.variant = TestDataFactory.create_variant(stok=5)

    def test_stock_in(self):
        with transaction.atomic():
            movement = services.apply_stock_change(self.variant.id, 3, 'in', user=self.user)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 8)
        self.assertEqual(movement.quantity, 3)
        self.assertEqual(movement.created_by, self.user)

    def test_stock_out(self):
        with transaction.atomic():
            services.apply_stock_change(self.variant.id, 5, 'out', reference_type='sale', reference_id=7)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 0)
        movement = StockMovement.objects.get(product_variant=self.variant)
        self.assertEqual((movement.movement_type, movement.reference_type, movement.reference_id), ('out', 'sale', 7))

    def test_insufficient_stock_leaves_stock_unchanged(self):
        with self.assertRaises(InsufficientStock) as ctx:
            with transaction.atomic():
                services.apply_stock_change(self.variant.id, 6, 'out')
        self.assertEqual(ctx.exception.available, 5)
        self.assertEqual(ctx.exception.required, 6)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 5)
        self.assertFalse(StockMovement.objects.exists())

    def test_unchecked_out_is_floored_at_zero(self):
        with transaction.atomic():
            movement = services.apply_stock_change(self.variant.id, 8, 'out', check_available=False)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 0)
        self.assertEqual(movement.quantity, 5)

    def test_unchecked_out_with_nothing_on_hand(self):
        self.variant.stok = 0
        self.variant.save()
        with transaction.atomic():
            movement = services.apply_stock_change(self.variant.id, 2, 'out', check_available=False)
        self.assertIsNone(movement)
        self.assertFalse(StockMovement.objects.exists())

    def test_invalid_arguments(self):
        with self.assertRaises(InvalidOperation):
            services.apply_stock_change(self.variant.id, 0, 'in')
        with self.assertRaises(InvalidOperation):
            services.apply_stock_change(self.variant.id, 1, 'adjustment')


class AdjustStockTests(TestCase):

    def setUp(self):
        self.variant = TestDataFactory.create_variant(stok=12)

    def test_adjust_sets_absolute_stock(self):
        movement = services.adjust_stock(self.variant.id, 4)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 4)
        self.assertEqual(movement.movement_type, 'adjustment')
        self.assertEqual(movement.quantity, 4)
        self.assertEqual(movement.notes, 'Penyesuaian stok dari 12 ke 4')

    def test_negative_stock_rejected(self):
        with self.assertRaises(InvalidOperation):
            services.adjust_stock(self.variant.id, -1)


class StockSummaryTests(TestCase):

    def setUp(self):
        self.variant = TestDataFactory.create_variant(stok=0)
        services.create_movement(self.variant.id, 'in', 10)
        services.create_movement(self.variant.id, 'out', 3)
        services.create_movement(self.variant.id, 'adjustment', 6)

    def test_day_summary(self):
        summary = services.get_stock_summary('day')
        self.assertEqual(summary['total_in'], 10)
        self.assertEqual(summary['total_out'], 3)
        self.assertEqual(summary['total_adjustments'], 6)
        self.assertEqual(summary['transaction_count'], 3)
        self.assertIsNotNone(summary['last_movement'])

    def test_old_movements_excluded(self):
        StockMovement.objects.update(created_at=timezone.now() - timedelta(days=40))
        summary = services.get_stock_summary('month')
        self.assertEqual(summary['transaction_count'], 0)
        self.assertEqual(summary['total_in'], 0)

    def test_unknown_period(self):
        with self.assertRaises(InvalidOperation):
            services.get_stock_summary('year')

    def test_period_start(self):
        now = timezone.make_aware(datetime(2024, 3, 15, 14, 30))
        self.assertEqual(services.period_start('day', now).day, 15)
        self.assertEqual(services.period_start('week', now).day, 8)
        self.assertEqual(services.period_start('month', now).day, 1)


class LowStockTests(TestCase):

    def test_status_levels(self):
        self.assertEqual(services.low_stock_status(0), 'critical')
        self.assertEqual(services.low_stock_status(-2), 'critical')
        self.assertEqual(services.low_stock_status(2), 'low')
        self.assertEqual(services.low_stock_status(4), 'warning')

    def test_low_stock_variants(self):
        empty = TestDataFactory.create_variant(stok=0)
        TestDataFactory.create_variant(stok=3)
        TestDataFactory.create_variant(stok=50)
        inactive = TestDataFactory.create_variant(stok=1)
        inactive.is_active = False
        inactive.save()

        rows = services.get_low_stock_variants(threshold=5)
        self.assertEqual([r['stok'] for r in rows], [0, 3])
        self.assertEqual(rows[0]['id'], empty.id)
        self.assertEqual(rows[0]['status'], 'critical')

    def test_low_stock_list_is_cached_until_catalog_changes(self):
        variant = TestDataFactory.create_variant(stok=3)
        self.assertEqual(len(services.get_low_stock_variants(threshold=5)), 1)

        ProductVariant.objects.filter(pk=variant.pk).update(stok=50)
        self.assertEqual(len(services.get_low_stock_variants(threshold=5)), 1)

        services.adjust_stock(variant.id, 50)
        self.assertEqual(services.get_low_stock_variants(threshold=5), [])


class StockMovementAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.variant = TestDataFactory.create_variant(stok=5)

    def test_record_only_movement(self):
        response = self.client.post('/api/v1/stock-movements/', {
            'product_variant': self.variant.id,
            'movement_type': 'in',
            'quantity': 4,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 5)
        movement = StockMovement.objects.get(product_variant=self.variant)
        self.assertEqual(movement.quantity, 4)
        self.assertEqual(movement.reference_type, 'manual')
        self.assertEqual(movement.created_by, self.user)

    def test_movement_applied_to_stock(self):
        response = self.client.post('/api/v1/stock-movements/', {
            'product_variant': self.variant.id,
            'movement_type': 'out',
            'quantity': 2,
            'apply_to_stock': True,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 3)

    def test_applied_movement_insufficient_stock(self):
        response = self.client.post('/api/v1/stock-movements/', {
            'product_variant': self.variant.id,
            'movement_type': 'out',
            'quantity': 9,
            'apply_to_stock': True,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Stok tidak mencukupi', response.data['error'])

    def test_bulk_create(self):
        response = self.client.post('/api/v1/stock-movements/bulk/', [
            {'product_variant': self.variant.id, 'movement_type': 'in', 'quantity': 1},
            {'product_variant': self.variant.id, 'movement_type': 'out', 'quantity': 2},
        ], format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['created'], 2)

    def test_bulk_create_requires_list(self):
        response = self.client.post('/api/v1/stock-movements/bulk/', {'movement_type': 'in'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_adjust_endpoint_writes_audit_log(self):
        response = self.client.post('/api/v1/stock/adjust/', {
            'product_variant': self.variant.id,
            'new_stock': 20,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.variant.refresh_from_db()
        self.assertEqual(self.variant.stok, 20)
        log = AuditLog.objects.get(action='stock_adjust')
        self.assertEqual(log.changes['stok'], {'old': 5, 'new': 20})

    def test_history_and_filters(self):
        other = TestDataFactory.create_variant()
        services.create_movement(self.variant.id, 'in', 1)
        services.create_movement(other.id, 'in', 1)
        response = self.client.get('/api/v1/stock-movements/history/', {'product_variant': self.variant.id})
        self.assertEqual(len(response.data), 1)
        response = self.client.get('/api/v1/stock-movements/', {'product_variant': other.id})
        self.assertEqual(len(response.data), 1)

    def test_summary_bad_period(self):
        response = self.client.get('/api/v1/stock-movements/summary/', {'period': 'decade'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_integer_variant_param_rejected(self):
        response = self.client.get('/api/v1/stock-movements/history/', {'product_variant': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.get('/api/v1/stock-movements/summary/', {'product_variant': 'abc'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_low_stock_uses_user_threshold(self):
        TestDataFactory.create_user_settings(self.user, low_stock_threshold=5)
        response = self.client.get('/api/v1/stock/low/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in response.data], [self.variant.id])
        response = self.client.get('/api/v1/stock/low/', {'threshold': 4})
        self.assertEqual(response.data, [])
