"""
Tests for notifications and low-stock alerts
"""
from django.db import transaction
from django.test import TestCase
from rest_framework import status
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.inventory import services as inventory_services
from fintracks.notifications.models import Notification


class LowStockAlertTests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        TestDataFactory.create_user_settings(self.user, low_stock_threshold=5)
        self.muted = TestDataFactory.create_user()
        TestDataFactory.create_user_settings(self.muted, low_stock_alerts=False)
        self.variant = TestDataFactory.create_variant(stok=10)

    def _sell(self, qty):
        with transaction.atomic():
            inventory_services.apply_stock_change(self.variant.id, qty, 'out')

    def test_alert_when_stock_drops_to_threshold(self):
        self._sell(5)
        notification = Notification.objects.get(user=self.user)
        self.assertEqual(notification.type, 'warning')
        self.assertEqual(notification.title, 'Stok Menipis')
        self.assertEqual(notification.product_variant, self.variant)
        self.assertFalse(Notification.objects.filter(user=self.muted).exists())

    def test_no_alert_above_threshold(self):
        self._sell(4)
        self.assertFalse(Notification.objects.exists())

    def test_no_duplicate_while_unread(self):
        self._sell(5)
        self._sell(2)
        self.assertEqual(Notification.objects.filter(user=self.user).count(), 1)

    def test_new_alert_after_read(self):
        self._sell(5)
        Notification.objects.update(read=True)
        self._sell(5)
        latest = Notification.objects.filter(user=self.user).first()
        self.assertEqual(latest.title, 'Stok Habis')
        self.assertEqual(Notification.objects.filter(user=self.user).count(), 2)

    def test_adjustment_triggers_alert(self):
        inventory_services.adjust_stock(self.variant.id, 1)
        self.assertTrue(Notification.objects.filter(user=self.user, product_variant=self.variant).exists())

    def test_new_variant_does_not_alert(self):
        TestDataFactory.create_variant(stok=0)
        self.assertFalse(Notification.objects.exists())


class NotificationAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.other = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def _notify(self, user, title='Info', read=False):
        return Notification.objects.create(user=user, title=title, message='Pesan', read=read)

    def test_list_is_scoped_to_user(self):
        self._notify(self.user)
        self._notify(self.other)
        response = self.client.get('/api/v1/notifications/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_list_limited_to_latest_fifty(self):
        for i in range(55):
            self._notify(self.user, title=f'N{i}')
        response = self.client.get('/api/v1/notifications/')
        self.assertEqual(len(response.data), 50)
        self.assertEqual(response.data[0]['title'], 'N54')

    def test_create_notification(self):
        response = self.client.post('/api/v1/notifications/', {
            'title': 'Backup selesai', 'message': 'Data tersimpan', 'type': 'success',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Notification.objects.filter(user=self.user, title='Backup selesai').exists())

    def test_unread_count_and_mark_read(self):
        first = self._notify(self.user)
        self._notify(self.user)
        self._notify(self.user, read=True)
        response = self.client.get('/api/v1/notifications/unread-count/')
        self.assertEqual(response.data['unread_count'], 2)

        response = self.client.post(f'/api/v1/notifications/{first.id}/read/')
        self.assertTrue(response.data['read'])
        response = self.client.get('/api/v1/notifications/unread-count/')
        self.assertEqual(response.data['unread_count'], 1)

    def test_mark_all_read(self):
        self._notify(self.user)
        self._notify(self.user)
        other = self._notify(self.other)
        response = self.client.post('/api/v1/notifications/mark-all-read/')
        self.assertEqual(response.data['updated'], 2)
        other.refresh_from_db()
        self.assertFalse(other.read)

    def test_cannot_touch_other_users_notification(self):
        other = self._notify(self.other)
        response = self.client.delete(f'/api/v1/notifications/{other.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
