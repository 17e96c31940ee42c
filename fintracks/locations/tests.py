"""
Tests for platforms and stores
"""
from django.test import TestCase
from rest_framework import status
from decimal import Decimal
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.locations.models import Platform, Store


class PlatformAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_platform(self):
        response = self.client.post('/api/v1/platforms/', {
            'nama_platform': 'Shopee',
            'komisi_default_persen': '5.50',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(Platform.objects.filter(nama_platform='Shopee').exists())

    def test_commission_out_of_range(self):
        response = self.client.post('/api/v1/platforms/', {
            'nama_platform': 'Shopee',
            'komisi_default_persen': '150',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_platform_name(self):
        TestDataFactory.create_platform(name='Tokopedia')
        response = self.client.post('/api/v1/platforms/', {'nama_platform': 'Tokopedia'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_platform_in_use(self):
        store = TestDataFactory.create_store()
        response = self.client.delete(f'/api/v1/platforms/{store.platform_id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Platform.objects.filter(pk=store.platform_id).exists())

    def test_requires_authentication(self):
        self.client.logout()
        response = self.client.get('/api/v1/platforms/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class StoreAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.platform = TestDataFactory.create_platform()

    def test_saldo_is_read_only(self):
        response = self.client.post('/api/v1/stores/', {
            'platform': self.platform.id,
            'nama_toko': 'Toko Baru',
            'saldo_dashboard': '999999.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        store = Store.objects.get(pk=response.data['id'])
        self.assertEqual(store.saldo_dashboard, Decimal('0.00'))

    def test_filter_by_platform(self):
        TestDataFactory.create_store(platform=self.platform)
        TestDataFactory.create_store()
        response = self.client.get('/api/v1/stores/', {'platform_id': self.platform.id})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['platform_name'], self.platform.nama_platform)

    def test_update_store(self):
        store = TestDataFactory.create_store(platform=self.platform)
        response = self.client.patch(f'/api/v1/stores/{store.id}/', {'nama_marketing': 'Budi'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        store.refresh_from_db()
        self.assertEqual(store.nama_marketing, 'Budi')
