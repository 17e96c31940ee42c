"""
Tests for suppliers and expeditions
"""
from django.test import TestCase
from rest_framework import status
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.parties.models import Expedition


class SupplierAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_and_search_supplier(self):
        response = self.client.post('/api/v1/suppliers/', {'nama_supplier': 'CV Sumber Rejeki'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        TestDataFactory.create_supplier(name='PT Lain')
        response = self.client.get('/api/v1/suppliers/', {'search': 'rejeki'})
        self.assertEqual(len(response.data), 1)

    def test_delete_supplier_with_purchases(self):
        supplier = TestDataFactory.create_supplier()
        TestDataFactory.create_purchase(supplier=supplier)
        response = self.client.delete(f'/api/v1/suppliers/{supplier.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)


class ExpeditionAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_crud(self):
        response = self.client.post('/api/v1/expeditions/', {'nama_ekspedisi': 'JNE', 'kode': 'JNE'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        pk = response.data['id']
        response = self.client.patch(f'/api/v1/expeditions/{pk}/', {'nama_ekspedisi': 'JNE Express'}, format='json')
        self.assertEqual(response.data['nama_ekspedisi'], 'JNE Express')
        response = self.client.delete(f'/api/v1/expeditions/{pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Expedition.objects.filter(pk=pk).exists())
