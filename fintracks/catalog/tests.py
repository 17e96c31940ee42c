"""
Tests for products and variants
"""
from django.test import TestCase
from rest_framework import status
from fintracks.core.test_utils import TestDataFactory, AuthenticatedAPIClient
from fintracks.catalog.models import ProductVariant


class ProductAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)

    def test_create_product(self):
        response = self.client.post('/api/v1/products/', {
            'nama_produk': 'Kaos Polos',
            'harga_beli': '35000.00',
            'harga_jual_default': '60000.00',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['total_stok'], 0)

    def test_negative_price_rejected(self):
        response = self.client.post('/api/v1/products/', {
            'nama_produk': 'Kaos Polos',
            'harga_beli': '-1',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_total_stok_sums_variants(self):
        product = TestDataFactory.create_product()
        TestDataFactory.create_variant(product=product, stok=4)
        TestDataFactory.create_variant(product=product, stok=6, warna='Putih')
        response = self.client.get(f'/api/v1/products/{product.id}/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_stok'], 10)
        self.assertEqual(len(response.data['variants']), 2)

    def test_search_by_sku(self):
        product = TestDataFactory.create_product(name='Celana')
        TestDataFactory.create_variant(product=product, sku='CLN-001')
        TestDataFactory.create_product(name='Topi')
        response = self.client.get('/api/v1/products/', {'search': 'CLN'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['nama_produk'], 'Celana')


class ProductVariantAPITests(TestCase):

    def setUp(self):
        self.user = TestDataFactory.create_user()
        self.client = AuthenticatedAPIClient()
        self.client.authenticate_user(self.user)
        self.product = TestDataFactory.create_product(name='Kemeja')

    def test_stok_cannot_be_set_directly(self):
        response = self.client.post('/api/v1/product-variants/', {
            'product': self.product.id,
            'warna': 'Biru',
            'size': 'L',
            'stok': 100,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(ProductVariant.objects.get(pk=response.data['id']).stok, 0)

    def test_out_of_stock_filter(self):
        TestDataFactory.create_variant(product=self.product, stok=0)
        TestDataFactory.create_variant(product=self.product, stok=3, warna='Merah')
        response = self.client.get('/api/v1/product-variants/', {'out_of_stock': 'true'})
        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]['stok'], 0)

    def test_variant_str(self):
        variant = TestDataFactory.create_variant(product=self.product, warna='Hitam', size='XL')
        self.assertEqual(str(variant), 'Kemeja - Hitam - XL')

    def test_delete_variant_used_in_sale(self):
        variant = TestDataFactory.create_variant(product=self.product)
        TestDataFactory.create_sale(items=[(variant, 1, 100)])
        response = self.client.delete(f'/api/v1/product-variants/{variant.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
