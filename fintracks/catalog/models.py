from django.db import models
from decimal import Decimal


class Product(models.Model):
    """Product master"""
    nama_produk = models.CharField(max_length=200, db_index=True)
    satuan = models.CharField(max_length=50, default='pcs')
    harga_beli = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    harga_jual_default = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    is_active = models.BooleanField(default=True, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nama_produk

    class Meta:
        db_table = 'products'
        ordering = ['nama_produk']


class ProductVariant(models.Model):
    """Sellable variant (colour/size) carrying the on-hand stock"""
    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='variants')
    warna = models.CharField(max_length=100, blank=True)
    size = models.CharField(max_length=50, blank=True)
    sku = models.CharField(max_length=100, unique=True, blank=True, null=True, db_index=True)
    stok = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        parts = [self.product.nama_produk]
        if self.warna:
            parts.append(self.warna)
        if self.size:
            parts.append(self.size)
        return ' - '.join(parts)

    class Meta:
        db_table = 'product_variants'
        ordering = ['product__nama_produk', 'warna', 'size']
