from django.contrib import admin
from .models import Product, ProductVariant


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    readonly_fields = ['stok']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['nama_produk', 'satuan', 'harga_beli', 'harga_jual_default', 'is_active']
    list_filter = ['is_active']
    search_fields = ['nama_produk']
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ['sku', 'product', 'warna', 'size', 'stok', 'is_active']
    list_filter = ['is_active']
    search_fields = ['sku', 'product__nama_produk']
    readonly_fields = ['stok']
