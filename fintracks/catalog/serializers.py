from rest_framework import serializers
from .models import Product, ProductVariant


class ProductVariantSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.nama_produk', read_only=True)

    class Meta:
        model = ProductVariant
        fields = ['id', 'product', 'product_name', 'warna', 'size', 'sku', 'stok', 'is_active', 'created_at', 'updated_at']
        # Stock only changes through the ledger (sales, purchases, adjustments)
        read_only_fields = ['stok', 'created_at', 'updated_at']


class ProductSerializer(serializers.ModelSerializer):
    variants = ProductVariantSerializer(many=True, read_only=True)
    total_stok = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ['id', 'nama_produk', 'satuan', 'harga_beli', 'harga_jual_default', 'is_active',
                  'variants', 'total_stok', 'created_at', 'updated_at']

    def get_total_stok(self, obj):
        return sum(v.stok for v in obj.variants.all())

    def validate(self, attrs):
        harga_beli = attrs.get('harga_beli', getattr(self.instance, 'harga_beli', 0))
        harga_jual = attrs.get('harga_jual_default', getattr(self.instance, 'harga_jual_default', 0))
        if harga_beli < 0 or harga_jual < 0:
            raise serializers.ValidationError("Prices cannot be negative")
        return attrs
