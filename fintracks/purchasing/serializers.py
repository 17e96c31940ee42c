from rest_framework import serializers
from .models import Purchase, PurchaseItem


class PurchaseItemSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='product_variant.__str__', read_only=True)

    class Meta:
        model = PurchaseItem
        fields = ['id', 'product_variant', 'variant_name', 'qty', 'harga_beli_satuan', 'subtotal']
        read_only_fields = ['subtotal']

    def validate_qty(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than zero")
        return value

    def validate_harga_beli_satuan(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value


class PurchaseSerializer(serializers.ModelSerializer):
    items = PurchaseItemSerializer(many=True, required=False)
    supplier_name = serializers.CharField(source='supplier.nama_supplier', read_only=True)

    class Meta:
        model = Purchase
        fields = ['id', 'tanggal', 'supplier', 'supplier_name', 'no_invoice', 'subtotal', 'total',
                  'status', 'payment_status', 'payment_method', 'original_purchase', 'notes',
                  'items', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['subtotal', 'total', 'original_purchase', 'created_by', 'created_at', 'updated_at']

    def validate_payment_status(self, value):
        if value == 'returned':
            raise serializers.ValidationError("Use the return endpoint to record a purchase return")
        return value

    def validate(self, attrs):
        if self.instance is None and not attrs.get('items'):
            raise serializers.ValidationError({'items': 'At least one item is required'})
        return attrs


class PurchaseReturnSerializer(serializers.Serializer):
    tanggal = serializers.DateField(required=False)
    no_invoice = serializers.CharField(required=False, allow_blank=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    items = PurchaseItemSerializer(many=True)

    def validate_items(self, value):
        if not value:
            raise serializers.ValidationError("At least one item is required")
        return value
