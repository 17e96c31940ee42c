from rest_framework import serializers
from .models import Sale, SaleItem, SalesAdjustment


class SaleItemSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='product_variant.__str__', read_only=True)
    sku = serializers.CharField(source='product_variant.sku', read_only=True)

    class Meta:
        model = SaleItem
        fields = ['id', 'product_variant', 'variant_name', 'sku', 'qty', 'harga_satuan', 'subtotal']
        read_only_fields = ['subtotal']

    def validate_qty(self, value):
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than zero")
        return value

    def validate_harga_satuan(self, value):
        if value < 0:
            raise serializers.ValidationError("Price cannot be negative")
        return value


class SalesAdjustmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = SalesAdjustment
        fields = ['id', 'sale', 'adjustment_type', 'amount', 'notes', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero")
        return value


class SaleSerializer(serializers.ModelSerializer):
    """Sale with nested items; totals are computed by the service layer"""
    items = SaleItemSerializer(many=True, required=False)
    adjustments = SalesAdjustmentSerializer(many=True, read_only=True)
    store_name = serializers.CharField(source='store.nama_toko', read_only=True)
    platform_name = serializers.CharField(source='store.platform.nama_platform', read_only=True)
    status_label = serializers.CharField(source='get_status_display', read_only=True)

    class Meta:
        model = Sale
        fields = ['id', 'tanggal', 'no_pesanan_platform', 'store', 'store_name', 'platform_name',
                  'expedition', 'customer_name', 'customer_phone', 'customer_address',
                  'subtotal', 'ongkir', 'diskon', 'total', 'no_resi', 'status', 'status_label',
                  'notes', 'validated_at', 'needs_adjustment', 'adjustment_notes',
                  'items', 'adjustments', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['subtotal', 'total', 'validated_at', 'needs_adjustment',
                            'created_by', 'created_at', 'updated_at']

    def validate(self, attrs):
        if self.instance is None and not attrs.get('items'):
            raise serializers.ValidationError({'items': 'At least one item is required'})
        for field in ('ongkir', 'diskon'):
            if attrs.get(field) is not None and attrs[field] < 0:
                raise serializers.ValidationError({field: 'Cannot be negative'})
        return attrs


class SaleStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Sale.STATUS_CHOICES)


class AdjustmentInputSerializer(serializers.Serializer):
    type = serializers.CharField()
    amount = serializers.DecimalField(max_digits=15, decimal_places=2)
    notes = serializers.CharField(required=False, allow_blank=True, default='')


class SaleValidationSerializer(serializers.Serializer):
    adjustments = AdjustmentInputSerializer(many=True, required=False, default=list)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
