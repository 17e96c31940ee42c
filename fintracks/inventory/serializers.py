from rest_framework import serializers
from .models import StockMovement


class StockMovementSerializer(serializers.ModelSerializer):
    variant_name = serializers.CharField(source='product_variant.__str__', read_only=True)
    sku = serializers.CharField(source='product_variant.sku', read_only=True)
    created_by_username = serializers.CharField(source='created_by.username', read_only=True, default=None)

    class Meta:
        model = StockMovement
        fields = ['id', 'product_variant', 'variant_name', 'sku', 'movement_type', 'quantity',
                  'reference_type', 'reference_id', 'notes', 'created_by', 'created_by_username', 'created_at']
        read_only_fields = ['created_by', 'created_at']

    def validate_quantity(self, value):
        if value < 0:
            raise serializers.ValidationError("Quantity cannot be negative")
        return value


class StockAdjustSerializer(serializers.Serializer):
    product_variant = serializers.IntegerField()
    new_stock = serializers.IntegerField(min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True, default='')
