from rest_framework import serializers
from .models import Platform, Store


class PlatformSerializer(serializers.ModelSerializer):
    class Meta:
        model = Platform
        fields = ['id', 'nama_platform', 'metode_pencairan', 'komisi_default_persen', 'is_active', 'created_at', 'updated_at']

    def validate_komisi_default_persen(self, value):
        if value < 0 or value > 100:
            raise serializers.ValidationError("Commission must be between 0 and 100")
        return value


class StoreSerializer(serializers.ModelSerializer):
    platform_name = serializers.CharField(source='platform.nama_platform', read_only=True)

    class Meta:
        model = Store
        fields = ['id', 'platform', 'platform_name', 'nama_toko', 'nama_marketing', 'email', 'no_hp',
                  'link_toko', 'saldo_dashboard', 'is_active', 'created_at', 'updated_at']
        # Balance only moves through sale status changes and settlements
        read_only_fields = ['saldo_dashboard', 'created_at', 'updated_at']
