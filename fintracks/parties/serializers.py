from rest_framework import serializers
from .models import Supplier, Expedition


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = ['id', 'nama_supplier', 'kontak', 'email', 'alamat', 'is_active', 'created_at', 'updated_at']


class ExpeditionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Expedition
        fields = ['id', 'nama_ekspedisi', 'kode', 'is_active', 'created_at', 'updated_at']
