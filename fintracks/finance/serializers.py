from rest_framework import serializers
from .models import Category, Bank, Expense, Income, Settlement, Asset


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ['id', 'nama_kategori', 'tipe_kategori', 'is_active', 'created_at', 'updated_at']


class BankSerializer(serializers.ModelSerializer):
    class Meta:
        model = Bank
        fields = ['id', 'nama_bank', 'nama_pemilik', 'no_rekening', 'saldo_awal', 'saldo_akhir',
                  'is_active', 'created_at', 'updated_at']
        read_only_fields = ['saldo_akhir', 'created_at', 'updated_at']

    def create(self, validated_data):
        validated_data['saldo_akhir'] = validated_data.get('saldo_awal', 0)
        return super().create(validated_data)


class ExpenseSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.nama_kategori', read_only=True, default=None)
    bank_name = serializers.CharField(source='bank.nama_bank', read_only=True, default=None)

    class Meta:
        model = Expense
        fields = ['id', 'tanggal', 'category', 'category_name', 'jumlah', 'bank', 'bank_name',
                  'keterangan', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['created_by', 'created_at', 'updated_at']

    def validate_jumlah(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero")
        return value

    def validate_category(self, value):
        if value is not None and value.tipe_kategori != 'expense':
            raise serializers.ValidationError("Category must be an expense category")
        return value


class IncomeSerializer(serializers.ModelSerializer):
    category_name = serializers.CharField(source='category.nama_kategori', read_only=True, default=None)
    bank_name = serializers.CharField(source='bank.nama_bank', read_only=True, default=None)

    class Meta:
        model = Income
        fields = ['id', 'tanggal', 'category', 'category_name', 'jumlah', 'bank', 'bank_name',
                  'keterangan', 'settlement', 'created_by', 'created_at', 'updated_at']
        read_only_fields = ['settlement', 'created_by', 'created_at', 'updated_at']

    def validate_jumlah(self, value):
        if value <= 0:
            raise serializers.ValidationError("Amount must be greater than zero")
        return value

    def validate_category(self, value):
        if value is not None and value.tipe_kategori != 'income':
            raise serializers.ValidationError("Category must be an income category")
        return value


class SettlementSerializer(serializers.ModelSerializer):
    store_name = serializers.CharField(source='store.nama_toko', read_only=True)
    bank_name = serializers.CharField(source='bank.nama_bank', read_only=True)
    jumlah_bersih = serializers.DecimalField(max_digits=15, decimal_places=2, read_only=True)

    class Meta:
        model = Settlement
        fields = ['id', 'tanggal', 'store', 'store_name', 'bank', 'bank_name', 'jumlah_dicairkan',
                  'biaya_admin', 'jumlah_bersih', 'keterangan', 'created_by', 'created_at']
        read_only_fields = ['created_by', 'created_at']
        extra_kwargs = {'tanggal': {'required': False}}


class AssetSerializer(serializers.ModelSerializer):
    class Meta:
        model = Asset
        fields = ['id', 'kode_asset', 'nama_asset', 'kategori', 'harga_perolehan', 'tanggal_perolehan',
                  'umur_ekonomis_bulan', 'penyusutan_per_bulan', 'akumulasi_penyusutan', 'nilai_buku',
                  'keterangan', 'created_at', 'updated_at']
        read_only_fields = ['penyusutan_per_bulan', 'akumulasi_penyusutan', 'nilai_buku', 'created_at', 'updated_at']

    def validate_harga_perolehan(self, value):
        if value <= 0:
            raise serializers.ValidationError("Acquisition cost must be greater than zero")
        return value

    def validate_umur_ekonomis_bulan(self, value):
        if value <= 0:
            raise serializers.ValidationError("Useful life must be at least one month")
        return value
