from django.contrib import admin
from .models import Category, Bank, Expense, Income, Settlement, Asset


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['nama_kategori', 'tipe_kategori', 'is_active']
    list_filter = ['tipe_kategori', 'is_active']
    search_fields = ['nama_kategori']


@admin.register(Bank)
class BankAdmin(admin.ModelAdmin):
    list_display = ['nama_bank', 'nama_pemilik', 'no_rekening', 'saldo_awal', 'saldo_akhir', 'is_active']
    list_filter = ['is_active']
    search_fields = ['nama_bank', 'nama_pemilik', 'no_rekening']
    readonly_fields = ['saldo_akhir']


@admin.register(Expense)
class ExpenseAdmin(admin.ModelAdmin):
    list_display = ['tanggal', 'category', 'jumlah', 'bank']
    list_filter = ['category', 'tanggal']
    search_fields = ['keterangan']


@admin.register(Income)
class IncomeAdmin(admin.ModelAdmin):
    list_display = ['tanggal', 'category', 'jumlah', 'bank', 'settlement']
    list_filter = ['category', 'tanggal']
    search_fields = ['keterangan']


@admin.register(Settlement)
class SettlementAdmin(admin.ModelAdmin):
    list_display = ['tanggal', 'store', 'bank', 'jumlah_dicairkan', 'biaya_admin']
    list_filter = ['store', 'bank', 'tanggal']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Asset)
class AssetAdmin(admin.ModelAdmin):
    list_display = ['kode_asset', 'nama_asset', 'harga_perolehan', 'akumulasi_penyusutan', 'nilai_buku']
    search_fields = ['kode_asset', 'nama_asset']
    readonly_fields = ['penyusutan_per_bulan', 'akumulasi_penyusutan', 'nilai_buku']
