from django.contrib import admin
from .models import Supplier, Expedition


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['nama_supplier', 'kontak', 'email', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['nama_supplier', 'kontak', 'email']
    ordering = ['nama_supplier']


@admin.register(Expedition)
class ExpeditionAdmin(admin.ModelAdmin):
    list_display = ['nama_ekspedisi', 'kode', 'is_active']
    search_fields = ['nama_ekspedisi', 'kode']
