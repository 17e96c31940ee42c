from django.contrib import admin
from .models import Platform, Store


@admin.register(Platform)
class PlatformAdmin(admin.ModelAdmin):
    list_display = ['nama_platform', 'metode_pencairan', 'komisi_default_persen', 'is_active']
    list_filter = ['is_active']
    search_fields = ['nama_platform']
    ordering = ['nama_platform']


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    list_display = ['nama_toko', 'platform', 'nama_marketing', 'saldo_dashboard', 'is_active', 'created_at']
    list_filter = ['platform', 'is_active', 'created_at']
    search_fields = ['nama_toko', 'nama_marketing', 'email']
    ordering = ['nama_toko']
    readonly_fields = ['saldo_dashboard']
