from django.contrib import admin
from .models import Sale, SaleItem, SalesAdjustment


class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0
    readonly_fields = ['subtotal']


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ['no_pesanan_platform', 'tanggal', 'store', 'status', 'total', 'validated_at']
    list_filter = ['status', 'store', 'tanggal']
    search_fields = ['no_pesanan_platform', 'customer_name', 'no_resi']
    ordering = ['-tanggal']
    # Status and totals change through the API so stock and balance stay in step
    readonly_fields = ['status', 'subtotal', 'total', 'validated_at', 'created_by', 'created_at', 'updated_at']
    inlines = [SaleItemInline]


@admin.register(SalesAdjustment)
class SalesAdjustmentAdmin(admin.ModelAdmin):
    list_display = ['sale', 'adjustment_type', 'amount', 'created_at']
    list_filter = ['adjustment_type']
    search_fields = ['sale__no_pesanan_platform', 'notes']
