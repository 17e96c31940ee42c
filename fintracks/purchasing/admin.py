from django.contrib import admin
from .models import Purchase, PurchaseItem


class PurchaseItemInline(admin.TabularInline):
    model = PurchaseItem
    extra = 0
    readonly_fields = ['subtotal']


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'tanggal', 'supplier', 'status', 'payment_status', 'total']
    list_filter = ['status', 'payment_status', 'payment_method', 'tanggal']
    search_fields = ['no_invoice', 'supplier__nama_supplier']
    ordering = ['-tanggal']
    readonly_fields = ['status', 'subtotal', 'total', 'original_purchase', 'created_by', 'created_at', 'updated_at']
    inlines = [PurchaseItemInline]
