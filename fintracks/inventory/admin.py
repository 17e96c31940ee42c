from django.contrib import admin
from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = ['product_variant', 'movement_type', 'quantity', 'reference_type', 'reference_id', 'created_by', 'created_at']
    list_filter = ['movement_type', 'reference_type', 'created_at']
    search_fields = ['product_variant__sku', 'product_variant__product__nama_produk', 'notes']
    ordering = ['-created_at']
    readonly_fields = ['created_at']
