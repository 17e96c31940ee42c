from django.db import models


class StockMovement(models.Model):
    """Ledger entry recording a stock quantity change with a typed reason"""
    MOVEMENT_TYPE_CHOICES = [
        ('in', 'Stock In'),
        ('out', 'Stock Out'),
        ('adjustment', 'Adjustment'),
    ]

    REFERENCE_TYPE_CHOICES = [
        ('sale', 'Sale'),
        ('sale_status_change', 'Sale Status Change'),
        ('purchase', 'Purchase'),
        ('adjustment', 'Adjustment'),
        ('return', 'Return'),
        ('transfer', 'Transfer'),
        ('manual', 'Manual'),
    ]

    product_variant = models.ForeignKey('catalog.ProductVariant', on_delete=models.CASCADE, related_name='stock_movements')
    movement_type = models.CharField(max_length=20, choices=MOVEMENT_TYPE_CHOICES)
    quantity = models.IntegerField()
    reference_type = models.CharField(max_length=30, choices=REFERENCE_TYPE_CHOICES, default='manual')
    reference_id = models.BigIntegerField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='stock_movements')
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    def __str__(self):
        return f"{self.get_movement_type_display()} {self.quantity} x {self.product_variant_id}"

    class Meta:
        db_table = 'stock_movements'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['reference_type', 'reference_id'], name='stock_movem_referen_1e0c4f_idx'),
            models.Index(fields=['product_variant', '-created_at'], name='stock_movem_product_9a2b7d_idx'),
        ]
