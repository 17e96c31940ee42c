from django.db import models
from decimal import Decimal


class Sale(models.Model):
    """Marketplace order"""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('processing', 'Diproses'),
        ('shipped', 'Dikirim'),
        ('delivered', 'Selesai'),
        ('cancelled', 'Dibatalkan'),
        ('returned', 'Retur'),
    ]

    tanggal = models.DateField(db_index=True)
    no_pesanan_platform = models.CharField(max_length=100, db_index=True)
    store = models.ForeignKey('locations.Store', on_delete=models.PROTECT, related_name='sales')
    expedition = models.ForeignKey('parties.Expedition', on_delete=models.SET_NULL, null=True, blank=True, related_name='sales')
    customer_name = models.CharField(max_length=200, blank=True)
    customer_phone = models.CharField(max_length=50, blank=True)
    customer_address = models.TextField(blank=True)
    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    ongkir = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    diskon = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    no_resi = models.CharField(max_length=100, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending', db_index=True)
    notes = models.TextField(blank=True)
    validated_at = models.DateTimeField(null=True, blank=True)
    needs_adjustment = models.BooleanField(default=False)
    adjustment_notes = models.TextField(blank=True)
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='sales')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.no_pesanan_platform

    def get_subtotal(self):
        return sum((item.subtotal for item in self.items.all()), Decimal('0.00'))

    class Meta:
        db_table = 'sales'
        ordering = ['-tanggal', '-id']


class SaleItem(models.Model):
    """Line item of a sale"""
    sale = models.ForeignKey(Sale, on_delete=models.CASCADE, related_name='items')
    product_variant = models.ForeignKey('catalog.ProductVariant', on_delete=models.PROTECT, related_name='sale_items')
    qty = models.PositiveIntegerField()
    harga_satuan = models.DecimalField(max_digits=15, decimal_places=2)
    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))

    def save(self, *args, **kwargs):
        self.subtotal = Decimal(self.qty) * self.harga_satuan
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product_variant} x {self.qty}"

    class Meta:
        db_table = 'sale_items'


class SalesAdjustment(models.Model):
    """Post-delivery deduction (penalty, shipping difference, commission)"""
    ADJUSTMENT_TYPE_CHOICES = [
        ('penalty', 'Penalty'),
        ('shipping_diff', 'Shipping Difference'),
        ('commission', 'Commission'),
        ('other', 'Other'),
    ]

    sale = models.ForeignKey(Sale, on_delete=models.PROTECT, related_name='adjustments')
    adjustment_type = models.CharField(max_length=20, choices=ADJUSTMENT_TYPE_CHOICES)
    amount = models.DecimalField(max_digits=15, decimal_places=2)
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='sales_adjustments')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.get_adjustment_type_display()} {self.amount} ({self.sale_id})"

    class Meta:
        db_table = 'sales_adjustments'
        ordering = ['-created_at']
