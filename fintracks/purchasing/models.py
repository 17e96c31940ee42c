from django.db import models
from decimal import Decimal


class Purchase(models.Model):
    """Purchase/Bill from supplier; a purchase with payment_status 'returned' is a return to the supplier"""
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('ordered', 'Ordered'),
        ('received', 'Received'),
        ('cancelled', 'Cancelled'),
    ]

    PAYMENT_STATUS_CHOICES = [
        ('unpaid', 'Belum Dibayar'),
        ('partial', 'Sebagian'),
        ('paid', 'Lunas'),
        ('returned', 'Retur'),
    ]

    PAYMENT_METHOD_CHOICES = [
        ('cash', 'Cash'),
        ('transfer', 'Transfer'),
        ('credit', 'Kredit'),
    ]

    tanggal = models.DateField(db_index=True)
    supplier = models.ForeignKey('parties.Supplier', on_delete=models.PROTECT, related_name='purchases')
    no_invoice = models.CharField(max_length=100, blank=True)
    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='pending')
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default='unpaid')
    payment_method = models.CharField(max_length=20, choices=PAYMENT_METHOD_CHOICES, default='cash')
    original_purchase = models.ForeignKey('self', on_delete=models.PROTECT, null=True, blank=True, related_name='returns')
    notes = models.TextField(blank=True)
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='purchases')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.no_invoice or f"Purchase-{self.id}"

    @property
    def is_return(self):
        return self.payment_status == 'returned'

    class Meta:
        db_table = 'purchases'
        ordering = ['-tanggal', '-created_at']
        indexes = [
            models.Index(fields=['status'], name='idx_purchase_status'),
            models.Index(fields=['payment_status'], name='idx_purchase_payment_status'),
        ]


class PurchaseItem(models.Model):
    """Purchase line items"""
    purchase = models.ForeignKey(Purchase, on_delete=models.CASCADE, related_name='items')
    product_variant = models.ForeignKey('catalog.ProductVariant', on_delete=models.PROTECT, related_name='purchase_items')
    qty = models.PositiveIntegerField()
    harga_beli_satuan = models.DecimalField(max_digits=15, decimal_places=2)
    subtotal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))

    def save(self, *args, **kwargs):
        self.subtotal = Decimal(self.qty) * self.harga_beli_satuan
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product_variant} x {self.qty}"

    class Meta:
        db_table = 'purchase_items'
