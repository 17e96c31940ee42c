from django.db import models
from decimal import Decimal


class Platform(models.Model):
    """Marketplace platforms (Shopee, Tokopedia, ...)"""
    nama_platform = models.CharField(max_length=100, unique=True)
    metode_pencairan = models.CharField(max_length=100, blank=True)
    komisi_default_persen = models.DecimalField(max_digits=5, decimal_places=2, default=Decimal('0.00'))
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nama_platform

    class Meta:
        db_table = 'platforms'
        ordering = ['nama_platform']


class Store(models.Model):
    """Online store on a platform; saldo_dashboard is its running balance of delivered revenue"""
    platform = models.ForeignKey(Platform, on_delete=models.PROTECT, related_name='stores')
    nama_toko = models.CharField(max_length=200)
    nama_marketing = models.CharField(max_length=200, blank=True)
    email = models.EmailField(blank=True)
    no_hp = models.CharField(max_length=20, blank=True)
    link_toko = models.URLField(blank=True)
    saldo_dashboard = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nama_toko

    class Meta:
        db_table = 'stores'
        ordering = ['nama_toko']
