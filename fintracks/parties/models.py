from django.db import models


class Supplier(models.Model):
    """Suppliers"""
    nama_supplier = models.CharField(max_length=200)
    kontak = models.CharField(max_length=100, blank=True)
    email = models.EmailField(blank=True)
    alamat = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nama_supplier

    class Meta:
        db_table = 'suppliers'
        ordering = ['nama_supplier']


class Expedition(models.Model):
    """Shipping couriers used on sales"""
    nama_ekspedisi = models.CharField(max_length=100)
    kode = models.CharField(max_length=20, unique=True, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nama_ekspedisi

    class Meta:
        db_table = 'expeditions'
        ordering = ['nama_ekspedisi']
