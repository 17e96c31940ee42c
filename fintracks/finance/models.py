from django.db import models
from decimal import Decimal


class Category(models.Model):
    """Income/expense category"""
    TYPE_CHOICES = [
        ('income', 'Pemasukan'),
        ('expense', 'Pengeluaran'),
    ]

    nama_kategori = models.CharField(max_length=100)
    tipe_kategori = models.CharField(max_length=20, choices=TYPE_CHOICES)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.nama_kategori

    class Meta:
        db_table = 'categories'
        verbose_name_plural = 'categories'
        ordering = ['tipe_kategori', 'nama_kategori']
        constraints = [
            models.UniqueConstraint(fields=['nama_kategori', 'tipe_kategori'], name='uniq_category_name_type'),
        ]


class Bank(models.Model):
    """Bank account; saldo_akhir is the running balance"""
    nama_bank = models.CharField(max_length=100)
    nama_pemilik = models.CharField(max_length=200)
    no_rekening = models.CharField(max_length=50)
    saldo_awal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    saldo_akhir = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.nama_bank} - {self.no_rekening}"

    class Meta:
        db_table = 'banks'
        ordering = ['nama_bank']


class Expense(models.Model):
    tanggal = models.DateField(db_index=True)
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='expenses')
    jumlah = models.DecimalField(max_digits=15, decimal_places=2)
    bank = models.ForeignKey(Bank, on_delete=models.SET_NULL, null=True, blank=True, related_name='expenses')
    keterangan = models.TextField(blank=True)
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='expenses')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.tanggal} {self.jumlah}"

    class Meta:
        db_table = 'expenses'
        ordering = ['-tanggal', '-id']


class Income(models.Model):
    tanggal = models.DateField(db_index=True)
    category = models.ForeignKey(Category, on_delete=models.SET_NULL, null=True, blank=True, related_name='incomes')
    jumlah = models.DecimalField(max_digits=15, decimal_places=2)
    bank = models.ForeignKey(Bank, on_delete=models.SET_NULL, null=True, blank=True, related_name='incomes')
    keterangan = models.TextField(blank=True)
    settlement = models.OneToOneField('Settlement', on_delete=models.PROTECT, null=True, blank=True, related_name='income')
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='incomes')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.tanggal} {self.jumlah}"

    class Meta:
        db_table = 'incomes'
        ordering = ['-tanggal', '-id']


class Settlement(models.Model):
    """Payout of a store's platform balance into a bank account"""
    tanggal = models.DateField(db_index=True)
    store = models.ForeignKey('locations.Store', on_delete=models.PROTECT, related_name='settlements')
    bank = models.ForeignKey(Bank, on_delete=models.PROTECT, related_name='settlements')
    jumlah_dicairkan = models.DecimalField(max_digits=15, decimal_places=2)
    biaya_admin = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    keterangan = models.TextField(blank=True)
    created_by = models.ForeignKey('core.User', on_delete=models.SET_NULL, null=True, blank=True, related_name='settlements')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.store} {self.tanggal} {self.jumlah_dicairkan}"

    @property
    def jumlah_bersih(self):
        return self.jumlah_dicairkan - self.biaya_admin

    class Meta:
        db_table = 'settlements'
        ordering = ['-tanggal', '-id']


class Asset(models.Model):
    """Fixed asset depreciated on a straight line"""
    kode_asset = models.CharField(max_length=50, unique=True)
    nama_asset = models.CharField(max_length=200)
    kategori = models.CharField(max_length=100, blank=True)
    harga_perolehan = models.DecimalField(max_digits=15, decimal_places=2)
    tanggal_perolehan = models.DateField()
    umur_ekonomis_bulan = models.PositiveIntegerField(default=12)
    penyusutan_per_bulan = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    akumulasi_penyusutan = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    nilai_buku = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'))
    keterangan = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"{self.kode_asset} - {self.nama_asset}"

    class Meta:
        db_table = 'assets'
        ordering = ['kode_asset']
