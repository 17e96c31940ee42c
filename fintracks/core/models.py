from django.contrib.auth.models import AbstractUser
from django.db import models
from decimal import Decimal


class User(AbstractUser):
    """Extended user model with additional fields"""
    phone = models.CharField(max_length=20, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'users'


class UserSettings(models.Model):
    """Per-user company profile and preferences"""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='settings')
    company_name = models.CharField(max_length=200, blank=True)
    company_address = models.TextField(blank=True)
    company_phone = models.CharField(max_length=50, blank=True)
    company_email = models.EmailField(blank=True)
    modal_awal = models.DecimalField(max_digits=15, decimal_places=2, default=Decimal('0.00'),
                                     help_text="Initial capital used by the balance sheet")
    currency = models.CharField(max_length=10, default='IDR')
    low_stock_alerts = models.BooleanField(default=True)
    low_stock_threshold = models.IntegerField(default=5)
    email_notifications = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Settings for {self.user.username}"

    class Meta:
        db_table = 'user_settings'
        verbose_name_plural = 'user settings'


class AuditLog(models.Model):
    """Audit log for critical operations"""
    ACTION_CHOICES = [
        ('create', 'Create'),
        ('update', 'Update'),
        ('delete', 'Delete'),
        ('status_change', 'Status Change'),
        ('stock_adjust', 'Stock Adjustment'),
        ('sale_validate', 'Sale Validated'),
        ('purchase_return', 'Purchase Return'),
        ('settlement', 'Settlement'),
    ]

    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, related_name='audit_logs')
    action = models.CharField(max_length=50, choices=ACTION_CHOICES)
    model_name = models.CharField(max_length=100)
    object_id = models.CharField(max_length=100)
    object_name = models.CharField(max_length=255, blank=True, null=True,
                                   help_text="Human-readable name of the object (e.g., order number)")
    changes = models.JSONField(default=dict, blank=True)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.action} {self.model_name}#{self.object_id}"

    class Meta:
        db_table = 'audit_logs'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['-created_at'], name='audit_logs_created_d5b0d1_idx'),
            models.Index(fields=['action'], name='audit_logs_action_7f6a2c_idx'),
            models.Index(fields=['model_name'], name='audit_logs_model_n_3c9e41_idx'),
        ]
