from django.db import models
from fintracks.core.models import User


class Notification(models.Model):
    """In-app notification for a single user"""
    TYPE_CHOICES = [
        ('info', 'Info'),
        ('warning', 'Warning'),
        ('error', 'Error'),
        ('success', 'Success'),
    ]

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    title = models.CharField(max_length=200)
    message = models.TextField()
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, default='info')
    read = models.BooleanField(default=False)
    action_url = models.CharField(max_length=255, blank=True)
    product_variant = models.ForeignKey('catalog.ProductVariant', on_delete=models.CASCADE,
                                        null=True, blank=True, related_name='notifications',
                                        help_text="Variant a low-stock alert refers to")
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.title} ({self.user.username})"

    class Meta:
        db_table = 'notifications'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['user', 'read'], name='notificatio_user_id_4b2e8f_idx'),
        ]
