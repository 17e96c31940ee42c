from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'fintracks.notifications'

    def ready(self):
        """Import signals when app is ready"""
        import fintracks.notifications.signals  # noqa: F401
