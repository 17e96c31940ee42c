from django.apps import AppConfig


class InventoryConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'fintracks.inventory'

    def ready(self):
        """Import signals when app is ready"""
        import fintracks.inventory.signals  # noqa: F401
