"""
URL configuration for the fintracks project.

Every app mounts its function views under ``api/v1/``.
"""
from django.contrib import admin
from django.urls import path, include

admin.site.site_header = "FINTRACKS Admin Panel"
admin.site.site_title = "FINTRACKS Admin Portal"
admin.site.index_title = "Back office administration"

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/v1/', include('fintracks.core.urls')),
    path('api/v1/', include('fintracks.locations.urls')),
    path('api/v1/', include('fintracks.catalog.urls')),
    path('api/v1/', include('fintracks.parties.urls')),
    path('api/v1/', include('fintracks.inventory.urls')),
    path('api/v1/', include('fintracks.sales.urls')),
    path('api/v1/', include('fintracks.purchasing.urls')),
    path('api/v1/', include('fintracks.finance.urls')),
    path('api/v1/', include('fintracks.reports.urls')),
    path('api/v1/', include('fintracks.notifications.urls')),
]
