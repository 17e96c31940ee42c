from django.urls import path
from .views import platform_list_create, platform_detail, store_list_create, store_detail

urlpatterns = [
    # Platform endpoints
    path('platforms/', platform_list_create, name='platform-list-create'),
    path('platforms/<int:pk>/', platform_detail, name='platform-detail'),

    # Store endpoints
    path('stores/', store_list_create, name='store-list-create'),
    path('stores/<int:pk>/', store_detail, name='store-detail'),
]
