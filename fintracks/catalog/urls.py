from django.urls import path
from .views import product_list_create, product_detail, variant_list_create, variant_detail

urlpatterns = [
    # Product endpoints
    path('products/', product_list_create, name='product-list-create'),
    path('products/<int:pk>/', product_detail, name='product-detail'),

    # ProductVariant endpoints
    path('product-variants/', variant_list_create, name='variant-list-create'),
    path('product-variants/<int:pk>/', variant_detail, name='variant-detail'),
]
