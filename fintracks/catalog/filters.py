import django_filters
from django.db.models import Q
from .models import Product, ProductVariant


class ProductFilter(django_filters.FilterSet):
    search = django_filters.CharFilter(method='filter_search', label='Search')
    active = django_filters.BooleanFilter(field_name='is_active')

    class Meta:
        model = Product
        fields = ['search', 'active']

    def filter_search(self, queryset, name, value):
        if not value or not value.strip():
            return queryset
        value = value.strip()
        return queryset.filter(
            Q(nama_produk__icontains=value) | Q(variants__sku__icontains=value)
        ).distinct()


class ProductVariantFilter(django_filters.FilterSet):
    """Filter variants by product, SKU/name search and stock level"""
    product = django_filters.NumberFilter(field_name='product_id')
    search = django_filters.CharFilter(method='filter_search', label='Search')
    active = django_filters.BooleanFilter(field_name='is_active')
    stok_max = django_filters.NumberFilter(field_name='stok', lookup_expr='lte')
    out_of_stock = django_filters.BooleanFilter(method='filter_out_of_stock')

    class Meta:
        model = ProductVariant
        fields = ['product', 'search', 'active', 'stok_max', 'out_of_stock']

    def filter_search(self, queryset, name, value):
        if not value or not value.strip():
            return queryset
        value = value.strip()
        return queryset.filter(
            Q(sku__icontains=value) |
            Q(product__nama_produk__icontains=value) |
            Q(warna__icontains=value) |
            Q(size__icontains=value)
        )

    def filter_out_of_stock(self, queryset, name, value):
        if value:
            return queryset.filter(stok__lte=0)
        return queryset.filter(stok__gt=0)
