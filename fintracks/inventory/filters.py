import django_filters
from .models import StockMovement


class StockMovementFilter(django_filters.FilterSet):
    product_variant = django_filters.NumberFilter(field_name='product_variant_id')
    product = django_filters.NumberFilter(field_name='product_variant__product_id')
    movement_type = django_filters.CharFilter(field_name='movement_type')
    reference_type = django_filters.CharFilter(field_name='reference_type')
    reference_id = django_filters.NumberFilter(field_name='reference_id')
    date_from = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    date_to = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')

    class Meta:
        model = StockMovement
        fields = ['product_variant', 'product', 'movement_type', 'reference_type', 'reference_id', 'date_from', 'date_to']
