import django_filters
from django.db.models import Q
from .models import Sale


class SaleFilter(django_filters.FilterSet):
    status = django_filters.MultipleChoiceFilter(choices=Sale.STATUS_CHOICES)
    store = django_filters.NumberFilter(field_name='store_id')
    platform = django_filters.NumberFilter(field_name='store__platform_id')
    date_from = django_filters.DateFilter(field_name='tanggal', lookup_expr='gte')
    date_to = django_filters.DateFilter(field_name='tanggal', lookup_expr='lte')
    validated = django_filters.BooleanFilter(field_name='validated_at', lookup_expr='isnull', exclude=True)
    search = django_filters.CharFilter(method='filter_search')

    class Meta:
        model = Sale
        fields = ['status', 'store', 'platform', 'date_from', 'date_to', 'validated', 'search']

    def filter_search(self, queryset, name, value):
        if not value or not value.strip():
            return queryset
        value = value.strip()
        return queryset.filter(
            Q(no_pesanan_platform__icontains=value) |
            Q(customer_name__icontains=value) |
            Q(no_resi__icontains=value)
        )
