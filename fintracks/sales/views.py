import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from fintracks.core.exceptions import FintracksError
from fintracks.core.utils import create_audit_log, error_response
from .filters import SaleFilter
from .models import Sale, SalesAdjustment
from .serializers import (
    SaleSerializer, SaleStatusSerializer, SaleValidationSerializer, SalesAdjustmentSerializer
)
from . import services

logger = logging.getLogger(__name__)


def _sale_queryset():
    return Sale.objects.select_related('store__platform', 'expedition').prefetch_related(
        'items__product_variant__product', 'adjustments'
    )


# Sale views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def sale_list_create(request):
    """List sales with filters or create a new sale"""
    if request.method == 'GET':
        filterset = SaleFilter(request.query_params, queryset=_sale_queryset())
        if not filterset.is_valid():
            return Response(filterset.errors, status=status.HTTP_400_BAD_REQUEST)
        serializer = SaleSerializer(filterset.qs, many=True)
        return Response(serializer.data)

    serializer = SaleSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    items = data.pop('items')
    try:
        sale = services.create_sale(data, items, user=request.user)
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='create',
        model_name='Sale',
        object_id=sale.id,
        object_name=sale.no_pesanan_platform,
        changes={'status': sale.status, 'total': str(sale.total), 'items': len(items)},
    )
    return Response(SaleSerializer(_sale_queryset().get(pk=sale.pk)).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def sale_detail(request, pk):
    """Retrieve, update or delete a sale"""
    sale = get_object_or_404(_sale_queryset(), pk=pk)

    if request.method == 'GET':
        return Response(SaleSerializer(sale).data)

    if request.method == 'DELETE':
        try:
            services.delete_sale(sale, user=request.user)
        except FintracksError as e:
            return error_response(e)
        create_audit_log(
            request=request,
            action='delete',
            model_name='Sale',
            object_id=pk,
            object_name=sale.no_pesanan_platform,
            changes={'status': sale.status, 'total': str(sale.total)},
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = SaleSerializer(sale, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    items = data.pop('items', None)
    old_status, old_total = sale.status, sale.total
    try:
        updated = services.update_sale(sale, data, items=items, user=request.user)
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='update',
        model_name='Sale',
        object_id=updated.id,
        object_name=updated.no_pesanan_platform,
        changes={
            'status': {'old': old_status, 'new': updated.status},
            'total': {'old': str(old_total), 'new': str(updated.total)},
        },
    )
    return Response(SaleSerializer(_sale_queryset().get(pk=updated.pk)).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def sale_change_status(request, pk):
    """Change a sale's status, applying stock movements and balance updates"""
    sale = get_object_or_404(Sale, pk=pk)
    serializer = SaleStatusSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    old_status = sale.status
    new_status = serializer.validated_data['status']
    try:
        sale = services.change_sale_status(sale, new_status, user=request.user)
    except FintracksError as e:
        logger.warning(f"Status change {old_status} -> {new_status} rejected for sale {pk}: {e.message}")
        return error_response(e)

    create_audit_log(
        request=request,
        action='status_change',
        model_name='Sale',
        object_id=sale.id,
        object_name=sale.no_pesanan_platform,
        changes={'status': {'old': old_status, 'new': sale.status}},
    )
    return Response(SaleSerializer(_sale_queryset().get(pk=sale.pk)).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sale_pending_validation(request):
    """Delivered sales waiting for validation"""
    sales = services.get_pending_validation_sales().prefetch_related('items__product_variant__product', 'adjustments')
    return Response(SaleSerializer(sales, many=True).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def sale_validate(request, pk):
    """Validate a delivered sale with optional penalty/shipping adjustments"""
    sale = get_object_or_404(Sale, pk=pk)
    serializer = SaleValidationSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        sale, adjustments = services.validate_sale_with_adjustments(
            sale,
            serializer.validated_data['adjustments'],
            user=request.user,
            notes=serializer.validated_data['notes'],
        )
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='sale_validate',
        model_name='Sale',
        object_id=sale.id,
        object_name=sale.no_pesanan_platform,
        changes={'adjustments': [{'type': a.adjustment_type, 'amount': str(a.amount)} for a in adjustments]},
    )
    return Response(SaleSerializer(_sale_queryset().get(pk=sale.pk)).data)


# SalesAdjustment views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def sales_adjustment_list_create(request):
    """List adjustments (optionally for one sale) or create one"""
    if request.method == 'GET':
        adjustments = SalesAdjustment.objects.all()
        sale_id = request.query_params.get('sale_id', None)
        if sale_id:
            adjustments = services.get_sale_adjustments(sale_id)
        return Response(SalesAdjustmentSerializer(adjustments, many=True).data)

    serializer = SalesAdjustmentSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    data = serializer.validated_data
    try:
        adjustment = services.create_adjustment(
            data['sale'], data['adjustment_type'], data['amount'],
            notes=data.get('notes', ''), user=request.user,
        )
    except FintracksError as e:
        return error_response(e)
    return Response(SalesAdjustmentSerializer(adjustment).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def sales_adjustment_detail(request, pk):
    """Retrieve an adjustment; recorded adjustments are immutable"""
    adjustment = get_object_or_404(SalesAdjustment, pk=pk)
    return Response(SalesAdjustmentSerializer(adjustment).data)
