import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db import transaction
from django.shortcuts import get_object_or_404
from fintracks.catalog.models import ProductVariant
from fintracks.core.exceptions import FintracksError
from fintracks.core.utils import create_audit_log, error_response
from .filters import StockMovementFilter
from .models import StockMovement
from .serializers import StockMovementSerializer, StockAdjustSerializer
from . import services

logger = logging.getLogger(__name__)


def _variant_param(request):
    """Optional ``product_variant`` query param as an int; raises ValueError on junk"""
    value = request.query_params.get('product_variant', None)
    if value in (None, ''):
        return None
    return int(value)


# StockMovement views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def stock_movement_list_create(request):
    """
    List stock movements or record one.

    POST records a ledger row only; pass ``apply_to_stock=true`` with an
    ``in``/``out`` movement to change the on-hand quantity as well.
    """
    if request.method == 'GET':
        queryset = StockMovement.objects.select_related('product_variant__product', 'created_by')
        filterset = StockMovementFilter(request.query_params, queryset=queryset)
        serializer = StockMovementSerializer(filterset.qs[:500], many=True)
        return Response(serializer.data)

    serializer = StockMovementSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    apply_to_stock = str(request.data.get('apply_to_stock', '')).lower() in ('1', 'true', 'yes')
    try:
        if apply_to_stock:
            with transaction.atomic():
                movement = services.apply_stock_change(
                    data['product_variant'].id, data['quantity'], data['movement_type'],
                    reference_type=data.get('reference_type', 'manual'),
                    reference_id=data.get('reference_id'),
                    notes=data.get('notes', ''),
                    user=request.user,
                )
        else:
            movement = services.create_movement(
                data['product_variant'].id, data['movement_type'], data['quantity'],
                reference_type=data.get('reference_type', 'manual'),
                reference_id=data.get('reference_id'),
                notes=data.get('notes', ''),
                user=request.user,
            )
    except FintracksError as e:
        return error_response(e)

    return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def stock_movement_bulk_create(request):
    """Record several ledger rows at once"""
    if not isinstance(request.data, list) or not request.data:
        return Response({'error': 'Expected a non-empty list of movements'}, status=status.HTTP_400_BAD_REQUEST)

    serializer = StockMovementSerializer(data=request.data, many=True)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    rows = [dict(row, product_variant=row['product_variant'].id) for row in serializer.validated_data]
    movements = services.bulk_create_movements(rows, user=request.user)
    return Response({'created': len(movements)}, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stock_movement_detail(request, pk):
    """Retrieve a stock movement"""
    movement = get_object_or_404(StockMovement.objects.select_related('product_variant__product'), pk=pk)
    return Response(StockMovementSerializer(movement).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stock_movement_history(request):
    """Latest movements, optionally for one variant"""
    try:
        variant_id = _variant_param(request)
        limit = int(request.query_params.get('limit', 50))
    except ValueError:
        return Response({'error': 'product_variant and limit must be integers'}, status=status.HTTP_400_BAD_REQUEST)

    movements = services.get_movement_history(variant_id=variant_id, limit=max(1, min(limit, 500)))
    return Response(StockMovementSerializer(movements, many=True).data)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stock_movement_summary(request):
    """Totals for the current day, week or month"""
    period = request.query_params.get('period', 'day')
    try:
        variant_id = _variant_param(request)
    except ValueError:
        return Response({'error': 'product_variant must be an integer'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        summary = services.get_stock_summary(period, variant_id=variant_id)
    except FintracksError as e:
        return error_response(e)
    return Response(summary)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def stock_adjust(request):
    """Set a variant's stock to an absolute quantity"""
    serializer = StockAdjustSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    variant = get_object_or_404(ProductVariant, pk=data['product_variant'])
    old_stock = variant.stok
    try:
        movement = services.adjust_stock(variant.id, data['new_stock'], notes=data['notes'], user=request.user)
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='stock_adjust',
        model_name='ProductVariant',
        object_id=variant.id,
        object_name=str(variant),
        changes={'stok': {'old': old_stock, 'new': data['new_stock']}},
    )
    return Response(StockMovementSerializer(movement).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def stock_low(request):
    """Variants at or below the low-stock threshold"""
    threshold = request.query_params.get('threshold', None)
    if threshold is None:
        user_settings = getattr(request.user, 'settings', None)
        threshold = user_settings.low_stock_threshold if user_settings else None
    try:
        threshold = int(threshold) if threshold is not None else None
    except ValueError:
        return Response({'error': 'threshold must be an integer'}, status=status.HTTP_400_BAD_REQUEST)
    return Response(services.get_low_stock_variants(threshold))
