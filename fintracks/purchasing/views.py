from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from fintracks.core.exceptions import FintracksError
from fintracks.core.utils import create_audit_log, error_response
from .models import Purchase
from .serializers import PurchaseSerializer, PurchaseReturnSerializer
from . import services


def _purchase_queryset():
    return Purchase.objects.select_related('supplier').prefetch_related('items__product_variant__product')


@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def purchase_list_create(request):
    """List all purchases or create a new purchase"""
    if request.method == 'GET':
        purchases = _purchase_queryset()
        supplier_id = request.query_params.get('supplier_id', None)
        purchase_status = request.query_params.get('status', None)
        payment_status = request.query_params.get('payment_status', None)
        date_from = request.query_params.get('date_from', None)
        date_to = request.query_params.get('date_to', None)

        if supplier_id:
            purchases = purchases.filter(supplier_id=supplier_id)
        if purchase_status:
            purchases = purchases.filter(status=purchase_status)
        if payment_status:
            purchases = purchases.filter(payment_status=payment_status)
        if date_from:
            purchases = purchases.filter(tanggal__gte=date_from)
        if date_to:
            purchases = purchases.filter(tanggal__lte=date_to)

        serializer = PurchaseSerializer(purchases, many=True)
        return Response(serializer.data)

    serializer = PurchaseSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    items = data.pop('items')
    try:
        purchase = services.create_purchase(data, items, user=request.user)
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='create',
        model_name='Purchase',
        object_id=purchase.id,
        object_name=str(purchase),
        changes={'status': purchase.status, 'total': str(purchase.total)},
    )
    return Response(PurchaseSerializer(_purchase_queryset().get(pk=purchase.pk)).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def purchase_detail(request, pk):
    """Retrieve, update or delete a purchase"""
    purchase = get_object_or_404(_purchase_queryset(), pk=pk)

    if request.method == 'GET':
        return Response(PurchaseSerializer(purchase).data)

    if request.method == 'DELETE':
        try:
            services.delete_purchase(purchase, user=request.user)
        except FintracksError as e:
            return error_response(e)
        create_audit_log(
            request=request,
            action='delete',
            model_name='Purchase',
            object_id=pk,
            object_name=str(purchase),
            changes={'status': purchase.status, 'total': str(purchase.total)},
        )
        return Response(status=status.HTTP_204_NO_CONTENT)

    serializer = PurchaseSerializer(purchase, data=request.data, partial=request.method == 'PATCH')
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    items = data.pop('items', None)
    old_status = purchase.status
    try:
        purchase = services.update_purchase(purchase, data, items=items, user=request.user)
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='update',
        model_name='Purchase',
        object_id=purchase.id,
        object_name=str(purchase),
        changes={'status': {'old': old_status, 'new': purchase.status}, 'total': str(purchase.total)},
    )
    return Response(PurchaseSerializer(_purchase_queryset().get(pk=purchase.pk)).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def purchase_return(request, pk):
    """Return part of a received purchase to the supplier"""
    original = get_object_or_404(Purchase, pk=pk)
    serializer = PurchaseReturnSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = dict(serializer.validated_data)
    items = data.pop('items')
    try:
        purchase_return_obj = services.create_purchase_return(original, items, data=data, user=request.user)
    except FintracksError as e:
        return error_response(e)

    create_audit_log(
        request=request,
        action='purchase_return',
        model_name='Purchase',
        object_id=purchase_return_obj.id,
        object_name=str(purchase_return_obj),
        changes={'original_purchase': original.id, 'total': str(purchase_return_obj.total)},
    )
    return Response(
        PurchaseSerializer(_purchase_queryset().get(pk=purchase_return_obj.pk)).data,
        status=status.HTTP_201_CREATED
    )
