from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import Q, ProtectedError
from django.shortcuts import get_object_or_404
from .models import Supplier, Expedition
from .serializers import SupplierSerializer, ExpeditionSerializer


# Supplier views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def supplier_list_create(request):
    """List all suppliers or create a new supplier"""
    if request.method == 'GET':
        suppliers = Supplier.objects.all()
        search = request.query_params.get('search', None)
        if search:
            suppliers = suppliers.filter(Q(nama_supplier__icontains=search) | Q(kontak__icontains=search))
        serializer = SupplierSerializer(suppliers, many=True)
        return Response(serializer.data)
    else:
        serializer = SupplierSerializer(data=request.data)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def supplier_detail(request, pk):
    """Retrieve, update or delete a supplier"""
    supplier = get_object_or_404(Supplier, pk=pk)

    if request.method == 'GET':
        serializer = SupplierSerializer(supplier)
        return Response(serializer.data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = SupplierSerializer(supplier, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            supplier.delete()
        except ProtectedError:
            return Response({'error': 'Supplier masih memiliki pembelian'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Expedition views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def expedition_list_create(request):
    """List all expeditions or create a new expedition"""
    if request.method == 'GET':
        serializer = ExpeditionSerializer(Expedition.objects.all(), many=True)
        return Response(serializer.data)
    else:
        serializer = ExpeditionSerializer(data=request.data)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def expedition_detail(request, pk):
    """Retrieve, update or delete an expedition"""
    expedition = get_object_or_404(Expedition, pk=pk)

    if request.method == 'GET':
        return Response(ExpeditionSerializer(expedition).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ExpeditionSerializer(expedition, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        expedition.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
