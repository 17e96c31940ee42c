import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.shortcuts import get_object_or_404
from django.db.models import ProtectedError
from .models import Platform, Store
from .serializers import PlatformSerializer, StoreSerializer

logger = logging.getLogger(__name__)


def _detail(request, instance, serializer_class):
    """Shared GET/PUT/PATCH handling for detail views"""
    if request.method == 'GET':
        return Response(serializer_class(instance).data)
    serializer = serializer_class(instance, data=request.data, partial=request.method == 'PATCH')
    if serializer.is_valid():
        serializer.save()
        return Response(serializer.data)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


# Platform views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def platform_list_create(request):
    """List all platforms or create a new platform"""
    if request.method == 'GET':
        platforms = Platform.objects.all()
        is_active = request.query_params.get('is_active', None)
        if is_active is not None:
            platforms = platforms.filter(is_active=is_active.lower() == 'true')
        serializer = PlatformSerializer(platforms, many=True)
        return Response(serializer.data)
    else:
        serializer = PlatformSerializer(data=request.data)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def platform_detail(request, pk):
    """Retrieve, update or delete a platform"""
    platform = get_object_or_404(Platform, pk=pk)
    if request.method == 'DELETE':
        try:
            platform.delete()
        except ProtectedError:
            return Response({'error': 'Platform masih digunakan oleh toko'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)
    return _detail(request, platform, PlatformSerializer)


# Store views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def store_list_create(request):
    """List all stores or create a new store"""
    if request.method == 'GET':
        stores = Store.objects.select_related('platform').all()
        platform_id = request.query_params.get('platform_id', None)
        is_active = request.query_params.get('is_active', None)
        if platform_id:
            stores = stores.filter(platform_id=platform_id)
        if is_active is not None:
            stores = stores.filter(is_active=is_active.lower() == 'true')
        serializer = StoreSerializer(stores, many=True)
        return Response(serializer.data)
    else:
        serializer = StoreSerializer(data=request.data)
        if serializer.is_valid():
            store = serializer.save()
            logger.info(f"Store created: {store.nama_toko} (id={store.id})")
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def store_detail(request, pk):
    """Retrieve, update or delete a store"""
    store = get_object_or_404(Store.objects.select_related('platform'), pk=pk)
    if request.method == 'DELETE':
        try:
            store.delete()
        except ProtectedError:
            return Response({'error': 'Toko masih memiliki transaksi'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)
    return _detail(request, store, StoreSerializer)
