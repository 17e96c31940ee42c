import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django.db.models import ProtectedError
from django.shortcuts import get_object_or_404
from fintracks.core.exceptions import FintracksError
from fintracks.core.utils import create_audit_log, error_response
from .models import Category, Bank, Expense, Income, Settlement, Asset
from .serializers import (
    CategorySerializer, BankSerializer, ExpenseSerializer, IncomeSerializer,
    SettlementSerializer, AssetSerializer
)
from . import services

logger = logging.getLogger(__name__)


def _filter_dates(queryset, request, field='tanggal'):
    date_from = request.query_params.get('date_from', None)
    date_to = request.query_params.get('date_to', None)
    if date_from:
        queryset = queryset.filter(**{f'{field}__gte': date_from})
    if date_to:
        queryset = queryset.filter(**{f'{field}__lte': date_to})
    return queryset


# Category views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def category_list_create(request):
    """List all categories or create a new category"""
    if request.method == 'GET':
        categories = Category.objects.all()
        tipe = request.query_params.get('tipe_kategori', None)
        if tipe:
            categories = categories.filter(tipe_kategori=tipe)
        return Response(CategorySerializer(categories, many=True).data)
    else:
        serializer = CategorySerializer(data=request.data)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def category_detail(request, pk):
    """Retrieve, update or delete a category"""
    category = get_object_or_404(Category, pk=pk)

    if request.method == 'GET':
        return Response(CategorySerializer(category).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = CategorySerializer(category, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        category.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# Bank views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def bank_list_create(request):
    """List all bank accounts or create a new one"""
    if request.method == 'GET':
        banks = Bank.objects.all()
        is_active = request.query_params.get('is_active', None)
        if is_active is not None:
            banks = banks.filter(is_active=is_active.lower() == 'true')
        return Response(BankSerializer(banks, many=True).data)
    else:
        serializer = BankSerializer(data=request.data)
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def bank_detail(request, pk):
    """Retrieve, update or delete a bank account"""
    bank = get_object_or_404(Bank, pk=pk)

    if request.method == 'GET':
        return Response(BankSerializer(bank).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = BankSerializer(bank, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        try:
            bank.delete()
        except ProtectedError:
            return Response({'error': 'Rekening memiliki pencairan saldo'}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Expense views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def expense_list_create(request):
    """List expenses or record a new one"""
    if request.method == 'GET':
        expenses = Expense.objects.select_related('category', 'bank')
        category_id = request.query_params.get('category_id', None)
        if category_id:
            expenses = expenses.filter(category_id=category_id)
        expenses = _filter_dates(expenses, request)
        return Response(ExpenseSerializer(expenses, many=True).data)

    serializer = ExpenseSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    expense = services.create_expense(serializer.validated_data, user=request.user)
    return Response(ExpenseSerializer(expense).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def expense_detail(request, pk):
    """Retrieve, update or delete an expense"""
    expense = get_object_or_404(Expense, pk=pk)

    if request.method == 'GET':
        return Response(ExpenseSerializer(expense).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = ExpenseSerializer(expense, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            expense = services.update_expense(expense, serializer.validated_data)
            return Response(ExpenseSerializer(expense).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        services.delete_expense(expense)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Income views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def income_list_create(request):
    """List incomes or record a new one"""
    if request.method == 'GET':
        incomes = Income.objects.select_related('category', 'bank')
        category_id = request.query_params.get('category_id', None)
        if category_id:
            incomes = incomes.filter(category_id=category_id)
        incomes = _filter_dates(incomes, request)
        return Response(IncomeSerializer(incomes, many=True).data)

    serializer = IncomeSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    income = services.create_income(serializer.validated_data, user=request.user)
    return Response(IncomeSerializer(income).data, status=status.HTTP_201_CREATED)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def income_detail(request, pk):
    """Retrieve, update or delete an income"""
    income = get_object_or_404(Income, pk=pk)

    if request.method == 'GET':
        return Response(IncomeSerializer(income).data)

    try:
        if request.method in ('PUT', 'PATCH'):
            serializer = IncomeSerializer(income, data=request.data, partial=request.method == 'PATCH')
            if not serializer.is_valid():
                return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
            income = services.update_income(income, serializer.validated_data)
            return Response(IncomeSerializer(income).data)
        services.delete_income(income)
    except FintracksError as e:
        return error_response(e)
    return Response(status=status.HTTP_204_NO_CONTENT)


# Settlement views (create and read only)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def settlement_list_create(request):
    """List settlements or process a new settlement"""
    if request.method == 'GET':
        settlements = Settlement.objects.select_related('store', 'bank')
        store_id = request.query_params.get('store_id', None)
        bank_id = request.query_params.get('bank_id', None)
        if store_id:
            settlements = settlements.filter(store_id=store_id)
        if bank_id:
            settlements = settlements.filter(bank_id=bank_id)
        settlements = _filter_dates(settlements, request)
        return Response(SettlementSerializer(settlements, many=True).data)

    serializer = SettlementSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    try:
        settlement = services.process_settlement(
            store=data['store'],
            bank=data['bank'],
            amount=data['jumlah_dicairkan'],
            admin_fee=data.get('biaya_admin', 0),
            notes=data.get('keterangan', ''),
            tanggal=data.get('tanggal'),
            user=request.user,
        )
    except FintracksError as e:
        logger.warning(f"Settlement rejected for store {data['store'].id}: {e.message}")
        return error_response(e)

    create_audit_log(
        request=request,
        action='settlement',
        model_name='Settlement',
        object_id=settlement.id,
        object_name=str(settlement),
        changes={
            'jumlah_dicairkan': str(settlement.jumlah_dicairkan),
            'biaya_admin': str(settlement.biaya_admin),
        },
    )
    return Response(SettlementSerializer(settlement).data, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def settlement_detail(request, pk):
    """Retrieve a settlement"""
    settlement = get_object_or_404(Settlement.objects.select_related('store', 'bank'), pk=pk)
    return Response(SettlementSerializer(settlement).data)


# Asset views
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def asset_list_create(request):
    """List all assets or register a new asset"""
    if request.method == 'GET':
        return Response(AssetSerializer(Asset.objects.all(), many=True).data)
    else:
        serializer = AssetSerializer(data=request.data)
        if serializer.is_valid():
            asset = services.update_depreciation(serializer.save())
            return Response(AssetSerializer(asset).data, status=status.HTTP_201_CREATED)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@permission_classes([IsAuthenticated])
def asset_detail(request, pk):
    """Retrieve, update or delete an asset"""
    asset = get_object_or_404(Asset, pk=pk)

    if request.method == 'GET':
        return Response(AssetSerializer(asset).data)
    elif request.method in ('PUT', 'PATCH'):
        serializer = AssetSerializer(asset, data=request.data, partial=request.method == 'PATCH')
        if serializer.is_valid():
            asset = services.update_depreciation(serializer.save())
            return Response(AssetSerializer(asset).data)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
    else:  # DELETE
        asset.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def asset_update_depreciation(request, pk):
    """Recalculate an asset's depreciation as of today"""
    asset = get_object_or_404(Asset, pk=pk)
    asset = services.update_depreciation(asset)
    return Response(AssetSerializer(asset).data)
