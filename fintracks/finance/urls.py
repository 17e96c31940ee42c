from django.urls import path
from .views import (
    category_list_create, category_detail,
    bank_list_create, bank_detail,
    expense_list_create, expense_detail,
    income_list_create, income_detail,
    settlement_list_create, settlement_detail,
    asset_list_create, asset_detail, asset_update_depreciation
)

urlpatterns = [
    # Category endpoints
    path('categories/', category_list_create, name='category-list-create'),
    path('categories/<int:pk>/', category_detail, name='category-detail'),

    # Bank endpoints
    path('banks/', bank_list_create, name='bank-list-create'),
    path('banks/<int:pk>/', bank_detail, name='bank-detail'),

    # Expense endpoints
    path('expenses/', expense_list_create, name='expense-list-create'),
    path('expenses/<int:pk>/', expense_detail, name='expense-detail'),

    # Income endpoints
    path('incomes/', income_list_create, name='income-list-create'),
    path('incomes/<int:pk>/', income_detail, name='income-detail'),

    # Settlement endpoints
    path('settlements/', settlement_list_create, name='settlement-list-create'),
    path('settlements/<int:pk>/', settlement_detail, name='settlement-detail'),

    # Asset endpoints
    path('assets/', asset_list_create, name='asset-list-create'),
    path('assets/<int:pk>/', asset_detail, name='asset-detail'),
    path('assets/<int:pk>/depreciation/', asset_update_depreciation, name='asset-update-depreciation'),
]
