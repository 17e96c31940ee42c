from django.urls import path
from .views import (
    sale_list_create, sale_detail, sale_change_status, sale_pending_validation, sale_validate,
    sales_adjustment_list_create, sales_adjustment_detail
)

urlpatterns = [
    # Sale endpoints
    path('sales/', sale_list_create, name='sale-list-create'),
    path('sales/pending-validation/', sale_pending_validation, name='sale-pending-validation'),
    path('sales/<int:pk>/', sale_detail, name='sale-detail'),
    path('sales/<int:pk>/status/', sale_change_status, name='sale-change-status'),
    path('sales/<int:pk>/validate/', sale_validate, name='sale-validate'),

    # SalesAdjustment endpoints
    path('sales-adjustments/', sales_adjustment_list_create, name='sales-adjustment-list-create'),
    path('sales-adjustments/<int:pk>/', sales_adjustment_detail, name='sales-adjustment-detail'),
]
