from django.urls import path
from .views import (
    stock_movement_list_create, stock_movement_bulk_create, stock_movement_detail,
    stock_movement_history, stock_movement_summary, stock_adjust, stock_low
)

urlpatterns = [
    # StockMovement endpoints
    path('stock-movements/', stock_movement_list_create, name='stock-movement-list-create'),
    path('stock-movements/bulk/', stock_movement_bulk_create, name='stock-movement-bulk-create'),
    path('stock-movements/history/', stock_movement_history, name='stock-movement-history'),
    path('stock-movements/summary/', stock_movement_summary, name='stock-movement-summary'),
    path('stock-movements/<int:pk>/', stock_movement_detail, name='stock-movement-detail'),

    # Stock endpoints
    path('stock/adjust/', stock_adjust, name='stock-adjust'),
    path('stock/low/', stock_low, name='stock-low'),
]
