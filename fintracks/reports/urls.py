from django.urls import path
from .views import (
    profit_loss, cash_flow, balance_sheet, dashboard_metrics, platform_performance, top_products
)

urlpatterns = [
    path('reports/profit-loss/', profit_loss, name='report-profit-loss'),
    path('reports/cash-flow/', cash_flow, name='report-cash-flow'),
    path('reports/balance-sheet/', balance_sheet, name='report-balance-sheet'),
    path('reports/dashboard/', dashboard_metrics, name='report-dashboard'),
    path('reports/platform-performance/', platform_performance, name='report-platform-performance'),
    path('reports/top-products/', top_products, name='report-top-products'),
]
