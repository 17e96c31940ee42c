import logging
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated

from fintracks.core.utils import parse_date_range
from . import services

logger = logging.getLogger('fintracks.reports')


def _bad_dates():
    return Response({'error': 'Invalid date format. Use YYYY-MM-DD'}, status=status.HTTP_400_BAD_REQUEST)


def _date_range(request):
    start, end = parse_date_range(request)
    if start > end:
        raise ValueError('date_from must not be after date_to')
    return start, end


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profit_loss(request):
    """Profit & loss for a date range"""
    try:
        start, end = _date_range(request)
    except ValueError:
        return _bad_dates()

    try:
        report = services.calculate_profit_loss(start, end)
        report['company'] = services.get_company_settings(request.user)
        return Response(report)
    except Exception as e:
        logger.error(f"Error in profit_loss: {str(e)}", exc_info=True)
        return Response({'error': 'Gagal menghitung laba rugi'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def cash_flow(request):
    """Cash flow statement for a date range"""
    try:
        start, end = _date_range(request)
    except ValueError:
        return _bad_dates()

    try:
        return Response(services.calculate_cash_flow(start, end))
    except Exception as e:
        logger.error(f"Error in cash_flow: {str(e)}", exc_info=True)
        return Response({'error': 'Gagal memuat data arus kas'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def balance_sheet(request):
    """Balance sheet as of now"""
    try:
        return Response(services.calculate_balance_sheet(request.user))
    except Exception as e:
        logger.error(f"Error in balance_sheet: {str(e)}", exc_info=True)
        return Response({'error': 'Gagal memuat neraca'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_metrics(request):
    """Headline dashboard figures; ``refresh=true`` bypasses the cache"""
    try:
        start, end = _date_range(request)
    except ValueError:
        return _bad_dates()

    refresh = request.query_params.get('refresh', '').lower() in ('1', 'true', 'yes')
    try:
        return Response(services.get_dashboard_metrics(start, end, refresh=refresh))
    except Exception as e:
        logger.error(f"Error in dashboard_metrics: {str(e)}", exc_info=True)
        return Response({'error': 'Gagal memuat dashboard'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def platform_performance(request):
    """Orders and revenue per platform"""
    try:
        start, end = _date_range(request)
    except ValueError:
        return _bad_dates()

    try:
        return Response(services.get_platform_performance(start, end))
    except Exception as e:
        logger.error(f"Error in platform_performance: {str(e)}", exc_info=True)
        return Response({'error': 'Gagal memuat performa platform'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def top_products(request):
    """Best-selling variants"""
    try:
        start, end = _date_range(request)
    except ValueError:
        return _bad_dates()
    try:
        limit = max(1, min(int(request.query_params.get('limit', 10)), 100))
    except ValueError:
        return Response({'error': 'limit must be an integer'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        return Response(services.get_top_products(start, end, limit=limit))
    except Exception as e:
        logger.error(f"Error in top_products: {str(e)}", exc_info=True)
        return Response({'error': 'Gagal memuat produk terlaris'}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
