"""Shared helpers: audit logging, request parsing and domain-error responses"""
import logging
from datetime import datetime, timedelta

from django.utils import timezone
from rest_framework.response import Response

from .models import AuditLog

logger = logging.getLogger(__name__)


def get_client_ip(request):
    """Extract client IP address from request"""
    if not request or not hasattr(request, 'META'):
        return None
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        ip = x_forwarded_for.split(',')[0].strip()
    else:
        ip = request.META.get('REMOTE_ADDR')
    return ip or None


def create_audit_log(request=None, action=None, model_name=None, object_id=None,
                     changes=None, user=None, object_name=None):
    """
    Create an audit log entry

    Args:
        request: Django request object (for user and IP) - optional if user is provided
        action: Action type (create, update, delete, status_change, ...)
        model_name: Name of the model being acted upon
        object_id: ID of the object
        changes: Dictionary of changes made
        user: Optional user override (defaults to request.user if request provided)
        object_name: Human-readable name of the object (e.g., order number)
    """
    try:
        audit_user = None
        if user:
            audit_user = user
        elif request and hasattr(request, 'user'):
            audit_user = request.user

        ip_address = get_client_ip(request) if request else None

        if not action or not model_name or object_id is None:
            logger.warning(f"Audit log creation skipped: missing required fields "
                           f"(action={action}, model_name={model_name}, object_id={object_id})")
            return None

        return AuditLog.objects.create(
            user=audit_user if audit_user and audit_user.is_authenticated else None,
            action=action,
            model_name=model_name,
            object_id=str(object_id),
            object_name=object_name,
            changes=changes or {},
            ip_address=ip_address
        )
    except Exception as e:
        # Don't fail the main operation if audit logging fails
        logger.error(f"Failed to create audit log: {str(e)}")
        return None


def parse_date_range(request, default_days=30):
    """
    Read ``date_from``/``date_to`` (YYYY-MM-DD) from the query string.

    Missing values default to the last ``default_days`` days. Raises
    ValueError on a malformed date.
    """
    date_from = request.query_params.get('date_from')
    date_to = request.query_params.get('date_to')

    if date_to:
        end = datetime.strptime(date_to, '%Y-%m-%d').date()
    else:
        end = timezone.localdate()
    if date_from:
        start = datetime.strptime(date_from, '%Y-%m-%d').date()
    else:
        start = end - timedelta(days=default_days)
    return start, end


def error_response(exc):
    """Render a domain error as a DRF response"""
    return Response({'error': exc.message}, status=exc.status_code)
