"""
finances/views/utils.py
────────────────────────
Shared helpers used by the billing view modules.
Nothing here imports from other view modules (no circular imports).
"""

import logging
from functools import wraps

from django.conf import settings
from django.http import HttpResponseNotAllowed, JsonResponse

from ..exceptions import BillingError, InvalidArgument, PermissionDenied, WriteConflict

logger = logging.getLogger(__name__)


# ── Responses ─────────────────────────────────────────────────────────────────

def error_response(exc):
    """JSON body for a BillingError, with the status its kind maps to."""
    return JsonResponse({'error': exc.code, 'detail': exc.message}, status=exc.status)


def form_error_response(form):
    return JsonResponse(
        {
            'error':  InvalidArgument.code,
            'detail': 'Please fix the errors below.',
            'fields': form.errors.get_json_data(),
        },
        status=InvalidArgument.status,
    )


# ── Access control ────────────────────────────────────────────────────────────

def billing_staff_required(view_fn):
    """
    Decorator: unauthenticated users → 401, users who may not manage
    billing → 403.
    """
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if not req.user.is_authenticated:
            return JsonResponse(
                {'error': 'not_authenticated', 'detail': 'Login required.'},
                status=401,
            )
        if not req.user.can_manage_billing:
            return error_response(PermissionDenied('Access denied – billing staff only.'))
        return view_fn(req, *args, **kwargs)
    return wrapper


def require_POST_or_405(view_fn):
    """Decorator: return 405 for any non-POST request."""
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        if req.method != 'POST':
            return HttpResponseNotAllowed(['POST'])
        return view_fn(req, *args, **kwargs)
    return wrapper


def billing_errors(view_fn):
    """Decorator: turn BillingError subclasses into JSON error responses."""
    @wraps(view_fn)
    def wrapper(req, *args, **kwargs):
        try:
            return view_fn(req, *args, **kwargs)
        except BillingError as exc:
            return error_response(exc)
    return wrapper


# ── Retry policy ──────────────────────────────────────────────────────────────

def call_with_retry(operation, *args, attempts=None, **kwargs):
    """
    Run *operation* and re-run it from scratch when it reports a
    WriteConflict, up to BILLING_WRITE_RETRIES attempts in total.  Each
    attempt re-reads current state, so a retried payment applies its amount
    to the balance left by whoever won the race.
    """
    attempts = attempts or settings.BILLING_WRITE_RETRIES
    for attempt in range(1, attempts + 1):
        try:
            return operation(*args, **kwargs)
        except WriteConflict:
            if attempt == attempts:
                raise
            logger.info(f"{operation.__name__} hit a write conflict (attempt {attempt}/{attempts}); retrying")
