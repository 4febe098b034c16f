"""
finances/exceptions.py
──────────────────────
Errors raised by the billing services.

Each carries a short machine-readable `code` and the HTTP `status` the JSON
views answer with, so callers can tell "fix your input" apart from
"re-run the whole operation".
"""

from django.core.exceptions import PermissionDenied as DjangoPermissionDenied


class BillingError(Exception):
    code = 'billing_error'
    status = 400

    def __init__(self, message=''):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__


class NotFound(BillingError):
    """A referenced student, class, or fee-grade entry does not exist."""
    code = 'not_found'
    status = 404


class InvalidArgument(BillingError):
    """Non-positive amount, missing payer or profile fields, unknown method."""
    code = 'invalid_argument'
    status = 400


class WriteConflict(BillingError):
    """
    The atomic multi-record commit was not applied (concurrent update or
    storage error).  Nothing was written; re-run the whole operation.
    """
    code = 'write_conflict'
    status = 409


class PermissionDenied(BillingError, DjangoPermissionDenied):
    """The caller may not mutate billing data."""
    code = 'permission_denied'
    status = 403


class AlreadyEnrolled(BillingError):
    """A student with this matricule already has a profile and an account."""
    code = 'already_enrolled'
    status = 409


class AppendOnlyViolation(BillingError):
    """Attempt to change or delete a journal or payment ledger row."""
    code = 'append_only'
    status = 409
