"""
finances/services/fee_schedule.py
─────────────────────────────────
CRUD on the tuition fee schedule.

The schedule is read once per enrollment and the amount is copied onto the
new StudentAccount, so nothing here ever cascades to existing accounts.
"""

import logging

from ..exceptions import InvalidArgument
from ..models import FeeScheduleEntry
from .utils import check_billing_rights, check_length, to_amount

logger = logging.getLogger(__name__)


def _clean_grade(grade):
    grade = (grade or '').strip()
    if not grade:
        raise InvalidArgument('grade is required.')
    return grade


def upsert_fee_entry(grade, amount, plan='', payment_deadline=None, actor=None):
    """
    Create or replace the fee for *grade*.  Returns the FeeScheduleEntry.
    """
    check_billing_rights(actor)
    grade = _clean_grade(grade)
    check_length(grade, FeeScheduleEntry, 'grade')
    plan = check_length((plan or '').strip(), FeeScheduleEntry, 'installment_plan', 'installment plan')
    amount = to_amount(amount, field='annual amount')
    if amount < 0:
        raise InvalidArgument(f'annual amount must be zero or more, got {amount}.')

    entry, created = FeeScheduleEntry.objects.update_or_create(
        grade=grade,
        defaults={
            'annual_amount':    amount,
            'installment_plan': plan,
            'payment_deadline': payment_deadline,
        },
    )
    logger.info(f"{'Created' if created else 'Updated'} fee for grade {grade}: {amount}")
    return entry


def delete_fee_entry(grade, actor=None):
    """
    Remove the fee for *grade*.  Always succeeds, even when students were
    billed under it or the grade was never priced; returns whether a row
    was deleted.
    """
    check_billing_rights(actor)
    deleted, _ = FeeScheduleEntry.objects.filter(grade=_clean_grade(grade)).delete()
    if deleted:
        logger.info(f"Deleted fee for grade {grade}")
    return bool(deleted)


def lookup_fee(grade):
    """Annual amount for *grade*, or None when the grade is not priced."""
    entry = FeeScheduleEntry.objects.filter(grade=(grade or '').strip()).first()
    return entry.annual_amount if entry else None


def get_fee_entry(grade):
    return FeeScheduleEntry.objects.filter(grade=(grade or '').strip()).first()


def list_fee_entries():
    return FeeScheduleEntry.objects.order_by('grade')
