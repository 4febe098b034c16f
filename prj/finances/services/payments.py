"""
finances/services/payments.py
─────────────────────────────
Payment reconciliation: the only code that moves a StudentAccount balance.

record_payment(student_id, amount, date, description, payer, method, actor)
    Apply a payment to the student's account and append the paired
    accounting-journal and payment-ledger rows, all in one commit.

record_online_payment(student_id, amount, provider, date)
    Same, for gateway callbacks: payer and method come from the student
    record and the provider.

flag_overdue_accounts(today)
    Move outstanding accounts past their due date to Overdue.

Concurrency
───────────
The balance is read outside the transaction together with the account's
version.  The write is a conditional UPDATE on that version; if another
payment committed in between, zero rows match, the transaction is rolled
back and WriteConflict is raised.  Nothing is retried here: the caller
re-runs the whole operation so the new balance is re-read.
"""

import logging
from dataclasses import asdict, dataclass
from decimal import Decimal

from django.conf import settings
from django.db import DatabaseError, DataError, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.module_loading import import_string

from ..exceptions import InvalidArgument, NotFound, WriteConflict
from ..models import JournalEntry, PaymentLedgerEntry, StudentAccount
from .utils import check_amount_range, check_billing_rights, check_length, clean_date, to_amount

logger = logging.getLogger(__name__)

CARD_PROVIDERS = {'stripe'}


@dataclass(frozen=True)
class Payer:
    name: str
    contact: str = ''


@dataclass(frozen=True)
class PaymentResult:
    """
    Outcome of a committed payment.  new_balance and new_status are exactly
    what was written; receipts must use them rather than recompute.
    """
    student_id: int
    new_balance: Decimal
    new_status: str
    payment_entry_id: int
    accounting_entry_id: int

    def as_dict(self):
        return asdict(self)


# ── Input cleaning ────────────────────────────────────────────────────────────

def _clean_payer(payer):
    if isinstance(payer, Payer):
        name, contact = payer.name, payer.contact
    elif isinstance(payer, dict):
        name, contact = payer.get('name'), payer.get('contact')
    else:
        name, contact = payer, ''
    name = str(name or '').strip()
    if not name:
        raise InvalidArgument('payer name is required.')
    contact = str(contact or '').strip()
    check_length(name, PaymentLedgerEntry, 'payer_name', 'payer name')
    check_length(contact, PaymentLedgerEntry, 'payer_contact', 'payer contact')
    return Payer(name=name, contact=contact)


def _clean_method(method):
    if method not in PaymentLedgerEntry.Method.values:
        raise InvalidArgument(
            f"Unknown payment method {method!r}; expected one of "
            f"{', '.join(PaymentLedgerEntry.Method.values)}."
        )
    return method


def _read_account(student_id):
    try:
        return StudentAccount.objects.select_related('student').get(student_id=student_id)
    except (StudentAccount.DoesNotExist, ValueError, TypeError):
        raise NotFound(f'No tuition account for student {student_id!r}.')


# ── Commit ────────────────────────────────────────────────────────────────────

@transaction.atomic
def _commit_payment(account, amount, new_amount_due, new_status, date,
                    description, payer, method, actor):
    swapped = (
        StudentAccount.objects
        .filter(pk=account.pk, version=account.version)
        .update(
            amount_due=new_amount_due,
            tuition_status=new_status,
            version=F('version') + 1,
            updated_at=timezone.now(),
        )
    )
    if swapped != 1:
        raise WriteConflict(
            f'Account of student {account.student_id} changed since it was read; '
            'payment not applied.'
        )

    journal = JournalEntry.objects.create(
        date=date,
        description=description,
        category=JournalEntry.Category.TUITION,
        direction=JournalEntry.Direction.REVENUE,
        amount=amount,
        recorded_by=actor,
    )
    payment = PaymentLedgerEntry.objects.create(
        account=account,
        date=date,
        amount=amount,
        description=description,
        payer_name=payer.name,
        payer_contact=payer.contact,
        method=method,
        journal_entry=journal,
        recorded_by=actor,
    )
    return journal, payment


def _notify_payment(student_id, new_balance, new_status):
    """Fire-and-forget: a failing notifier never affects the payment."""
    notifier_path = getattr(settings, 'BILLING_PAYMENT_NOTIFIER', '')
    if not notifier_path:
        return
    try:
        import_string(notifier_path)(student_id, new_balance, new_status)
    except Exception:
        logger.exception(f"Payment notification failed for student {student_id}")


# ── Public API ────────────────────────────────────────────────────────────────

def record_payment(student_id, amount, date=None, description='', payer=None,
                   method=PaymentLedgerEntry.Method.CASH, actor=None):
    """
    Record a tuition payment.

    Args:
        student_id: StudentProfile primary key.
        amount: positive amount paid (int, str or Decimal).  Overpayment is
            accepted and leaves a negative balance.
        date: payment date (date or ISO string), defaults to today.
        description: free text; defaults to "Tuition payment for <name>".
        payer: Payer, {'name', 'contact'} dict, or a name string.
        method: a PaymentLedgerEntry.Method value.
        actor: user recording the payment (optional).

    Returns:
        PaymentResult

    Raises:
        InvalidArgument: amount <= 0 or too large, missing or overlong payer
                         name, overlong description, unknown method
        NotFound:        the student has no tuition account
        WriteConflict:   the account changed concurrently or the commit
                         failed; nothing was written
    """
    check_billing_rights(actor)
    amount = to_amount(amount)
    if amount <= 0:
        raise InvalidArgument(f'Payment amount must be positive, got {amount}.')
    payer = _clean_payer(payer)
    method = _clean_method(method)
    date = clean_date(date)

    account = _read_account(student_id)
    new_amount_due = account.amount_due - amount
    check_amount_range(new_amount_due, 'resulting balance')
    new_status = StudentAccount.status_for(new_amount_due)
    description = (description or '').strip() or f'Tuition payment for {account.student.full_name}'
    check_length(description, PaymentLedgerEntry, 'description')

    try:
        journal, payment = _commit_payment(
            account, amount, new_amount_due, new_status, date,
            description, payer, method, actor,
        )
    except DataError as exc:
        raise InvalidArgument(
            f'Payment for student {student_id} does not fit the ledger columns.'
        ) from exc
    except DatabaseError as exc:
        raise WriteConflict(
            f'Payment for student {student_id} could not be committed.'
        ) from exc

    logger.info(
        f"Recorded payment #{payment.pk} of {amount} for {account.student.full_name}: "
        f"balance {account.amount_due} -> {new_amount_due} ({new_status})"
    )

    transaction.on_commit(
        lambda: _notify_payment(account.student_id, new_amount_due, new_status)
    )

    return PaymentResult(
        student_id=account.student_id,
        new_balance=new_amount_due,
        new_status=str(new_status),
        payment_entry_id=payment.pk,
        accounting_entry_id=journal.pk,
    )


def record_online_payment(student_id, amount, provider, date=None):
    """
    Record a payment confirmed by an online gateway (card or mobile money).
    The primary parent is the payer; Stripe payments are card payments,
    every other provider is treated as mobile money.
    """
    provider = (provider or '').strip()
    if not provider:
        raise InvalidArgument('provider is required.')

    student = _read_account(student_id).student
    payer = Payer(name=student.parent_name or 'Parent', contact=student.parent_contact)
    method = (
        PaymentLedgerEntry.Method.CARD
        if provider.lower() in CARD_PROVIDERS
        else PaymentLedgerEntry.Method.MOBILE_MONEY
    )
    return record_payment(
        student_id,
        amount,
        date=date,
        description=f'Online tuition payment via {provider}',
        payer=payer,
        method=method,
    )


def flag_overdue_accounts(today=None):
    """
    Mark every Partial account with a positive balance whose due date is
    before *today* as Overdue.  Returns the number of accounts flagged.
    """
    today = today or timezone.localdate()
    flagged = (
        StudentAccount.objects
        .filter(
            tuition_status=StudentAccount.TuitionStatus.PARTIAL,
            amount_due__gt=0,
            due_date__lt=today,
        )
        .update(
            tuition_status=StudentAccount.TuitionStatus.OVERDUE,
            version=F('version') + 1,
            updated_at=timezone.now(),
        )
    )
    if flagged:
        logger.info(f"Flagged {flagged} tuition account(s) as overdue on {today}")
    return flagged
