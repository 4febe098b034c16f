from datetime import date, timedelta
from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import CommandError, call_command

from finances.exceptions import AppendOnlyViolation
from finances.models import JournalEntry, PaymentLedgerEntry, StudentAccount
from finances.services import enroll, flag_overdue_accounts, record_journal_entry, record_payment

from .conftest import profile

pytestmark = pytest.mark.django_db

Status = StudentAccount.TuitionStatus


@pytest.mark.parametrize('amount_due, expected', [
    (Decimal('1'), Status.PARTIAL),
    (Decimal('0'), Status.PAID),
    (Decimal('-10'), Status.PAID),
])
def test_status_is_derived_from_balance(amount_due, expected):
    assert StudentAccount.status_for(amount_due) == expected


def test_ledger_rows_cannot_be_changed_or_removed(enroll_student):
    result = record_payment(enroll_student().student_id, 1000, payer='Moussa Koné')
    payment = PaymentLedgerEntry.objects.get(pk=result.payment_entry_id)
    journal = payment.journal_entry

    payment.amount = Decimal('1')
    with pytest.raises(AppendOnlyViolation):
        payment.save()
    with pytest.raises(AppendOnlyViolation):
        payment.delete()
    with pytest.raises(AppendOnlyViolation):
        journal.delete()

    assert PaymentLedgerEntry.objects.get(pk=payment.pk).amount == Decimal('1000.00')
    assert JournalEntry.objects.count() == 1


def test_manual_journal_entry_cannot_be_edited():
    entry = record_journal_entry(None, 'Gala dinner', 'events', 'revenue', 250000)
    entry.description = 'Changed'
    with pytest.raises(AppendOnlyViolation):
        entry.save()


# ── Overdue sweep ─────────────────────────────────────────────────────────────

@pytest.fixture
def priced_class(make_class, deadline):
    return make_class('4e A', '4e', 60000, payment_deadline=deadline)


def test_sweep_flags_only_outstanding_accounts_past_due(priced_class, make_class, deadline):
    late = enroll(profile('M-1'), priced_class.pk)
    settled = enroll(profile('M-2'), priced_class.pk)
    record_payment(settled.student_id, 60000, payer='Parent')
    free = enroll(profile('M-3'), make_class('Club', 'club').pk)

    assert flag_overdue_accounts(today=deadline) == 0
    assert flag_overdue_accounts(today=deadline + timedelta(days=1)) == 1

    late.refresh_from_db()
    settled.refresh_from_db()
    free.refresh_from_db()
    assert late.tuition_status == Status.OVERDUE
    assert late.version == 1
    assert settled.tuition_status == Status.PAID
    assert free.tuition_status == Status.PAID


def test_payment_on_overdue_account_recomputes_status(priced_class, deadline):
    sid = enroll(profile(), priced_class.pk).student_id
    flag_overdue_accounts(today=deadline + timedelta(days=1))

    result = record_payment(sid, 10000, payer='Parent')
    assert result.new_status == Status.PARTIAL

    result = record_payment(sid, 50000, payer='Parent')
    assert result.new_status == Status.PAID


def test_overdue_command(priced_class):
    enroll(profile(), priced_class.pk)

    out = StringIO()
    call_command('flag_overdue_accounts', '--date', '2026-02-15', stdout=out)

    assert '1 account(s) flagged as overdue.' in out.getvalue()
    assert StudentAccount.objects.get().tuition_status == Status.OVERDUE


@pytest.mark.parametrize('value', ['next tuesday', '2025-02-30'])
def test_overdue_command_rejects_bad_date(value):
    with pytest.raises(CommandError):
        call_command('flag_overdue_accounts', '--date', value)


def test_accounts_without_deadline_are_never_flagged(enroll_student):
    enroll_student()
    assert flag_overdue_accounts(today=date(2099, 1, 1)) == 0
