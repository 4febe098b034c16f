from datetime import date
from decimal import Decimal

import pytest
from django.db.models import Sum

from accounts.models import CustomUser, SchoolClass
from finances.models import FeeScheduleEntry, JournalEntry, PaymentLedgerEntry
from finances.services import enroll


@pytest.fixture
def fee_6e(db):
    return FeeScheduleEntry.objects.create(
        grade='6e',
        annual_amount=Decimal('100000.00'),
        installment_plan='10 monthly installments',
    )


@pytest.fixture
def class_6a(db, fee_6e):
    return SchoolClass.objects.create(name='6e A', grade='6e', school_year='2025/2026')


@pytest.fixture
def make_class(db):
    """Create a class billed under *grade*, pricing the grade when asked."""
    def _make(name, grade, annual_amount=None, payment_deadline=None):
        if annual_amount is not None:
            FeeScheduleEntry.objects.update_or_create(
                grade=grade,
                defaults={
                    'annual_amount': Decimal(str(annual_amount)),
                    'payment_deadline': payment_deadline,
                },
            )
        return SchoolClass.objects.create(name=name, grade=grade)
    return _make


def profile(matricule='M-0001', **overrides):
    data = {
        'first_name': 'Awa',
        'last_name': 'Koné',
        'matricule': matricule,
        'parent_first_name': 'Moussa',
        'parent_last_name': 'Koné',
        'parent_contact': '+225 07 00 00 00',
        'parent_email': 'moussa.kone@example.org',
    }
    data.update(overrides)
    return data


def assert_ledger_reconciles(account):
    """The ledger explains the balance, and every payment has its own tuition journal line."""
    account.refresh_from_db()
    payments = account.payments.all()
    paid = payments.aggregate(s=Sum('amount'))['s'] or Decimal('0')
    assert paid + account.amount_due == account.tuition_fee

    journal_ids = set(payments.values_list('journal_entry_id', flat=True))
    assert len(journal_ids) == payments.count()
    paired = JournalEntry.objects.filter(
        pk__in=journal_ids,
        category=JournalEntry.Category.TUITION,
        direction=JournalEntry.Direction.REVENUE,
    )
    assert paired.count() == payments.count()
    assert (
        JournalEntry.objects.filter(category=JournalEntry.Category.TUITION).count()
        == PaymentLedgerEntry.objects.count()
    )


@pytest.fixture
def enroll_student(class_6a):
    """Enroll a student (default class 6e A, 100 000 tuition)."""
    def _enroll(matricule='M-0001', school_class=None, **overrides):
        target = school_class or class_6a
        return enroll(profile(matricule, **overrides), target.pk)
    return _enroll


@pytest.fixture
def staff_user(db):
    return CustomUser.objects.create_user(
        username='bursar', password='s3cret-pass', role=CustomUser.Role.STAFF,
    )


@pytest.fixture
def parent_user(db):
    return CustomUser.objects.create_user(
        username='parent', password='s3cret-pass', role=CustomUser.Role.PARENT,
    )


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client


@pytest.fixture
def deadline():
    return date(2026, 1, 31)
