"""
finances/models.py
──────────────────
The money engine.  All models here deal exclusively with tuition billing,
payments and the school's accounting journal.

FeeScheduleEntry   – annual tuition for a grade, e.g. "6e – 150 000 CFA".
StudentAccount     – a student's tuition obligation and running balance.
JournalEntry       – general-ledger line (revenue or expense), append-only.
PaymentLedgerEntry – one tuition payment by a student, append-only, paired
                     1:1 with the JournalEntry created in the same commit.
"""

from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from .exceptions import AppendOnlyViolation


class FeeScheduleEntry(models.Model):
    """
    The tuition fee for one grade.  Read by the enrollment service; editing
    or deleting an entry never touches accounts that were already billed.
    """

    grade = models.CharField(
        max_length=50,
        unique=True,
        help_text='Grade / level this fee applies to, e.g. "6e".',
    )
    annual_amount = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0'))],
        help_text='Annual tuition billed to every student enrolled in this grade.',
    )
    installment_plan = models.CharField(
        max_length=200,
        blank=True,
        help_text='Free-text description, e.g. "10 monthly installments".',
    )
    payment_deadline = models.DateField(
        null=True,
        blank=True,
        help_text='Optional date by which the annual amount must be settled.',
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['grade']
        verbose_name = 'Fee Schedule Entry'
        verbose_name_plural = 'Fee Schedule'
        constraints = [
            models.CheckConstraint(
                condition=Q(annual_amount__gte=0),
                name='fee_schedule_amount_non_negative',
            ),
        ]

    def __str__(self):
        return f"{self.grade} – {self.annual_amount}"


class StudentAccount(models.Model):
    """
    One tuition account per enrolled student.

    tuition_fee is a snapshot of the fee schedule at enrollment and never
    changes.  amount_due always equals tuition_fee minus the sum of the
    account's payments.  tuition_status is derived from amount_due and is
    recomputed whenever the balance moves.  version is bumped on every write
    and guards the balance against lost updates.
    """

    class TuitionStatus(models.TextChoices):
        PAID    = 'paid',    'Paid'
        PARTIAL = 'partial', 'Partial'
        OVERDUE = 'overdue', 'Overdue'

    student = models.OneToOneField(
        'accounts.StudentProfile',
        on_delete=models.PROTECT,
        related_name='account',
    )
    school_class = models.ForeignKey(
        'accounts.SchoolClass',
        on_delete=models.PROTECT,
        related_name='student_accounts',
        help_text='The class the student was enrolled into.',
    )
    grade_at_enrollment = models.CharField(max_length=50)
    tuition_fee = models.DecimalField(max_digits=12, decimal_places=2)
    amount_due = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text='Outstanding balance; zero or negative once paid off.',
    )
    tuition_status = models.CharField(
        max_length=20,
        choices=TuitionStatus.choices,
        default=TuitionStatus.PARTIAL,
    )
    due_date = models.DateField(
        null=True,
        blank=True,
        help_text='Snapshot of the fee schedule deadline at enrollment.',
    )
    version = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['school_class', 'student__last_name', 'student__first_name']
        verbose_name = 'Student Account'
        verbose_name_plural = 'Student Accounts'
        constraints = [
            models.CheckConstraint(
                condition=Q(tuition_fee__gte=0),
                name='student_account_fee_non_negative',
            ),
        ]

    def __str__(self):
        return f"{self.student.full_name}: {self.amount_due} due ({self.get_tuition_status_display()})"

    @classmethod
    def status_for(cls, amount_due):
        """Paid once nothing is left to pay, Partial otherwise."""
        return cls.TuitionStatus.PAID if amount_due <= 0 else cls.TuitionStatus.PARTIAL

    @property
    def total_paid(self):
        return self.tuition_fee - self.amount_due


class AppendOnlyModel(models.Model):
    """Rows can be inserted but never changed or removed."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise AppendOnlyViolation(f'{self._meta.verbose_name} #{self.pk} is append-only.')
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise AppendOnlyViolation(f'{self._meta.verbose_name} #{self.pk} is append-only.')


class JournalEntry(AppendOnlyModel):
    """
    A general-ledger line for the school: money in (revenue) or money out
    (expense).  Tuition revenue is only ever written by the payment service.
    """

    class Direction(models.TextChoices):
        REVENUE = 'revenue', 'Revenue'
        EXPENSE = 'expense', 'Expense'

    class Category(models.TextChoices):
        TUITION     = 'tuition',     'Tuition'
        DONATIONS   = 'donations',   'Donations'
        EVENTS      = 'events',      'Events'
        SALARIES    = 'salaries',    'Salaries'
        SUPPLIES    = 'supplies',    'Supplies'
        MAINTENANCE = 'maintenance', 'Maintenance'
        UTILITIES   = 'utilities',   'Utilities'
        OTHER       = 'other',       'Other'

    date = models.DateField(default=timezone.localdate)
    description = models.CharField(max_length=255)
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.OTHER,
    )
    direction = models.CharField(max_length=10, choices=Direction.choices)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='journal_entries',
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-date', '-id']
        verbose_name = 'Journal Entry'
        verbose_name_plural = 'Accounting Journal'
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name='journal_entry_amount_positive',
            ),
        ]

    def __str__(self):
        return f"{self.date} {self.get_direction_display()} {self.amount} – {self.description}"


class PaymentLedgerEntry(AppendOnlyModel):
    """
    Records a single tuition payment made towards a StudentAccount.
    """

    class Method(models.TextChoices):
        CASH          = 'cash',          'Cash'
        CHECK         = 'check',         'Check'
        BANK_TRANSFER = 'bank_transfer', 'Bank transfer'
        MOBILE_MONEY  = 'mobile_money',  'Mobile money'
        CARD          = 'card',          'Card'

    account = models.ForeignKey(
        StudentAccount,
        on_delete=models.PROTECT,
        related_name='payments',
    )
    date = models.DateField(default=timezone.localdate)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255)
    payer_name = models.CharField(max_length=200)
    payer_contact = models.CharField(max_length=100, blank=True)
    method = models.CharField(
        max_length=20,
        choices=Method.choices,
        default=Method.CASH,
    )
    # Back-reference to the revenue line written in the same commit.
    journal_entry = models.OneToOneField(
        JournalEntry,
        on_delete=models.PROTECT,
        related_name='payment',
    )
    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recorded_payments',
    )
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ['-date', '-id']
        verbose_name = 'Payment'
        verbose_name_plural = 'Payment Ledger'
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name='payment_ledger_amount_positive',
            ),
        ]

    def __str__(self):
        return f"{self.account.student.full_name} paid {self.amount} on {self.date} ({self.get_method_display()})"
