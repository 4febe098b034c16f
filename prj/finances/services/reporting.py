"""
finances/services/reporting.py
──────────────────────────────
Read-only tuition figures for dashboards and reminders.
"""

from decimal import Decimal

from django.db.models import Count, Q, Sum

from accounts.models import SchoolClass

from ..exceptions import NotFound
from ..models import StudentAccount
from .utils import CENT

ZERO = Decimal('0.00')


def _money(value):
    # SQLite returns decimal sums without their scale.
    return (value or ZERO).quantize(CENT)


def account_statement(student_id):
    """
    The student's account plus its full payment history, newest first.
    """
    account = (
        StudentAccount.objects
        .select_related('student', 'school_class')
        .filter(student_id=student_id)
        .first()
    )
    if account is None:
        raise NotFound(f'No tuition account for student {student_id!r}.')

    payments = account.payments.select_related('journal_entry').order_by('-date', '-id')
    return {
        'student_id':          account.student_id,
        'student_name':        account.student.full_name,
        'matricule':           account.student.matricule,
        'class_name':          account.school_class.name,
        'grade_at_enrollment': account.grade_at_enrollment,
        'tuition_fee':         account.tuition_fee,
        'amount_due':          account.amount_due,
        'total_paid':          account.total_paid,
        'tuition_status':      account.tuition_status,
        'due_date':            account.due_date,
        'payments': [
            {
                'id':                  p.pk,
                'date':                p.date,
                'amount':              p.amount,
                'description':         p.description,
                'payer_name':          p.payer_name,
                'payer_contact':       p.payer_contact,
                'method':              p.method,
                'accounting_entry_id': p.journal_entry_id,
            }
            for p in payments
        ],
    }


def outstanding_accounts(class_id=None, status=None):
    """
    Accounts of active students that still owe money, optionally narrowed to
    one class and/or one tuition status.  Returns (queryset, total_due).
    """
    qs = (
        StudentAccount.objects
        .select_related('student', 'school_class')
        .filter(amount_due__gt=0, student__is_active=True)
    )
    if class_id is not None:
        qs = qs.filter(school_class_id=class_id)
    if status:
        qs = qs.filter(tuition_status=status)
    total_due = _money(qs.aggregate(s=Sum('amount_due'))['s'])
    return qs, total_due


def tuition_summary_by_class():
    """
    Per class: students billed, total billed, total outstanding, total
    collected.  Only active students count.
    """
    active = Q(student_accounts__student__is_active=True)
    rows = (
        SchoolClass.objects
        .annotate(
            billed_students=Count('student_accounts', filter=active),
            total_billed=Sum('student_accounts__tuition_fee', filter=active),
            total_due=Sum('student_accounts__amount_due', filter=active),
        )
        .order_by('name')
    )
    summary = []
    for row in rows:
        billed = _money(row.total_billed)
        due    = _money(row.total_due)
        summary.append({
            'class_id':        row.pk,
            'class_name':      row.name,
            'grade':           row.grade,
            'enrolled_count':  row.enrolled_count,
            'billed_students': row.billed_students,
            'total_billed':    billed,
            'total_due':       due,
            'total_collected': billed - due,
        })
    return summary


def recovery_rate():
    """
    Share of billed tuition already collected across active students, as a
    percentage rounded to two decimals.  0 when nothing is billed.
    """
    totals = (
        StudentAccount.objects
        .filter(student__is_active=True)
        .aggregate(billed=Sum('tuition_fee'), due=Sum('amount_due'))
    )
    billed = _money(totals['billed'])
    if billed <= 0:
        return ZERO
    due = _money(totals['due'])
    return ((billed - due) / billed * 100).quantize(CENT)
