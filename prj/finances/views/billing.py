"""
finances/views/billing.py
─────────────────────────
Staff-only write endpoints: fee schedule, enrollment, payments and manual
journal lines.  Every view answers JSON; errors come back as
{"error": <kind>, "detail": <message>} with the status of their kind.
"""

from django.http import JsonResponse

from .. import services
from ..forms import EnrollmentForm, FeeEntryForm, JournalEntryForm, PaymentForm
from .utils import (
    billing_errors,
    billing_staff_required,
    call_with_retry,
    form_error_response,
    require_POST_or_405,
)


def _fee_entry_json(entry):
    return {
        'grade':            entry.grade,
        'annual_amount':    entry.annual_amount,
        'installment_plan': entry.installment_plan,
        'payment_deadline': entry.payment_deadline,
    }


# ── Fee schedule ──────────────────────────────────────────────────────────────

@billing_staff_required
@billing_errors
def fee_schedule_view(req):
    """GET: the whole schedule.  POST: create or replace one grade's fee."""
    if req.method == 'POST':
        form = FeeEntryForm(req.POST)
        if not form.is_valid():
            return form_error_response(form)
        cd = form.cleaned_data
        entry = services.upsert_fee_entry(
            cd['grade'],
            cd['annual_amount'],
            plan=cd.get('installment_plan', ''),
            payment_deadline=cd.get('payment_deadline'),
            actor=req.user,
        )
        return JsonResponse(_fee_entry_json(entry))

    return JsonResponse({
        'fees': [_fee_entry_json(entry) for entry in services.list_fee_entries()],
    })


@billing_staff_required
@require_POST_or_405
@billing_errors
def delete_fee_view(req, grade):
    deleted = services.delete_fee_entry(grade, actor=req.user)
    return JsonResponse({'grade': grade, 'deleted': deleted})


# ── Enrollment ────────────────────────────────────────────────────────────────

@billing_staff_required
@require_POST_or_405
@billing_errors
def enroll_view(req):
    form = EnrollmentForm(req.POST)
    if not form.is_valid():
        return form_error_response(form)

    account = services.enroll(
        form.profile_data(),
        form.cleaned_data['class_id'],
        actor=req.user,
    )
    return JsonResponse(
        {
            'student_id':     account.student_id,
            'matricule':      account.student.matricule,
            'class_id':       account.school_class_id,
            'tuition_fee':    account.tuition_fee,
            'amount_due':     account.amount_due,
            'tuition_status': account.tuition_status,
            'due_date':       account.due_date,
        },
        status=201,
    )


# ── Payments ──────────────────────────────────────────────────────────────────

@billing_staff_required
@require_POST_or_405
@billing_errors
def record_payment_view(req, student_id):
    """
    Record a payment and return the receipt payload.  A write conflict is
    retried by re-running the whole payment, never by replaying its writes.
    """
    form = PaymentForm(req.POST)
    if not form.is_valid():
        return form_error_response(form)

    cd = form.cleaned_data
    result = call_with_retry(
        services.record_payment,
        student_id,
        cd['amount'],
        date=cd.get('date'),
        description=cd.get('description', ''),
        payer=services.Payer(name=cd.get('payer_name', ''), contact=cd.get('payer_contact', '')),
        method=cd['method'],
        actor=req.user,
    )
    return JsonResponse(result.as_dict(), status=201)


# ── Accounting journal ────────────────────────────────────────────────────────

@billing_staff_required
@require_POST_or_405
@billing_errors
def journal_entry_view(req):
    form = JournalEntryForm(req.POST)
    if not form.is_valid():
        return form_error_response(form)

    cd = form.cleaned_data
    entry = services.record_journal_entry(
        cd.get('date'),
        cd['description'],
        cd['category'],
        cd['direction'],
        cd['amount'],
        actor=req.user,
    )
    return JsonResponse(
        {
            'id':          entry.pk,
            'date':        entry.date,
            'description': entry.description,
            'category':    entry.category,
            'direction':   entry.direction,
            'amount':      entry.amount,
        },
        status=201,
    )
