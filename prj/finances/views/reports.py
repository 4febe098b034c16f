"""
finances/views/reports.py
─────────────────────────
Staff-only read endpoints: a student's statement, the outstanding-balance
list and the per-class tuition summary.
"""

from django.http import JsonResponse

from .. import services
from ..models import StudentAccount
from .utils import billing_errors, billing_staff_required


@billing_staff_required
@billing_errors
def account_statement_view(req, student_id):
    return JsonResponse(services.account_statement(student_id))


@billing_staff_required
def outstanding_view(req):
    """
    Students who still owe tuition.  Optional filters:
    ?class=<class id>  ?status=partial|overdue
    """
    class_id = req.GET.get('class')
    status   = req.GET.get('status')
    if class_id and not class_id.isdigit():
        class_id = None
    if status not in StudentAccount.TuitionStatus.values:
        status = None

    accounts, total_due = services.outstanding_accounts(
        class_id=int(class_id) if class_id else None,
        status=status,
    )
    return JsonResponse({
        'total_due': total_due,
        'accounts': [
            {
                'student_id':     a.student_id,
                'student_name':   a.student.full_name,
                'class_name':     a.school_class.name,
                'tuition_fee':    a.tuition_fee,
                'amount_due':     a.amount_due,
                'tuition_status': a.tuition_status,
                'due_date':       a.due_date,
            }
            for a in accounts
        ],
    })


@billing_staff_required
def class_summary_view(req):
    return JsonResponse({
        'classes':       services.tuition_summary_by_class(),
        'recovery_rate': services.recovery_rate(),
    })
