"""
communications/views.py
────────────────────────
Staff-only JSON view of the notification log.
"""

from django.http import JsonResponse

from finances.views.utils import billing_staff_required

from .models import NotificationLog


@billing_staff_required
def notification_log_view(req):
    """Most recent notifications first, optionally for one student."""
    logs = NotificationLog.objects.select_related('student')
    student_id = req.GET.get('student')
    if student_id and student_id.isdigit():
        logs = logs.filter(student_id=student_id)
    data = [
        {
            'id':                log.pk,
            'student_id':        log.student_id,
            'recipient':         log.recipient,
            'notification_type': log.notification_type,
            'channel':           log.channel,
            'subject':           log.subject,
            'sent_at':           log.sent_at,
            'success':           log.success,
            'error_message':     log.error_message,
        }
        for log in logs[:200]
    ]
    return JsonResponse({'notifications': data})
