"""
communications/services.py
──────────────────────────
Service functions for telling parents about their child's tuition.

These are called by the payment service (after a payment commits) and by
management commands, keeping all "talk to the outside world" logic in one
place.

Functions
─────────
notify_payment_recorded(student_id, new_balance, new_status)
    Email the parent a confirmation with the balance left after a payment.

send_tuition_reminder(account)
    Email the parent a reminder of the outstanding balance.
"""

import logging

from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils import timezone

from .models import NotificationLog

logger = logging.getLogger(__name__)


def _log(student, recipient, notification_type, subject, body,
         success=True, error=''):
    """Internal helper to persist a NotificationLog entry."""
    NotificationLog.objects.create(
        student=student,
        recipient=recipient,
        notification_type=notification_type,
        channel=NotificationLog.Channel.EMAIL,
        subject=subject,
        body_preview=body[:500],
        sent_at=timezone.now(),
        success=success,
        error_message=error,
    )


def _send(student, notification_type, subject, template, context):
    body = render_to_string(template, context)
    recipient = student.parent_email

    if not recipient:
        _log(student, '', notification_type, subject, body,
             success=False, error='No parent email on file.')
        return False

    try:
        send_mail(
            subject=subject,
            message=body,
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[recipient],
            fail_silently=False,
        )
        _log(student, recipient, notification_type, subject, body)
        return True
    except Exception as exc:
        logger.warning(f"{notification_type} email to {recipient} failed: {exc}")
        _log(student, recipient, notification_type, subject, body,
             success=False, error=str(exc))
        return False


def notify_payment_recorded(student_id, new_balance, new_status):
    """
    Send a payment confirmation to the parent of *student_id*.
    Returns True on success, False on failure.
    """
    from accounts.models import StudentProfile

    student = StudentProfile.objects.filter(pk=student_id).first()
    if student is None:
        logger.warning(f"Payment confirmation skipped: student {student_id} not found")
        return False

    subject = f'Payment received for {student.full_name}'
    context = {
        'student':     student,
        'new_balance': new_balance,
        'new_status':  new_status,
        'school_name': settings.SCHOOL_NAME,
        'currency':    settings.BILLING_CURRENCY_LABEL,
    }
    return _send(
        student,
        NotificationLog.NotificationType.PAYMENT_CONFIRMATION,
        subject,
        'communications/email/payment_confirmation.txt',
        context,
    )


def send_tuition_reminder(account):
    """
    Send a reminder about the outstanding balance of *account*
    (a finances.StudentAccount).  Returns True on success, False on failure.
    """
    student = account.student
    subject = f'Tuition reminder: {student.full_name}'
    context = {
        'student':     student,
        'account':     account,
        'school_name': settings.SCHOOL_NAME,
        'currency':    settings.BILLING_CURRENCY_LABEL,
    }
    return _send(
        student,
        NotificationLog.NotificationType.TUITION_REMINDER,
        subject,
        'communications/email/tuition_reminder.txt',
        context,
    )
