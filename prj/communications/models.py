"""
communications/models.py
─────────────────────────
Models for outbound communication tracking.

NotificationLog – records every payment confirmation / tuition reminder
                  sent to a parent, so staff can see when reminders were
                  dispatched and which ones bounced.
"""

from django.db import models
from django.utils import timezone


class NotificationLog(models.Model):
    """
    Tracks outbound notifications sent by the system.

    This gives the bursar a full audit trail:
    "Reminder email sent to the parent of X on Tuesday."
    """

    class NotificationType(models.TextChoices):
        PAYMENT_CONFIRMATION = 'payment_confirmation', 'Payment Confirmation'
        TUITION_REMINDER     = 'tuition_reminder',     'Tuition Reminder'

    class Channel(models.TextChoices):
        EMAIL = 'email', 'Email'
        SMS   = 'sms',   'SMS'

    student = models.ForeignKey(
        'accounts.StudentProfile',
        on_delete=models.SET_NULL,
        null=True,
        related_name='notifications',
        help_text='The student this notification is about.',
    )
    recipient = models.CharField(
        max_length=254,
        blank=True,
        help_text='Address (email or phone) the notification was sent to.',
    )
    notification_type = models.CharField(
        max_length=30,
        choices=NotificationType.choices,
        default=NotificationType.TUITION_REMINDER,
    )
    channel = models.CharField(
        max_length=10,
        choices=Channel.choices,
        default=Channel.EMAIL,
    )
    subject = models.CharField(
        max_length=255,
        blank=True,
        help_text='Email subject line or SMS header.',
    )
    body_preview = models.TextField(
        blank=True,
        help_text='First 500 characters of the message body (for the audit log).',
    )
    sent_at = models.DateTimeField(default=timezone.now)
    success = models.BooleanField(
        default=True,
        help_text='False if the send attempt failed (e.g. no address, SMTP error).',
    )
    error_message = models.TextField(
        blank=True,
        help_text='Error details if success=False.',
    )

    class Meta:
        ordering = ['-sent_at']
        verbose_name = 'Notification Log'
        verbose_name_plural = 'Notification Logs'

    def __str__(self):
        recipient_label = self.recipient or 'unknown'
        return (
            f"[{self.get_notification_type_display()}] "
            f"→ {recipient_label} "
            f"({self.sent_at.strftime('%Y-%m-%d %H:%M')})"
        )
