"""
communications/admin.py
────────────────────────
Admin for NotificationLog.
"""

from django.contrib import admin

from .models import NotificationLog


@admin.register(NotificationLog)
class NotificationLogAdmin(admin.ModelAdmin):
    list_display  = ('notification_type', 'channel', 'recipient', 'student', 'sent_at', 'success')
    list_filter   = ('notification_type', 'channel', 'success', 'sent_at')
    search_fields = ('recipient', 'student__last_name', 'student__matricule', 'subject')
    readonly_fields = ('sent_at',)

    fieldsets = (
        (None, {
            'fields': ('student', 'recipient', 'notification_type', 'channel'),
        }),
        ('Content', {
            'fields': ('subject', 'body_preview'),
        }),
        ('Result', {
            'fields': ('success', 'error_message', 'sent_at'),
        }),
    )
