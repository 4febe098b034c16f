# communications/migrations/0001_initial.py
#
# Audit trail of payment confirmations and tuition reminders.

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='NotificationLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('recipient', models.CharField(
                    blank=True,
                    help_text='Address (email or phone) the notification was sent to.',
                    max_length=254,
                )),
                ('notification_type', models.CharField(
                    choices=[
                        ('payment_confirmation', 'Payment Confirmation'),
                        ('tuition_reminder', 'Tuition Reminder'),
                    ],
                    default='tuition_reminder',
                    max_length=30,
                )),
                ('channel', models.CharField(
                    choices=[('email', 'Email'), ('sms', 'SMS')],
                    default='email',
                    max_length=10,
                )),
                ('subject', models.CharField(
                    blank=True,
                    help_text='Email subject line or SMS header.',
                    max_length=255,
                )),
                ('body_preview', models.TextField(
                    blank=True,
                    help_text='First 500 characters of the message body (for the audit log).',
                )),
                ('sent_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('success', models.BooleanField(
                    default=True,
                    help_text='False if the send attempt failed (e.g. no address, SMTP error).',
                )),
                ('error_message', models.TextField(
                    blank=True,
                    help_text='Error details if success=False.',
                )),
                ('student', models.ForeignKey(
                    help_text='The student this notification is about.',
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='notifications',
                    to='accounts.studentprofile',
                )),
            ],
            options={
                'verbose_name': 'Notification Log',
                'verbose_name_plural': 'Notification Logs',
                'ordering': ['-sent_at'],
            },
        ),
    ]
