# communications/management/commands/send_tuition_reminders.py
#
# Emails the parent of every active student who still owes tuition.

from django.core.management.base import BaseCommand

from communications.services import send_tuition_reminder
from finances.models import StudentAccount
from finances.services import outstanding_accounts


class Command(BaseCommand):
    help = 'Send tuition reminder emails for accounts with an outstanding balance'

    def add_arguments(self, parser):
        parser.add_argument(
            '--overdue-only',
            action='store_true',
            help='Only remind parents whose account is flagged Overdue.',
        )
        parser.add_argument(
            '--class',
            dest='class_id',
            type=int,
            help='Only remind parents of students in this class (id).',
        )

    def handle(self, *args, **options):
        status = StudentAccount.TuitionStatus.OVERDUE if options['overdue_only'] else None
        accounts, total_due = outstanding_accounts(class_id=options.get('class_id'), status=status)

        sent = failed = 0
        for account in accounts:
            if send_tuition_reminder(account):
                sent += 1
            else:
                failed += 1

        self.stdout.write(
            f'Outstanding balance across {sent + failed} account(s): {total_due}'
        )
        style = self.style.SUCCESS if not failed else self.style.WARNING
        self.stdout.write(style(f'{sent} reminder(s) sent, {failed} failed.'))
