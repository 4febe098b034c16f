# finances/management/commands/flag_overdue_accounts.py
#
# Run daily (cron / scheduler): moves outstanding accounts past their
# payment deadline to Overdue.

from django.core.management.base import BaseCommand, CommandError
from django.utils.dateparse import parse_date

from finances.services import flag_overdue_accounts


class Command(BaseCommand):
    help = 'Mark tuition accounts with an outstanding balance past their due date as Overdue'

    def add_arguments(self, parser):
        parser.add_argument(
            '--date',
            help='Treat this day (YYYY-MM-DD) as today instead of the current date.',
        )

    def handle(self, *args, **options):
        today = None
        if options.get('date'):
            try:
                today = parse_date(options['date'])
            except ValueError:
                today = None
            if today is None:
                raise CommandError(f"Invalid --date {options['date']!r}; expected YYYY-MM-DD.")

        flagged = flag_overdue_accounts(today=today)
        self.stdout.write(self.style.SUCCESS(f'{flagged} account(s) flagged as overdue.'))
