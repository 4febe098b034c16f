"""
finances/services/journal.py
────────────────────────────
Manual accounting-journal lines (donations, event income, supplies,
salaries…).  Tuition revenue is reserved for the payment service so that
every tuition line has its payment-ledger twin.
"""

import logging

from ..exceptions import InvalidArgument
from ..models import JournalEntry
from .utils import check_billing_rights, check_length, clean_date, to_amount

logger = logging.getLogger(__name__)


def record_journal_entry(date, description, category, direction, amount, actor=None):
    """Append one revenue or expense line.  Returns the JournalEntry."""
    check_billing_rights(actor)
    if category not in JournalEntry.Category.values:
        raise InvalidArgument(f'Unknown journal category {category!r}.')
    if category == JournalEntry.Category.TUITION:
        raise InvalidArgument('Tuition revenue is recorded through a student payment.')
    if direction not in JournalEntry.Direction.values:
        raise InvalidArgument(f'Unknown journal direction {direction!r}.')
    amount = to_amount(amount)
    if amount <= 0:
        raise InvalidArgument(f'Journal amount must be positive, got {amount}.')
    description = (description or '').strip()
    if not description:
        raise InvalidArgument('description is required.')
    check_length(description, JournalEntry, 'description')

    entry = JournalEntry.objects.create(
        date=clean_date(date),
        description=description,
        category=category,
        direction=direction,
        amount=amount,
        recorded_by=actor,
    )
    logger.info(f"Journal #{entry.pk}: {direction} {amount} ({category}) – {description}")
    return entry
