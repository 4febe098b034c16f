"""
finances/views/
───────────────
Split into sub-modules for clarity:
  utils.py   – shared helpers (decorators, JSON errors, retry policy)
  billing.py – fee schedule, enrollment, payments, journal lines
  reports.py – statements, outstanding balances, class summary
"""
from .billing import (
    delete_fee_view,
    enroll_view,
    fee_schedule_view,
    journal_entry_view,
    record_payment_view,
)
from .reports import (
    account_statement_view,
    class_summary_view,
    outstanding_view,
)

__all__ = [
    # billing
    'fee_schedule_view',
    'delete_fee_view',
    'enroll_view',
    'record_payment_view',
    'journal_entry_view',
    # reports
    'account_statement_view',
    'outstanding_view',
    'class_summary_view',
]
