"""
finances/services/
──────────────────
Split into sub-modules for clarity:
  utils.py        – shared helpers (permission check, amount/date cleaning)
  fee_schedule.py – fee schedule CRUD and lookup
  enrollment.py   – student registration + tuition account opening
  payments.py     – payment reconciliation and the overdue sweep
  journal.py      – manual accounting-journal lines
  reporting.py    – statements, outstanding balances, per-class totals
"""
from .enrollment import enroll
from .fee_schedule import (
    delete_fee_entry,
    get_fee_entry,
    list_fee_entries,
    lookup_fee,
    upsert_fee_entry,
)
from .journal import record_journal_entry
from .payments import (
    Payer,
    PaymentResult,
    flag_overdue_accounts,
    record_online_payment,
    record_payment,
)
from .reporting import (
    account_statement,
    outstanding_accounts,
    recovery_rate,
    tuition_summary_by_class,
)

__all__ = [
    # fee schedule
    'upsert_fee_entry',
    'delete_fee_entry',
    'lookup_fee',
    'get_fee_entry',
    'list_fee_entries',
    # enrollment
    'enroll',
    # payments
    'Payer',
    'PaymentResult',
    'record_payment',
    'record_online_payment',
    'flag_overdue_accounts',
    # journal
    'record_journal_entry',
    # reporting
    'account_statement',
    'outstanding_accounts',
    'tuition_summary_by_class',
    'recovery_rate',
]
