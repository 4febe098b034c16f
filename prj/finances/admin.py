"""
finances/admin.py
─────────────────
Admin registrations for the fee schedule, student accounts, accounting
journal and payment ledger.

Balances, journal lines and payments are read-only here: they only change
through the enrollment and payment services.
"""

from django.contrib import admin

from .models import FeeScheduleEntry, JournalEntry, PaymentLedgerEntry, StudentAccount


class ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(FeeScheduleEntry)
class FeeScheduleEntryAdmin(admin.ModelAdmin):
    list_display  = ('grade', 'annual_amount', 'installment_plan', 'payment_deadline', 'updated_at')
    search_fields = ('grade',)


@admin.register(StudentAccount)
class StudentAccountAdmin(ReadOnlyAdmin):
    list_display  = ('student', 'school_class', 'tuition_fee', 'amount_due', 'tuition_status', 'due_date')
    list_filter   = ('tuition_status', 'school_class')
    search_fields = ('student__matricule', 'student__first_name', 'student__last_name')


@admin.register(JournalEntry)
class JournalEntryAdmin(ReadOnlyAdmin):
    list_display  = ('date', 'direction', 'category', 'amount', 'description', 'recorded_by')
    list_filter   = ('direction', 'category', 'date')
    search_fields = ('description',)


@admin.register(PaymentLedgerEntry)
class PaymentLedgerEntryAdmin(ReadOnlyAdmin):
    list_display  = ('date', 'account', 'amount', 'method', 'payer_name', 'journal_entry')
    list_filter   = ('method', 'date')
    search_fields = ('account__student__matricule', 'account__student__last_name', 'payer_name')
