"""
finances/forms.py
─────────────────
Input forms for the billing JSON views.  They only coerce and shape the
posted data; business rules (positive amounts, duplicate matricules,
reserved categories) are enforced by the services.
"""

from django import forms

from accounts.models import StudentProfile

from .models import JournalEntry, PaymentLedgerEntry
from .services.enrollment import PROFILE_FIELDS


class FeeEntryForm(forms.Form):
    """Create or replace the tuition fee of one grade."""

    grade = forms.CharField(max_length=50)
    annual_amount = forms.DecimalField(max_digits=12, decimal_places=2)
    installment_plan = forms.CharField(max_length=200, required=False)
    payment_deadline = forms.DateField(required=False, input_formats=['%Y-%m-%d'])


class EnrollmentForm(forms.ModelForm):
    """
    Registration form: the student profile plus the class to enroll into.
    """

    class_id = forms.IntegerField(min_value=1)

    class Meta:
        model  = StudentProfile
        fields = list(PROFILE_FIELDS)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['date_of_birth'].input_formats = ['%Y-%m-%d']

    def validate_unique(self):
        # Duplicate matricules are reported by the enrollment service.
        pass

    def profile_data(self):
        return {field: self.cleaned_data.get(field) for field in PROFILE_FIELDS}


class PaymentForm(forms.Form):
    """Payment dialog: amount, date, payer identity and method."""

    amount = forms.DecimalField(max_digits=12, decimal_places=2)
    date = forms.DateField(required=False, input_formats=['%Y-%m-%d'])
    description = forms.CharField(max_length=255, required=False)
    payer_name = forms.CharField(max_length=200, required=False)
    payer_contact = forms.CharField(max_length=100, required=False)
    method = forms.ChoiceField(
        choices=PaymentLedgerEntry.Method.choices,
        initial=PaymentLedgerEntry.Method.CASH,
    )


class JournalEntryForm(forms.ModelForm):
    """Manual revenue / expense line for the accounting journal."""

    class Meta:
        model  = JournalEntry
        fields = ['date', 'description', 'category', 'direction', 'amount']

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['date'].required = False
        self.fields['date'].input_formats = ['%Y-%m-%d']
