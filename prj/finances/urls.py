"""
finances/urls.py
────────────────
URL patterns for the billing endpoints (staff only, JSON).
Include in the root urls.py with:
    path('billing/', include('finances.urls')),
"""

from django.urls import path

from . import views

urlpatterns = [
    # Fee schedule
    path('fees/',                     views.fee_schedule_view,      name='fee_schedule'),
    path('fees/<str:grade>/delete/',  views.delete_fee_view,        name='delete_fee'),

    # Enrollment & payments
    path('enroll/',                              views.enroll_view,            name='enroll'),
    path('students/<int:student_id>/',           views.account_statement_view, name='account_statement'),
    path('students/<int:student_id>/payments/',  views.record_payment_view,    name='record_payment'),

    # Accounting journal
    path('journal/',                  views.journal_entry_view,     name='journal_entry'),

    # Reports
    path('outstanding/',              views.outstanding_view,       name='outstanding'),
    path('summary/',                  views.class_summary_view,     name='class_summary'),
]
