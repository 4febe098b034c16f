from decimal import Decimal
from unittest.mock import patch

import pytest
from django.urls import reverse

from accounts.models import StudentProfile
from communications.services import notify_payment_recorded
from finances.models import FeeScheduleEntry, PaymentLedgerEntry, StudentAccount
from finances.services import payments, record_payment

pytestmark = pytest.mark.django_db


def _payment_url(student_id):
    return reverse('record_payment', args=[student_id])


def _enrollment_data(class_id, **overrides):
    data = {
        'first_name': 'Awa',
        'last_name': 'Koné',
        'matricule': 'M-0001',
        'date_of_birth': '2013-04-02',
        'parent_first_name': 'Moussa',
        'parent_last_name': 'Koné',
        'parent_contact': '+225 07 00 00 00',
        'parent_email': 'moussa.kone@example.org',
        'class_id': class_id,
    }
    data.update(overrides)
    return data


# ── Access control ────────────────────────────────────────────────────────────

@pytest.mark.parametrize('name', ['fee_schedule', 'enroll', 'journal_entry', 'outstanding', 'class_summary'])
def test_anonymous_gets_401(client, name):
    response = client.get(reverse(name))
    assert response.status_code == 401
    assert response.json()['error'] == 'not_authenticated'


def test_parent_gets_403(client, parent_user, class_6a):
    client.force_login(parent_user)
    response = client.post(reverse('enroll'), _enrollment_data(class_6a.pk))
    assert response.status_code == 403
    assert response.json()['error'] == 'permission_denied'
    assert not StudentProfile.objects.exists()


def test_write_endpoints_reject_get(staff_client):
    assert staff_client.get(reverse('enroll')).status_code == 405
    assert staff_client.get(_payment_url(1)).status_code == 405


# ── Fee schedule ──────────────────────────────────────────────────────────────

def test_fee_schedule_round_trip(staff_client):
    response = staff_client.post(reverse('fee_schedule'), {
        'grade': 'CM2', 'annual_amount': '85000', 'payment_deadline': '2026-02-28',
    })
    assert response.status_code == 200
    assert response.json() == {
        'grade': 'CM2',
        'annual_amount': '85000.00',
        'installment_plan': '',
        'payment_deadline': '2026-02-28',
    }

    fees = staff_client.get(reverse('fee_schedule')).json()['fees']
    assert [f['grade'] for f in fees] == ['CM2']


def test_fee_form_errors_are_400(staff_client):
    response = staff_client.post(reverse('fee_schedule'), {'grade': 'CM2', 'annual_amount': 'lots'})
    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'invalid_argument'
    assert 'annual_amount' in body['fields']


def test_negative_fee_is_400(staff_client):
    response = staff_client.post(reverse('fee_schedule'), {'grade': 'CM2', 'annual_amount': '-5'})
    assert response.status_code == 400
    assert not FeeScheduleEntry.objects.exists()


def test_fee_delete_is_idempotent(staff_client, fee_6e):
    url = reverse('delete_fee', args=['6e'])
    assert staff_client.post(url).json() == {'grade': '6e', 'deleted': True}
    assert staff_client.post(url).json() == {'grade': '6e', 'deleted': False}


# ── Enrollment ────────────────────────────────────────────────────────────────

def test_enroll(staff_client, class_6a):
    response = staff_client.post(reverse('enroll'), _enrollment_data(class_6a.pk))

    assert response.status_code == 201
    body = response.json()
    assert body['matricule'] == 'M-0001'
    assert body['class_id'] == class_6a.pk
    assert body['tuition_fee'] == '100000.00'
    assert body['amount_due'] == '100000.00'
    assert body['tuition_status'] == 'partial'
    assert StudentProfile.objects.get(pk=body['student_id']).date_of_birth.isoformat() == '2013-04-02'


def test_enroll_duplicate_is_409(staff_client, class_6a):
    staff_client.post(reverse('enroll'), _enrollment_data(class_6a.pk))
    response = staff_client.post(reverse('enroll'), _enrollment_data(class_6a.pk, first_name='Other'))

    assert response.status_code == 409
    assert response.json()['error'] == 'already_enrolled'
    class_6a.refresh_from_db()
    assert class_6a.enrolled_count == 1


def test_enroll_unknown_class_is_404(staff_client, db):
    response = staff_client.post(reverse('enroll'), _enrollment_data(777))
    assert response.status_code == 404
    assert response.json()['error'] == 'not_found'


def test_enroll_missing_fields_is_400(staff_client, class_6a):
    response = staff_client.post(reverse('enroll'), _enrollment_data(class_6a.pk, last_name=''))
    assert response.status_code == 400
    assert 'last_name' in response.json()['fields']


# ── Payments ──────────────────────────────────────────────────────────────────

def test_record_payment(staff_client, staff_user, enroll_student):
    sid = enroll_student().student_id

    response = staff_client.post(_payment_url(sid), {
        'amount': '30000',
        'date': '2025-10-01',
        'payer_name': 'Moussa Koné',
        'payer_contact': '+225 07 00 00 00',
        'method': 'cash',
    })

    assert response.status_code == 201
    body = response.json()
    assert body['student_id'] == sid
    assert body['new_balance'] == '70000.00'
    assert body['new_status'] == 'partial'
    payment = PaymentLedgerEntry.objects.get(pk=body['payment_entry_id'])
    assert payment.journal_entry_id == body['accounting_entry_id']
    assert payment.recorded_by == staff_user


@pytest.mark.parametrize('data', [
    {'amount': '0', 'payer_name': 'Moussa', 'method': 'cash'},
    {'amount': '-10', 'payer_name': 'Moussa', 'method': 'cash'},
    {'amount': '100', 'payer_name': '', 'method': 'cash'},
    {'amount': '100', 'payer_name': 'Moussa', 'method': 'barter'},
])
def test_invalid_payment_is_400(staff_client, enroll_student, data):
    sid = enroll_student().student_id
    response = staff_client.post(_payment_url(sid), data)

    assert response.status_code == 400
    assert response.json()['error'] == 'invalid_argument'
    assert StudentAccount.objects.get(student_id=sid).amount_due == Decimal('100000.00')


def test_payment_for_unknown_student_is_404(staff_client, db):
    response = staff_client.post(_payment_url(4040), {'amount': '100', 'payer_name': 'X', 'method': 'cash'})
    assert response.status_code == 404


def test_payment_view_retries_a_lost_race(staff_client, enroll_student):
    sid = enroll_student().student_id
    real_read = payments._read_account
    raced = []

    def read(student_id):
        snapshot = real_read(student_id)
        if not raced:
            raced.append(True)
            with patch.object(payments, '_read_account', real_read):
                record_payment(student_id, 10000, payer='Rival cashier')
        return snapshot

    with patch.object(payments, '_read_account', side_effect=read):
        response = staff_client.post(_payment_url(sid), {
            'amount': '10000', 'payer_name': 'Moussa Koné', 'method': 'cash',
        })

    assert response.status_code == 201
    assert response.json()['new_balance'] == '80000.00'
    assert PaymentLedgerEntry.objects.count() == 2


def test_exhausted_retries_are_409(staff_client, enroll_student, settings):
    settings.BILLING_WRITE_RETRIES = 1
    sid = enroll_student().student_id
    real_read = payments._read_account

    def read(student_id):
        snapshot = real_read(student_id)
        with patch.object(payments, '_read_account', real_read):
            record_payment(student_id, 10000, payer='Rival cashier')
        return snapshot

    with patch.object(payments, '_read_account', side_effect=read):
        response = staff_client.post(_payment_url(sid), {
            'amount': '10000', 'payer_name': 'Moussa Koné', 'method': 'cash',
        })

    assert response.status_code == 409
    assert response.json()['error'] == 'write_conflict'


# ── Journal and reports ───────────────────────────────────────────────────────

def test_manual_journal_entry(staff_client):
    response = staff_client.post(reverse('journal_entry'), {
        'description': 'PTA donation', 'category': 'donations',
        'direction': 'revenue', 'amount': '150000',
    })
    assert response.status_code == 201
    assert response.json()['amount'] == '150000.00'


def test_tuition_journal_entry_is_400(staff_client):
    response = staff_client.post(reverse('journal_entry'), {
        'description': 'Fake tuition', 'category': 'tuition',
        'direction': 'revenue', 'amount': '1000',
    })
    assert response.status_code == 400


def test_statement_and_reports(staff_client, enroll_student):
    sid = enroll_student().student_id
    enroll_student(matricule='M-0002', first_name='Fatou')
    record_payment(sid, 40000, payer='Moussa Koné')

    statement = staff_client.get(reverse('account_statement', args=[sid])).json()
    assert statement['amount_due'] == '60000.00'
    assert len(statement['payments']) == 1

    outstanding = staff_client.get(reverse('outstanding'), {'status': 'partial'}).json()
    assert outstanding['total_due'] == '160000.00'
    assert len(outstanding['accounts']) == 2

    summary = staff_client.get(reverse('class_summary')).json()
    assert summary['recovery_rate'] == '20.00'
    assert summary['classes'][0]['total_collected'] == '40000.00'

    assert staff_client.get(reverse('account_statement', args=[999])).status_code == 404


def test_notification_log(staff_client, enroll_student):
    student = enroll_student(parent_email='').student
    notify_payment_recorded(student.pk, Decimal('1'), 'partial')

    response = staff_client.get(reverse('notification_log'), {'student': student.pk})
    notifications = response.json()['notifications']
    assert len(notifications) == 1
    assert notifications[0]['success'] is False
