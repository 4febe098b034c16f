from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from accounts.models import SchoolClass, StudentProfile
from finances.exceptions import (
    AlreadyEnrolled,
    InvalidArgument,
    NotFound,
    PermissionDenied,
    WriteConflict,
)
from finances.models import StudentAccount
from finances.services import delete_fee_entry, enroll, upsert_fee_entry

from .conftest import profile

pytestmark = pytest.mark.django_db


def test_enrollment_bills_the_grade_fee(class_6a):
    account = enroll(profile(), class_6a.pk)

    assert account.tuition_fee == Decimal('100000.00')
    assert account.amount_due == Decimal('100000.00')
    assert account.tuition_status == StudentAccount.TuitionStatus.PARTIAL
    assert account.grade_at_enrollment == '6e'
    assert account.school_class == class_6a
    assert account.student.school_class == class_6a
    assert account.student.matricule == 'M-0001'

    class_6a.refresh_from_db()
    assert class_6a.enrolled_count == 1


def test_enrollment_copies_the_payment_deadline(make_class, deadline):
    school_class = make_class('5e B', '5e', 90000, payment_deadline=deadline)
    account = enroll(profile(), school_class.pk)
    assert account.due_date == deadline


def test_unpriced_grade_is_billed_nothing(make_class):
    school_class = make_class('Terminale A', 'Terminale')

    account = enroll(profile(), school_class.pk)

    assert account.tuition_fee == Decimal('0.00')
    assert account.amount_due == Decimal('0.00')
    assert account.tuition_status == StudentAccount.TuitionStatus.PAID


def test_each_enrollment_bumps_the_headcount(enroll_student, class_6a):
    for n in range(3):
        enroll_student(matricule=f'M-{n}')
    class_6a.refresh_from_db()
    assert class_6a.enrolled_count == 3


def test_duplicate_matricule_is_rejected(enroll_student, class_6a):
    enroll_student(matricule='M-42')

    with pytest.raises(AlreadyEnrolled):
        enroll_student(matricule='M-42', first_name='Other')

    class_6a.refresh_from_db()
    assert class_6a.enrolled_count == 1
    assert StudentProfile.objects.count() == 1
    assert StudentAccount.objects.count() == 1


def test_unknown_class(db):
    with pytest.raises(NotFound):
        enroll(profile(), 9999)
    assert not StudentProfile.objects.exists()


@pytest.mark.parametrize('missing', ['first_name', 'last_name', 'matricule'])
def test_missing_required_field(class_6a, missing):
    with pytest.raises(InvalidArgument):
        enroll(profile(**{missing: ''}), class_6a.pk)
    assert not StudentProfile.objects.exists()


def test_unknown_profile_field(class_6a):
    with pytest.raises(InvalidArgument):
        enroll(profile(shoe_size=42), class_6a.pk)


def test_failed_account_write_leaves_nothing_behind(class_6a):
    with patch.object(StudentAccount.objects, 'create', side_effect=DatabaseError('disk full')):
        with pytest.raises(WriteConflict):
            enroll(profile(), class_6a.pk)

    class_6a.refresh_from_db()
    assert class_6a.enrolled_count == 0
    assert not StudentProfile.objects.exists()
    assert not StudentAccount.objects.exists()


def test_class_vanishing_mid_enrollment_rolls_back(class_6a):
    with patch('finances.services.enrollment.SchoolClass.objects.filter') as filter_:
        filter_.return_value.update.return_value = 0
        with pytest.raises(WriteConflict):
            enroll(profile(), class_6a.pk)

    assert not StudentProfile.objects.exists()
    assert not StudentAccount.objects.exists()


def test_fee_changes_do_not_touch_existing_accounts(enroll_student):
    account = enroll_student()

    upsert_fee_entry('6e', 120000)
    account.refresh_from_db()
    assert account.tuition_fee == Decimal('100000.00')
    assert account.amount_due == Decimal('100000.00')

    delete_fee_entry('6e')
    account.refresh_from_db()
    assert account.tuition_fee == Decimal('100000.00')

    newcomer = enroll_student(matricule='M-0002')
    assert newcomer.tuition_fee == Decimal('0.00')


def test_parent_cannot_enroll(class_6a, parent_user):
    with pytest.raises(PermissionDenied):
        enroll(profile(), class_6a.pk, actor=parent_user)
    assert SchoolClass.objects.get(pk=class_6a.pk).enrolled_count == 0


@pytest.mark.parametrize('field, length', [('first_name', 101), ('matricule', 31), ('parent_contact', 101)])
def test_overlong_profile_field_is_rejected(class_6a, field, length):
    with pytest.raises(InvalidArgument):
        enroll(profile(**{field: 'x' * length}), class_6a.pk)

    class_6a.refresh_from_db()
    assert class_6a.enrolled_count == 0
    assert not StudentProfile.objects.exists()
