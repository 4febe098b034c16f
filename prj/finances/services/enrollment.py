"""
finances/services/enrollment.py
───────────────────────────────
Registers a student into a class and opens their tuition account.

enroll(profile, class_id, actor=None)
    Create the StudentProfile, its StudentAccount billed from the fee
    schedule, and bump the class headcount, all in one transaction.
"""

import logging
from decimal import Decimal

from django.db import DatabaseError, DataError, IntegrityError, transaction
from django.db.models import F

from accounts.models import SchoolClass, StudentProfile

from ..exceptions import AlreadyEnrolled, InvalidArgument, NotFound, WriteConflict
from ..models import StudentAccount
from .fee_schedule import get_fee_entry
from .utils import check_billing_rights, check_length

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    'first_name', 'last_name', 'matricule', 'date_of_birth',
    'parent_first_name', 'parent_last_name', 'parent_contact', 'parent_email',
)
REQUIRED_PROFILE_FIELDS = ('first_name', 'last_name', 'matricule')


def _clean_profile(profile):
    unknown = set(profile) - set(PROFILE_FIELDS)
    if unknown:
        raise InvalidArgument(f"Unknown student fields: {', '.join(sorted(unknown))}.")

    data = {}
    for field in PROFILE_FIELDS:
        value = profile.get(field)
        if isinstance(value, str):
            value = value.strip()
        if value is None and field != 'date_of_birth':
            value = ''
        data[field] = value

    missing = [f for f in REQUIRED_PROFILE_FIELDS if not data[f]]
    if missing:
        raise InvalidArgument(f"Missing student fields: {', '.join(missing)}.")
    for field in PROFILE_FIELDS:
        if isinstance(data[field], str):
            check_length(data[field], StudentProfile, field)
    return data


def _get_class(class_id):
    try:
        return SchoolClass.objects.get(pk=class_id)
    except (SchoolClass.DoesNotExist, ValueError, TypeError):
        raise NotFound(f'Class {class_id!r} does not exist.')


@transaction.atomic
def _create_student_and_account(data, school_class, tuition_fee, due_date):
    student = StudentProfile.objects.create(school_class=school_class, **data)
    account = StudentAccount.objects.create(
        student=student,
        school_class=school_class,
        grade_at_enrollment=school_class.grade,
        tuition_fee=tuition_fee,
        amount_due=tuition_fee,
        tuition_status=StudentAccount.status_for(tuition_fee),
        due_date=due_date,
    )
    bumped = (
        SchoolClass.objects
        .filter(pk=school_class.pk)
        .update(enrolled_count=F('enrolled_count') + 1)
    )
    if bumped != 1:
        raise WriteConflict(f'Class {school_class.pk} disappeared during enrollment.')
    return account


def enroll(profile, class_id, actor=None):
    """
    Enroll a new student into *class_id* and bill them the annual tuition of
    the class grade.

    Args:
        profile (dict): StudentProfile fields, see PROFILE_FIELDS.
            Required: first_name, last_name, matricule.
        class_id: primary key of the SchoolClass.
        actor: user performing the enrollment (optional).

    Returns:
        StudentAccount instance (with .student populated)

    Raises:
        NotFound:        the class does not exist
        InvalidArgument: required profile fields are missing
        AlreadyEnrolled: the matricule is already registered
        WriteConflict:   the student/account/headcount unit could not commit

    A grade with no fee schedule entry is billed 0 and is immediately Paid.
    """
    check_billing_rights(actor)
    data = _clean_profile(profile)
    school_class = _get_class(class_id)
    matricule = data['matricule']

    if StudentProfile.objects.filter(matricule=matricule).exists():
        raise AlreadyEnrolled(f'Matricule {matricule} is already enrolled.')

    fee_entry = get_fee_entry(school_class.grade)
    if fee_entry is None:
        logger.warning(f"No fee schedule entry for grade {school_class.grade}; billing 0")
        tuition_fee, due_date = Decimal('0.00'), None
    else:
        tuition_fee, due_date = fee_entry.annual_amount, fee_entry.payment_deadline

    try:
        account = _create_student_and_account(data, school_class, tuition_fee, due_date)
    except IntegrityError as exc:
        if StudentProfile.objects.filter(matricule=matricule).exists():
            raise AlreadyEnrolled(f'Matricule {matricule} is already enrolled.') from exc
        raise WriteConflict(f'Enrollment of {matricule} could not be committed.') from exc
    except DataError as exc:
        raise InvalidArgument(f'Enrollment of {matricule} does not fit the student record.') from exc
    except DatabaseError as exc:
        raise WriteConflict(f'Enrollment of {matricule} could not be committed.') from exc

    logger.info(
        f"Enrolled {account.student.full_name} ({matricule}) into {school_class.name}: "
        f"tuition {tuition_fee}, status {account.tuition_status}"
    )
    return account
