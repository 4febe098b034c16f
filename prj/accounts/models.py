"""
accounts/models.py
──────────────────
Identity and enrollment models.

CustomUser     – extends AbstractUser with a role flag (Staff vs. Parent).
SchoolClass    – a single class cohort, e.g. "6e A – 2025/2026", with the
                 grade it is billed under and a denormalized headcount.
StudentProfile – the child's record: name, matricule, class, parent contact.
"""

from django.contrib.auth.models import AbstractUser
from django.db import models


class CustomUser(AbstractUser):
    """
    Custom user model for the school billing console.

    Roles
    -----
    STAFF   – bursar / administrative staff who manage tuition billing.
    PARENT  – a parent/guardian who receives reminders and receipts.
    """

    class Role(models.TextChoices):
        STAFF  = 'staff',  'Staff / Bursar'
        PARENT = 'parent', 'Parent / Guardian'

    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.PARENT,
        verbose_name='Role',
        help_text='Staff manage fees and payments; Parents only receive notifications.',
    )

    @property
    def can_manage_billing(self):
        return self.is_active and (self.is_superuser or self.role == self.Role.STAFF)

    def __str__(self):
        role_label = self.get_role_display()
        return f"{self.get_full_name() or self.username} ({role_label})"

    class Meta:
        verbose_name = 'User'
        verbose_name_plural = 'Users'


class SchoolClass(models.Model):
    """
    Represents one class cohort, e.g. "6e A – 2025/2026".

    `grade` selects the FeeScheduleEntry students are billed under.
    `enrolled_count` is only ever incremented by the enrollment service,
    inside the same transaction that creates the student.
    """

    name = models.CharField(
        max_length=100,
        unique=True,
        help_text='Human-readable class name, e.g. "6e A – 2025/2026".',
    )
    grade = models.CharField(
        max_length=50,
        help_text='Grade / level used to look up the tuition fee, e.g. "6e".',
    )
    enrolled_count = models.PositiveIntegerField(
        default=0,
        help_text='Number of students enrolled in this class.',
    )
    school_year = models.CharField(
        max_length=20,
        blank=True,
        help_text='Optional school year label, e.g. "2025/2026".',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'School Class'
        verbose_name_plural = 'School Classes'
        ordering = ['name']

    def __str__(self):
        return self.name


class StudentProfile(models.Model):
    """
    Stores the child's record inside a class.

    Every student has:
    - a display name
    - a unique matricule (registration number)
    - the SchoolClass they were enrolled into
    - a primary parent/guardian contact, used as the default payer and as
      the recipient of reminders and payment confirmations
    """

    school_class = models.ForeignKey(
        SchoolClass,
        on_delete=models.PROTECT,
        related_name='students',
        help_text='The class this student belongs to.',
    )
    first_name = models.CharField(max_length=100)
    last_name = models.CharField(max_length=100)
    matricule = models.CharField(
        max_length=30,
        unique=True,
        verbose_name='Matricule',
        help_text='Unique registration number of the student.',
    )
    date_of_birth = models.DateField(null=True, blank=True)
    parent_first_name = models.CharField(max_length=100, blank=True)
    parent_last_name = models.CharField(max_length=100, blank=True)
    parent_contact = models.CharField(
        max_length=50,
        blank=True,
        help_text='Phone number of the primary parent/guardian.',
    )
    parent_email = models.EmailField(
        blank=True,
        help_text='Where reminders and payment confirmations are sent.',
    )
    is_active = models.BooleanField(
        default=True,
        help_text='Uncheck when the student leaves the school.',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'Student Profile'
        verbose_name_plural = 'Student Profiles'
        ordering = ['school_class', 'last_name', 'first_name']

    def __str__(self):
        return f"{self.full_name} ({self.school_class})"

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def parent_name(self):
        return f"{self.parent_first_name} {self.parent_last_name}".strip()
