"""
accounts/admin.py
─────────────────
Admin registrations for CustomUser, SchoolClass, and StudentProfile.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import CustomUser, SchoolClass, StudentProfile


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    """
    Extends the default UserAdmin to surface the billing role.
    """

    list_display  = BaseUserAdmin.list_display + ('role',)
    list_filter   = BaseUserAdmin.list_filter  + ('role',)

    fieldsets = BaseUserAdmin.fieldsets + (
        ('School Role', {'fields': ('role',)}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ('School Role', {'fields': ('role',)}),
    )


@admin.register(SchoolClass)
class SchoolClassAdmin(admin.ModelAdmin):
    list_display    = ('name', 'grade', 'enrolled_count', 'school_year', 'created_at')
    list_filter     = ('grade', 'school_year')
    search_fields   = ('name', 'grade')
    # Maintained by the enrollment service only.
    readonly_fields = ('enrolled_count',)


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display  = ('matricule', 'last_name', 'first_name', 'school_class', 'parent_contact', 'is_active')
    list_filter   = ('school_class', 'is_active')
    search_fields = (
        'matricule', 'first_name', 'last_name',
        'parent_last_name', 'parent_contact', 'parent_email',
    )
