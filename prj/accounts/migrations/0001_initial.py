# accounts/migrations/0001_initial.py
#
# Users, class cohorts (with their billing grade and headcount) and student
# profiles.

import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='CustomUser',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(
                    default=False,
                    help_text='Designates that this user has all permissions without explicitly assigning them.',
                    verbose_name='superuser status',
                )),
                ('username', models.CharField(
                    error_messages={'unique': 'A user with that username already exists.'},
                    help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.',
                    max_length=150,
                    unique=True,
                    validators=[django.contrib.auth.validators.UnicodeUsernameValidator()],
                    verbose_name='username',
                )),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(
                    default=False,
                    help_text='Designates whether the user can log into this admin site.',
                    verbose_name='staff status',
                )),
                ('is_active', models.BooleanField(
                    default=True,
                    help_text='Designates whether this user should be treated as active. '
                              'Unselect this instead of deleting accounts.',
                    verbose_name='active',
                )),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(
                    choices=[('staff', 'Staff / Bursar'), ('parent', 'Parent / Guardian')],
                    default='parent',
                    help_text='Staff manage fees and payments; Parents only receive notifications.',
                    max_length=20,
                    verbose_name='Role',
                )),
                ('groups', models.ManyToManyField(
                    blank=True,
                    help_text='The groups this user belongs to. A user will get all permissions '
                              'granted to each of their groups.',
                    related_name='user_set',
                    related_query_name='user',
                    to='auth.group',
                    verbose_name='groups',
                )),
                ('user_permissions', models.ManyToManyField(
                    blank=True,
                    help_text='Specific permissions for this user.',
                    related_name='user_set',
                    related_query_name='user',
                    to='auth.permission',
                    verbose_name='user permissions',
                )),
            ],
            options={
                'verbose_name': 'User',
                'verbose_name_plural': 'Users',
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='SchoolClass',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(
                    help_text='Human-readable class name, e.g. "6e A – 2025/2026".',
                    max_length=100,
                    unique=True,
                )),
                ('grade', models.CharField(
                    help_text='Grade / level used to look up the tuition fee, e.g. "6e".',
                    max_length=50,
                )),
                ('enrolled_count', models.PositiveIntegerField(
                    default=0,
                    help_text='Number of students enrolled in this class.',
                )),
                ('school_year', models.CharField(
                    blank=True,
                    help_text='Optional school year label, e.g. "2025/2026".',
                    max_length=20,
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name': 'School Class',
                'verbose_name_plural': 'School Classes',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='StudentProfile',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('matricule', models.CharField(
                    help_text='Unique registration number of the student.',
                    max_length=30,
                    unique=True,
                    verbose_name='Matricule',
                )),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('parent_first_name', models.CharField(blank=True, max_length=100)),
                ('parent_last_name', models.CharField(blank=True, max_length=100)),
                ('parent_contact', models.CharField(
                    blank=True,
                    help_text='Phone number of the primary parent/guardian.',
                    max_length=50,
                )),
                ('parent_email', models.EmailField(
                    blank=True,
                    help_text='Where reminders and payment confirmations are sent.',
                    max_length=254,
                )),
                ('is_active', models.BooleanField(
                    default=True,
                    help_text='Uncheck when the student leaves the school.',
                )),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('school_class', models.ForeignKey(
                    help_text='The class this student belongs to.',
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='students',
                    to='accounts.schoolclass',
                )),
            ],
            options={
                'verbose_name': 'Student Profile',
                'verbose_name_plural': 'Student Profiles',
                'ordering': ['school_class', 'last_name', 'first_name'],
            },
        ),
    ]
