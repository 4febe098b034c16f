# finances/migrations/0001_initial.py
#
# Fee schedule, student tuition accounts, accounting journal and payment
# ledger.

import decimal

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FeeScheduleEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('grade', models.CharField(
                    help_text='Grade / level this fee applies to, e.g. "6e".',
                    max_length=50,
                    unique=True,
                )),
                ('annual_amount', models.DecimalField(
                    decimal_places=2,
                    help_text='Annual tuition billed to every student enrolled in this grade.',
                    max_digits=12,
                    validators=[django.core.validators.MinValueValidator(decimal.Decimal('0'))],
                )),
                ('installment_plan', models.CharField(
                    blank=True,
                    help_text='Free-text description, e.g. "10 monthly installments".',
                    max_length=200,
                )),
                ('payment_deadline', models.DateField(
                    blank=True,
                    help_text='Optional date by which the annual amount must be settled.',
                    null=True,
                )),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Fee Schedule Entry',
                'verbose_name_plural': 'Fee Schedule',
                'ordering': ['grade'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('annual_amount__gte', 0)),
                        name='fee_schedule_amount_non_negative',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='JournalEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('description', models.CharField(max_length=255)),
                ('category', models.CharField(
                    choices=[
                        ('tuition', 'Tuition'),
                        ('donations', 'Donations'),
                        ('events', 'Events'),
                        ('salaries', 'Salaries'),
                        ('supplies', 'Supplies'),
                        ('maintenance', 'Maintenance'),
                        ('utilities', 'Utilities'),
                        ('other', 'Other'),
                    ],
                    default='other',
                    max_length=20,
                )),
                ('direction', models.CharField(
                    choices=[('revenue', 'Revenue'), ('expense', 'Expense')],
                    max_length=10,
                )),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('recorded_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='journal_entries',
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'verbose_name': 'Journal Entry',
                'verbose_name_plural': 'Accounting Journal',
                'ordering': ['-date', '-id'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('amount__gt', 0)),
                        name='journal_entry_amount_positive',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='StudentAccount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('grade_at_enrollment', models.CharField(max_length=50)),
                ('tuition_fee', models.DecimalField(decimal_places=2, max_digits=12)),
                ('amount_due', models.DecimalField(
                    decimal_places=2,
                    help_text='Outstanding balance; zero or negative once paid off.',
                    max_digits=12,
                )),
                ('tuition_status', models.CharField(
                    choices=[('paid', 'Paid'), ('partial', 'Partial'), ('overdue', 'Overdue')],
                    default='partial',
                    max_length=20,
                )),
                ('due_date', models.DateField(
                    blank=True,
                    help_text='Snapshot of the fee schedule deadline at enrollment.',
                    null=True,
                )),
                ('version', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('updated_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('school_class', models.ForeignKey(
                    help_text='The class the student was enrolled into.',
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='student_accounts',
                    to='accounts.schoolclass',
                )),
                ('student', models.OneToOneField(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='account',
                    to='accounts.studentprofile',
                )),
            ],
            options={
                'verbose_name': 'Student Account',
                'verbose_name_plural': 'Student Accounts',
                'ordering': ['school_class', 'student__last_name', 'student__first_name'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('tuition_fee__gte', 0)),
                        name='student_account_fee_non_negative',
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name='PaymentLedgerEntry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('description', models.CharField(max_length=255)),
                ('payer_name', models.CharField(max_length=200)),
                ('payer_contact', models.CharField(blank=True, max_length=100)),
                ('method', models.CharField(
                    choices=[
                        ('cash', 'Cash'),
                        ('check', 'Check'),
                        ('bank_transfer', 'Bank transfer'),
                        ('mobile_money', 'Mobile money'),
                        ('card', 'Card'),
                    ],
                    default='cash',
                    max_length=20,
                )),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('account', models.ForeignKey(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='payments',
                    to='finances.studentaccount',
                )),
                ('journal_entry', models.OneToOneField(
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='payment',
                    to='finances.journalentry',
                )),
                ('recorded_by', models.ForeignKey(
                    blank=True,
                    null=True,
                    on_delete=django.db.models.deletion.SET_NULL,
                    related_name='recorded_payments',
                    to=settings.AUTH_USER_MODEL,
                )),
            ],
            options={
                'verbose_name': 'Payment',
                'verbose_name_plural': 'Payment Ledger',
                'ordering': ['-date', '-id'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(('amount__gt', 0)),
                        name='payment_ledger_amount_positive',
                    ),
                ],
            },
        ),
    ]
