# Generated manually for standalone django-pool-access package

import datetime
import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PoolConfig",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "max_capacity",
                    models.PositiveIntegerField(
                        default=10,
                        help_text="Maximum number of people in the pool at once",
                        verbose_name="max capacity",
                    ),
                ),
                (
                    "max_hours_per_visit",
                    models.PositiveSmallIntegerField(
                        default=2, verbose_name="max hours per visit"
                    ),
                ),
                (
                    "opening_time",
                    models.TimeField(
                        default=datetime.time(8, 0), verbose_name="opening time"
                    ),
                ),
                (
                    "closing_time",
                    models.TimeField(
                        default=datetime.time(22, 0), verbose_name="closing time"
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        default=True,
                        help_text="If False, no new entries are accepted",
                        verbose_name="is active",
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "pool configuration",
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("max_capacity__gte", 1)),
                        name="pool_config_capacity_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("max_hours_per_visit__gte", 1),
                            ("max_hours_per_visit__lte", 12),
                        ),
                        name="pool_config_hours_in_range",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="RegistrationEntry",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "first_name",
                    models.CharField(max_length=100, verbose_name="first name"),
                ),
                (
                    "last_name",
                    models.CharField(max_length=100, verbose_name="last name"),
                ),
                (
                    "document_number",
                    models.CharField(
                        blank=True,
                        default="",
                        max_length=50,
                        verbose_name="document number",
                    ),
                ),
                (
                    "guest_type",
                    models.CharField(
                        choices=[
                            ("resident", "Resident"),
                            ("friend", "Friend"),
                            ("tenant", "Tenant"),
                            ("airbnb", "Airbnb"),
                        ],
                        max_length=20,
                        verbose_name="guest type",
                    ),
                ),
                (
                    "department_code",
                    models.CharField(
                        db_index=True, max_length=20, verbose_name="department code"
                    ),
                ),
                (
                    "registered_by",
                    models.CharField(
                        help_text="ID of the owner (or staff member) who registered the guest",
                        max_length=255,
                        verbose_name="registered by",
                    ),
                ),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "verbose_name": "registration entry",
                "verbose_name_plural": "registration entries",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["department_code", "created_at"],
                        name="pool_reg_dept_created_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AccessRecord",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "person_type",
                    models.CharField(
                        choices=[("owner", "Owner"), ("guest", "Guest")],
                        max_length=10,
                    ),
                ),
                (
                    "person_id",
                    models.CharField(
                        help_text="Owner ID or RegistrationEntry ID (CharField for UUID support)",
                        max_length=255,
                    ),
                ),
                (
                    "guest_type",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("resident", "Resident"),
                            ("friend", "Friend"),
                            ("tenant", "Tenant"),
                            ("airbnb", "Airbnb"),
                        ],
                        default="",
                        max_length=20,
                    ),
                ),
                (
                    "person_name",
                    models.CharField(blank=True, default="", max_length=255),
                ),
                ("department_code", models.CharField(db_index=True, max_length=20)),
                ("entry_time", models.DateTimeField()),
                ("estimated_hours", models.PositiveSmallIntegerField()),
                ("expected_exit_time", models.DateTimeField()),
                ("actual_exit_time", models.DateTimeField(blank=True, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("completed", "Completed")],
                        db_index=True,
                        default="active",
                        max_length=10,
                    ),
                ),
                (
                    "registration",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="accesses",
                        to="django_pool_access.registrationentry",
                    ),
                ),
            ],
            options={
                "ordering": ["-entry_time"],
                "indexes": [
                    models.Index(
                        fields=["person_type", "person_id"],
                        name="pool_access_person_idx",
                    ),
                    models.Index(
                        fields=["department_code", "entry_time"],
                        name="pool_access_dept_entry_idx",
                    ),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "active")),
                        fields=("person_type", "person_id"),
                        name="pool_one_active_access_per_person",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("actual_exit_time__isnull", True), ("status", "active")),
                            models.Q(("actual_exit_time__isnull", False), ("status", "completed")),
                            _connector="OR",
                        ),
                        name="pool_access_status_matches_exit",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("actual_exit_time__isnull", True),
                            ("actual_exit_time__gte", models.F("entry_time")),
                            _connector="OR",
                        ),
                        name="pool_access_exit_after_entry",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("estimated_hours__gte", 1)),
                        name="pool_access_hours_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("guest_type", ""),
                                ("person_type", "owner"),
                                ("registration__isnull", True),
                            ),
                            models.Q(
                                ("person_type", "guest"),
                                ("registration__isnull", False),
                            ),
                            _connector="OR",
                        ),
                        name="pool_access_person_shape",
                    ),
                ],
            },
        ),
    ]
