"""Models for django-pool-access.

Models:
- PoolConfig: Singleton configuration (capacity, visit length, hours)
- RegistrationEntry: Guest/companion roster, scoped by department
- AccessRecord: One pool session, active until exit is marked

Write through services only:
- django_pool_access.ledger (register_access, mark_exit)
- django_pool_access.directory (register_guest, remove_guest)
- django_pool_access.config (update_config)
"""

import datetime
import uuid

from django.db import IntegrityError, models, transaction
from django.db.models import F, Q
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .conf import get_config_defaults
from .exceptions import ConfigDeletionError
from .persons import Guest, GuestType, Owner, PersonType


class PoolBaseModel(models.Model):
    """Base model with UUID PK and timestamps."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


# =============================================================================
# PoolConfig - Singleton Configuration
# =============================================================================

class PoolConfig(models.Model):
    """
    Singleton pool configuration.

    Enforces pk=1. Access via django_pool_access.config.get_config().
    Every ledger operation reads this row at call time.
    """

    max_capacity = models.PositiveIntegerField(
        _('max capacity'),
        default=10,
        help_text=_('Maximum number of people in the pool at once'),
    )
    max_hours_per_visit = models.PositiveSmallIntegerField(
        _('max hours per visit'),
        default=2,
    )
    opening_time = models.TimeField(_('opening time'), default=datetime.time(8, 0))
    closing_time = models.TimeField(_('closing time'), default=datetime.time(22, 0))
    is_active = models.BooleanField(
        _('is active'),
        default=True,
        help_text=_('If False, no new entries are accepted'),
    )
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _('pool configuration')
        constraints = [
            models.CheckConstraint(
                condition=Q(max_capacity__gte=1),
                name='pool_config_capacity_positive',
            ),
            models.CheckConstraint(
                condition=Q(max_hours_per_visit__gte=1) & Q(max_hours_per_visit__lte=12),
                name='pool_config_hours_in_range',
            ),
        ]

    def __str__(self):
        return f"PoolConfig(capacity={self.max_capacity}, max_hours={self.max_hours_per_visit})"

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ConfigDeletionError()

    @classmethod
    def get_instance(cls):
        """
        Get or create the singleton row, seeded from POOL_ACCESS_DEFAULTS.

        Handles concurrent creation via IntegrityError retry.
        """
        try:
            with transaction.atomic():
                obj, _created = cls.objects.get_or_create(
                    pk=1, defaults=_coerce_defaults(get_config_defaults())
                )
                return obj
        except IntegrityError:
            return cls.objects.get(pk=1)


def _coerce_defaults(defaults: dict) -> dict:
    values = dict(defaults)
    for field in ('opening_time', 'closing_time'):
        if isinstance(values.get(field), str):
            values[field] = datetime.datetime.strptime(values[field], '%H:%M').time()
    return values


# =============================================================================
# RegistrationEntry - Guest Roster
# =============================================================================

class RegistrationManager(models.Manager):
    """Excludes removed (soft-deleted) entries by default."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)

    def for_department(self, department_code: str):
        return self.get_queryset().filter(department_code=department_code)


class RegistrationEntry(PoolBaseModel):
    """
    A guest or companion registered by an owner or staff.

    Removal is a soft delete so past AccessRecords keep their reference.
    Document numbers are not unique: two departments may register the
    same person.
    """

    first_name = models.CharField(_('first name'), max_length=100)
    last_name = models.CharField(_('last name'), max_length=100)
    document_number = models.CharField(
        _('document number'), max_length=50, blank=True, default='',
    )
    guest_type = models.CharField(
        _('guest type'), max_length=20, choices=GuestType.choices,
    )
    department_code = models.CharField(_('department code'), max_length=20, db_index=True)
    registered_by = models.CharField(
        _('registered by'),
        max_length=255,
        help_text=_('ID of the owner (or staff member) who registered the guest'),
    )
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = RegistrationManager()
    all_objects = models.Manager()

    class Meta:
        verbose_name = _('registration entry')
        verbose_name_plural = _('registration entries')
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['department_code', 'created_at'], name='pool_reg_dept_created_idx'),
        ]

    def __str__(self):
        return f"{self.full_name} ({self.department_code}, {self.guest_type})"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def as_person(self) -> Guest:
        """Person reference for this entry."""
        return Guest(
            id=str(self.pk),
            department_code=self.department_code,
            guest_type=self.guest_type,
            name=self.full_name,
        )


# =============================================================================
# AccessRecord - Occupancy Ledger
# =============================================================================

class AccessRecordQuerySet(models.QuerySet):
    """Custom queryset for AccessRecord."""

    def active(self):
        return self.filter(status=AccessRecord.Status.ACTIVE)

    def completed(self):
        return self.filter(status=AccessRecord.Status.COMPLETED)

    def for_department(self, department_code: str):
        return self.filter(department_code=department_code)

    def for_person(self, person_type: str, person_id: str):
        return self.filter(person_type=person_type, person_id=str(person_id))

    def entered_since(self, timestamp):
        return self.filter(entry_time__gte=timestamp)

    def overtime(self, now=None):
        """Active records whose expected exit time has passed."""
        now = now or timezone.now()
        return self.active().filter(expected_exit_time__lt=now)


class AccessRecord(PoolBaseModel):
    """
    One pool session for an owner or a registered guest.

    Key invariants:
    - One active record per (person_type, person_id)
    - actual_exit_time is NULL iff status is active
    - actual_exit_time >= entry_time
    - Everything except actual_exit_time/status is fixed at creation
    """

    class Status(models.TextChoices):
        ACTIVE = 'active', _('Active')
        COMPLETED = 'completed', _('Completed')

    person_type = models.CharField(max_length=10, choices=PersonType.choices)
    person_id = models.CharField(
        max_length=255,
        help_text=_('Owner ID or RegistrationEntry ID (CharField for UUID support)'),
    )
    guest_type = models.CharField(
        max_length=20, choices=GuestType.choices, blank=True, default='',
    )
    registration = models.ForeignKey(
        RegistrationEntry,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='accesses',
    )
    person_name = models.CharField(max_length=255, blank=True, default='')
    department_code = models.CharField(max_length=20, db_index=True)

    entry_time = models.DateTimeField()
    estimated_hours = models.PositiveSmallIntegerField()
    expected_exit_time = models.DateTimeField()
    actual_exit_time = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.ACTIVE, db_index=True,
    )

    objects = AccessRecordQuerySet.as_manager()

    class Meta:
        ordering = ['-entry_time']
        indexes = [
            models.Index(fields=['person_type', 'person_id'], name='pool_access_person_idx'),
            models.Index(fields=['department_code', 'entry_time'], name='pool_access_dept_entry_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['person_type', 'person_id'],
                condition=Q(status='active'),
                name='pool_one_active_access_per_person',
            ),
            models.CheckConstraint(
                condition=(
                    Q(status='active', actual_exit_time__isnull=True)
                    | Q(status='completed', actual_exit_time__isnull=False)
                ),
                name='pool_access_status_matches_exit',
            ),
            models.CheckConstraint(
                condition=Q(actual_exit_time__isnull=True) | Q(actual_exit_time__gte=F('entry_time')),
                name='pool_access_exit_after_entry',
            ),
            models.CheckConstraint(
                condition=Q(estimated_hours__gte=1),
                name='pool_access_hours_positive',
            ),
            models.CheckConstraint(
                condition=(
                    Q(person_type='owner', registration__isnull=True, guest_type='')
                    | Q(person_type='guest', registration__isnull=False)
                ),
                name='pool_access_person_shape',
            ),
        ]

    def __str__(self):
        return f"AccessRecord({self.person_type}:{self.person_id}, {self.status}, {self.pk})"

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def person(self) -> Owner | Guest:
        """Rebuild the person reference this record was created for."""
        if self.person_type == PersonType.OWNER:
            return Owner(
                id=self.person_id,
                department_code=self.department_code,
                name=self.person_name,
            )
        elif self.person_type == PersonType.GUEST:
            return Guest(
                id=self.person_id,
                department_code=self.department_code,
                guest_type=self.guest_type,
                name=self.person_name,
            )
        raise ValueError(f"Unknown person type '{self.person_type}'")
