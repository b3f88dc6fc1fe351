"""Service functions for the pool access ledger.

Provides:
- register_access: Admit a person (capacity and one-active-access checks)
- mark_exit: Close an active access
- can_close: Who may close a given access
- get_access / active_accesses / access_history / get_active_access_for

register_access serializes on the PoolConfig row (select_for_update), so
the capacity count and the insert happen in one atomic unit. The partial
unique constraint on AccessRecord backs the one-active-access rule at the
storage level.
"""

import logging

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from .exceptions import (
    AlreadyExitedError,
    CapacityExceededError,
    DepartmentMismatchError,
    DuplicateAccessError,
    InvalidDurationError,
    NotFoundError,
    PoolInactiveError,
)
from .expiry import expected_exit
from .models import AccessRecord, PoolConfig, RegistrationEntry
from .persons import Guest, Owner, person_key, unknown_person

logger = logging.getLogger(__name__)


def _lookup_access(queryset, access_id) -> AccessRecord:
    try:
        record = queryset.filter(pk=access_id).first()
    except ValidationError:
        # Malformed UUID
        record = None
    if record is None:
        raise NotFoundError("Access", access_id)
    return record


def _lock_config() -> PoolConfig:
    PoolConfig.get_instance()
    return PoolConfig.objects.select_for_update().get(pk=1)


def _lock_registration(guest: Guest) -> RegistrationEntry:
    try:
        entry = RegistrationEntry.objects.select_for_update().filter(pk=guest.id).first()
    except ValidationError:
        entry = None
    if entry is None:
        raise NotFoundError("Guest", guest.id)
    return entry


def get_active_access_for(person) -> AccessRecord | None:
    """
    Get the person's active access.

    Args:
        person: An Owner or Guest

    Returns:
        The active AccessRecord or None if the person is not in the pool
    """
    person_type, person_id = person_key(person)
    return AccessRecord.objects.active().for_person(person_type, person_id).first()


def register_access(person, department_code: str, estimated_hours: int) -> AccessRecord:
    """
    Admit a person to the pool.

    Checks run in this order, after locking the pool configuration:
    pool active, duration, guest registration, duplicate, capacity.

    Args:
        person: Owner or Guest entering the pool
        department_code: Department the access is charged to
        estimated_hours: Requested stay, 1..max_hours_per_visit

    Returns:
        The new active AccessRecord

    Raises:
        DepartmentMismatchError: department_code is not the person's department
        PoolInactiveError: The pool is disabled
        InvalidDurationError: estimated_hours out of range
        NotFoundError: Guest registration missing or removed
        DuplicateAccessError: The person is already in the pool
        CapacityExceededError: The pool is full
    """
    person_type, person_id = person_key(person)
    if person.department_code != department_code:
        raise DepartmentMismatchError(person.department_code, department_code)

    with transaction.atomic():
        config = _lock_config()

        if not config.is_active:
            logger.warning("Rejected entry for %s:%s: pool inactive", person_type, person_id)
            raise PoolInactiveError()

        if (
            not isinstance(estimated_hours, int)
            or isinstance(estimated_hours, bool)
            or not 1 <= estimated_hours <= config.max_hours_per_visit
        ):
            raise InvalidDurationError(estimated_hours, config.max_hours_per_visit)

        if isinstance(person, Owner):
            registration = None
            guest_type = ''
            name = person.name
        elif isinstance(person, Guest):
            registration = _lock_registration(person)
            if registration.department_code != department_code:
                raise DepartmentMismatchError(registration.department_code, department_code)
            # Stored key is always the entry's own pk, however the caller spelled it
            person_id = str(registration.pk)
            guest_type = registration.guest_type
            name = person.name or registration.full_name
        else:
            raise unknown_person(person)

        existing = AccessRecord.objects.active().for_person(person_type, person_id).first()
        if existing is not None:
            logger.warning("Rejected entry for %s:%s: already inside", person_type, person_id)
            raise DuplicateAccessError(person_id, existing.pk)

        occupancy = AccessRecord.objects.active().count()
        if occupancy >= config.max_capacity:
            logger.warning(
                "Rejected entry for %s:%s: pool full (%d/%d)",
                person_type, person_id, occupancy, config.max_capacity,
            )
            raise CapacityExceededError(config.max_capacity, occupancy)

        now = timezone.now()
        try:
            with transaction.atomic():
                record = AccessRecord.objects.create(
                    person_type=person_type,
                    person_id=person_id,
                    guest_type=guest_type,
                    registration=registration,
                    person_name=name,
                    department_code=department_code,
                    entry_time=now,
                    estimated_hours=estimated_hours,
                    expected_exit_time=expected_exit(now, estimated_hours),
                )
        except IntegrityError:
            # Lost a race on the one-active-access-per-person index
            raise DuplicateAccessError(person_id)

    logger.info(
        "Access %s registered for %s:%s (%s) for %dh",
        record.pk, person_type, person_id, department_code, estimated_hours,
    )
    return record


def mark_exit(access_id) -> AccessRecord:
    """
    Close an active access.

    Not idempotent: closing the same access twice raises.

    Raises:
        NotFoundError: No access with that id
        AlreadyExitedError: The access is already completed
    """
    with transaction.atomic():
        record = _lookup_access(AccessRecord.objects.select_for_update(), access_id)

        if record.status == AccessRecord.Status.COMPLETED:
            logger.warning("Rejected exit for access %s: already closed", record.pk)
            raise AlreadyExitedError(record.pk)

        record.actual_exit_time = timezone.now()
        record.status = AccessRecord.Status.COMPLETED
        record.save(update_fields=['actual_exit_time', 'status', 'updated_at'])

    logger.info("Access %s closed", record.pk)
    return record


def can_close(record, requester_department: str, requester_is_staff: bool) -> bool:
    """Staff may close any access; others only their own department's."""
    if requester_is_staff:
        return True
    return bool(requester_department) and record.department_code == requester_department


def get_access(access_id) -> AccessRecord:
    """
    Get an access record by id.

    Raises:
        NotFoundError: No access with that id
    """
    return _lookup_access(AccessRecord.objects.all(), access_id)


def active_accesses(department_code: str | None = None) -> list[AccessRecord]:
    """People currently in the pool, oldest entry first."""
    queryset = AccessRecord.objects.active()
    if department_code:
        queryset = queryset.for_department(department_code)
    return list(queryset.order_by('entry_time'))


def access_history(department_code: str | None = None, since=None) -> list[AccessRecord]:
    """All accesses (active and completed), newest first."""
    queryset = AccessRecord.objects.all()
    if department_code:
        queryset = queryset.for_department(department_code)
    if since is not None:
        queryset = queryset.entered_since(since)
    return list(queryset.order_by('-entry_time'))
