"""Service functions for the guest registration directory.

Provides:
- register_guest: Add a guest/companion to a department's roster
- remove_guest: Remove a guest who is not currently in the pool
- list_by_department: A department's roster, newest first
- list_all: Every registered guest (staff directory)
- get_guest / resolve_guest: Lookups used by the access ledger callers
"""

import logging

from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .exceptions import HasActiveAccessError, NotFoundError
from .ledger import get_active_access_for
from .models import RegistrationEntry
from .persons import Guest

logger = logging.getLogger(__name__)


def _lookup(queryset, entry_id) -> RegistrationEntry:
    try:
        entry = queryset.filter(pk=entry_id).first()
    except ValidationError:
        # Malformed UUID
        entry = None
    if entry is None:
        raise NotFoundError("Guest", entry_id)
    return entry


def register_guest(
    first_name: str,
    last_name: str,
    guest_type: str,
    department_code: str,
    registered_by: str,
    document_number: str = '',
) -> RegistrationEntry:
    """
    Register a guest for a department.

    Document numbers are not checked for uniqueness; the same person may
    be registered by several departments.

    Raises:
        ValidationError: If a required field is blank or guest_type is unknown
    """
    entry = RegistrationEntry(
        first_name=(first_name or '').strip(),
        last_name=(last_name or '').strip(),
        document_number=(document_number or '').strip(),
        guest_type=guest_type or '',
        department_code=(department_code or '').strip(),
        registered_by=str(registered_by or '').strip(),
    )
    entry.full_clean(exclude=['id'])
    entry.save()

    logger.info(
        "Guest %s registered for department %s by %s",
        entry.pk, entry.department_code, entry.registered_by,
    )
    return entry


def remove_guest(entry_id) -> None:
    """
    Remove a guest from the roster (soft delete).

    The entry row stays locked while the active-access check runs;
    ledger.register_access takes the same lock, so a guest cannot enter
    between the check and the removal.

    Raises:
        NotFoundError: If no such guest exists
        HasActiveAccessError: If the guest is currently in the pool
    """
    with transaction.atomic():
        entry = _lookup(RegistrationEntry.objects.select_for_update(), entry_id)

        if get_active_access_for(entry.as_person()) is not None:
            logger.warning("Refused to remove guest %s: active pool access", entry.pk)
            raise HasActiveAccessError(entry.pk)

        entry.deleted_at = timezone.now()
        entry.save(update_fields=['deleted_at', 'updated_at'])

    logger.info("Guest %s removed from department %s", entry.pk, entry.department_code)


def list_by_department(department_code: str) -> list[RegistrationEntry]:
    """Guests registered for a department, newest first."""
    return list(
        RegistrationEntry.objects.for_department(department_code).order_by('-created_at', '-pk')
    )


def list_all() -> list[RegistrationEntry]:
    """All registered guests across departments, newest first."""
    return list(RegistrationEntry.objects.order_by('-created_at', '-pk'))


def get_guest(entry_id) -> RegistrationEntry:
    """
    Get a registered guest by id.

    Raises:
        NotFoundError: If the guest does not exist or was removed
    """
    return _lookup(RegistrationEntry.objects.all(), entry_id)


def resolve_guest(entry_id) -> Guest:
    """Person reference for a registered guest."""
    return get_guest(entry_id).as_person()
