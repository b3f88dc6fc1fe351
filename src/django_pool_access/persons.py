"""Person references for pool access.

A person entering the pool is either an Owner or a registered Guest.
Consumers match on the concrete type and reject anything else:

    if isinstance(person, Owner):
        ...
    elif isinstance(person, Guest):
        ...
    else:
        raise unknown_person(person)
"""

import uuid
from dataclasses import dataclass

from django.db import models
from django.utils.translation import gettext_lazy as _


class PersonType(models.TextChoices):
    OWNER = 'owner', _('Owner')
    GUEST = 'guest', _('Guest')


class GuestType(models.TextChoices):
    RESIDENT = 'resident', _('Resident')
    FRIEND = 'friend', _('Friend')
    TENANT = 'tenant', _('Tenant')
    AIRBNB = 'airbnb', _('Airbnb')


@dataclass(frozen=True)
class Owner:
    """An apartment owner. Owners live outside this app; id is opaque."""

    id: str
    department_code: str
    name: str = ''

    person_type = PersonType.OWNER


@dataclass(frozen=True)
class Guest:
    """A guest or companion registered by a department.

    id is the RegistrationEntry primary key.
    """

    id: str
    department_code: str
    guest_type: str
    name: str = ''

    person_type = PersonType.GUEST

    def __post_init__(self):
        if self.guest_type not in GuestType.values:
            raise ValueError(f"Unknown guest type '{self.guest_type}'")


Person = Owner | Guest


def unknown_person(person) -> TypeError:
    return TypeError(f"Expected Owner or Guest, got {type(person).__name__}")


def guest_id(value) -> str:
    """Canonical form of a guest id: hyphenated lower-case UUID when it parses."""
    try:
        return str(uuid.UUID(str(value)))
    except ValueError:
        return str(value)


def person_key(person) -> tuple[str, str]:
    """(person_type, person_id) key used for active-access uniqueness."""
    if isinstance(person, Owner):
        return PersonType.OWNER.value, str(person.id)
    elif isinstance(person, Guest):
        return PersonType.GUEST.value, guest_id(person.id)
    raise unknown_person(person)
