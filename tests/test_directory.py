"""Tests for the guest registration directory."""

import pytest
from django.core.exceptions import ValidationError
from freezegun import freeze_time

from django_pool_access.directory import (
    get_guest,
    list_all,
    list_by_department,
    register_guest,
    remove_guest,
    resolve_guest,
)
from django_pool_access.exceptions import HasActiveAccessError, NotFoundError
from django_pool_access.ledger import mark_exit, register_access
from django_pool_access.models import RegistrationEntry
from django_pool_access.persons import Guest


def make_guest(department_code="603A", first_name="Mateo", document_number="", **kwargs):
    return register_guest(
        first_name=first_name,
        last_name=kwargs.pop("last_name", "Quispe"),
        guest_type=kwargs.pop("guest_type", "tenant"),
        department_code=department_code,
        registered_by=kwargs.pop("registered_by", "owner-a"),
        document_number=document_number,
    )


@pytest.mark.django_db
class TestRegisterGuest:
    def test_creates_entry(self):
        entry = make_guest(document_number=" 12345678 ")

        assert entry.pk is not None
        assert entry.first_name == "Mateo"
        assert entry.last_name == "Quispe"
        assert entry.guest_type == "tenant"
        assert entry.department_code == "603A"
        assert entry.registered_by == "owner-a"
        assert entry.document_number == "12345678"
        assert entry.created_at is not None

    def test_document_number_optional(self):
        entry = make_guest()

        assert entry.document_number == ""

    @pytest.mark.parametrize("field", ["first_name", "last_name", "department_code"])
    def test_required_fields(self, field):
        kwargs = {
            "first_name": "Mateo",
            "last_name": "Quispe",
            "guest_type": "friend",
            "department_code": "603A",
            "registered_by": "owner-a",
        }
        kwargs[field] = "   "

        with pytest.raises(ValidationError) as exc_info:
            register_guest(**kwargs)

        assert field in exc_info.value.message_dict

    def test_unknown_guest_type(self):
        with pytest.raises(ValidationError):
            make_guest(guest_type="cousin")

        assert RegistrationEntry.objects.count() == 0

    def test_same_document_in_two_departments(self):
        first = make_guest(department_code="603A", document_number="999")
        second = make_guest(department_code="704B", document_number="999")

        assert first.pk != second.pk


@pytest.mark.django_db
class TestListing:
    def test_list_by_department_newest_first(self):
        with freeze_time("2025-01-15 09:00:00"):
            oldest = make_guest(first_name="Uno")
        with freeze_time("2025-01-15 10:00:00"):
            make_guest(department_code="704B", first_name="Otro")
        with freeze_time("2025-01-15 11:00:00"):
            newest = make_guest(first_name="Dos")

        result = list_by_department("603A")

        assert [e.pk for e in result] == [newest.pk, oldest.pk]

    def test_list_excludes_removed(self):
        kept = make_guest(first_name="Kept")
        gone = make_guest(first_name="Gone")
        remove_guest(gone.pk)

        assert [e.pk for e in list_by_department("603A")] == [kept.pk]
        assert gone.pk not in [e.pk for e in list_all()]

    def test_list_all_spans_departments(self):
        make_guest(department_code="603A")
        make_guest(department_code="704B")

        assert {e.department_code for e in list_all()} == {"603A", "704B"}


@pytest.mark.django_db
class TestRemoveGuest:
    def test_soft_deletes(self, guest_entry):
        remove_guest(guest_entry.pk)

        assert not RegistrationEntry.objects.filter(pk=guest_entry.pk).exists()
        stored = RegistrationEntry.all_objects.get(pk=guest_entry.pk)
        assert stored.is_deleted

    def test_blocked_while_guest_in_pool(self, guest_entry):
        register_access(guest_entry.as_person(), "603A", 1)

        with pytest.raises(HasActiveAccessError):
            remove_guest(guest_entry.pk)

        assert RegistrationEntry.objects.filter(pk=guest_entry.pk).exists()

    @pytest.mark.parametrize("spelling", ["hex", "upper"])
    def test_blocked_when_entered_under_other_id_spelling(self, guest_entry, spelling):
        alias = guest_entry.pk.hex if spelling == "hex" else str(guest_entry.pk).upper()
        register_access(Guest(id=alias, department_code="603A", guest_type="friend"), "603A", 1)

        with pytest.raises(HasActiveAccessError):
            remove_guest(guest_entry.pk)

        assert RegistrationEntry.objects.filter(pk=guest_entry.pk).exists()

    def test_allowed_after_exit(self, guest_entry):
        access = register_access(guest_entry.as_person(), "603A", 1)
        mark_exit(access.pk)

        remove_guest(guest_entry.pk)

        assert not RegistrationEntry.objects.filter(pk=guest_entry.pk).exists()

    def test_unknown_guest(self):
        with pytest.raises(NotFoundError):
            remove_guest("5b0e1c6e-8f9a-4a63-9a53-0c1f6f0e1a11")

    def test_malformed_id(self):
        with pytest.raises(NotFoundError):
            remove_guest("not-a-uuid")

    def test_remove_twice(self, guest_entry):
        remove_guest(guest_entry.pk)

        with pytest.raises(NotFoundError):
            remove_guest(guest_entry.pk)


@pytest.mark.django_db
class TestLookup:
    def test_get_guest(self, guest_entry):
        assert get_guest(str(guest_entry.pk)).pk == guest_entry.pk

    def test_resolve_guest(self, guest_entry):
        person = resolve_guest(guest_entry.pk)

        assert person == Guest(
            id=str(guest_entry.pk),
            department_code="603A",
            guest_type="friend",
            name="Lucia Mendez",
        )

    def test_removed_guest_not_found(self, guest_entry):
        remove_guest(guest_entry.pk)

        with pytest.raises(NotFoundError):
            get_guest(guest_entry.pk)
