"""Concurrent register_access calls against the capacity and one-active rules.

Each worker runs on its own thread and database connection.
"""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from django.db import DatabaseError, connection

from django_pool_access.exceptions import CapacityExceededError, DuplicateAccessError
from django_pool_access.ledger import register_access
from django_pool_access.models import AccessRecord
from django_pool_access.persons import Guest, Owner

REJECTIONS = (CapacityExceededError, DuplicateAccessError, DatabaseError)


def run_together(people):
    """Call register_access for every person at once; return (records, errors)."""
    barrier = threading.Barrier(len(people), timeout=10)

    def enter(person):
        try:
            barrier.wait()
            return register_access(person, person.department_code, 1)
        except Exception as exc:
            return exc
        finally:
            connection.close()

    with ThreadPoolExecutor(max_workers=len(people)) as executor:
        results = list(executor.map(enter, people))

    connection.close()

    records = [r for r in results if isinstance(r, AccessRecord)]
    errors = [r for r in results if not isinstance(r, AccessRecord)]
    return records, errors


@pytest.mark.django_db(transaction=True)
class TestConcurrentRegistration:
    def test_capacity_ceiling_holds(self, pool):
        pool(max_capacity=3)
        people = [Owner(id=f"owner-{n}", department_code=f"{n}01A") for n in range(8)]

        records, errors = run_together(people)

        assert len(records) == 3
        assert AccessRecord.objects.active().count() == 3
        assert len(errors) == 5
        assert all(isinstance(e, REJECTIONS) for e in errors), errors
        assert any(isinstance(e, CapacityExceededError) for e in errors)

    def test_same_owner_admitted_once(self, pool):
        pool(max_capacity=10)
        owner = Owner(id="owner-a", department_code="603A")

        records, errors = run_together([owner] * 5)

        assert len(records) == 1
        assert AccessRecord.objects.active().for_person("owner", "owner-a").count() == 1
        assert len(errors) == 4
        assert all(isinstance(e, REJECTIONS) for e in errors), errors

    def test_same_guest_under_different_id_spellings(self, pool, guest_entry):
        pool(max_capacity=10)
        spellings = [str(guest_entry.pk), guest_entry.pk.hex, str(guest_entry.pk).upper()]
        guests = [Guest(id=s, department_code="603A", guest_type="friend") for s in spellings]

        records, errors = run_together(guests)

        assert len(records) == 1
        assert records[0].person_id == str(guest_entry.pk)
        assert AccessRecord.objects.active().count() == 1
        assert all(isinstance(e, REJECTIONS) for e in errors), errors
