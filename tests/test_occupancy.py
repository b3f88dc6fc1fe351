"""Tests for occupancy calculations."""

from datetime import datetime, time, timedelta, timezone
from types import SimpleNamespace

import pytest

from django_pool_access.occupancy import (
    by_category,
    current_occupancy,
    pool_stats,
    remaining_capacity,
)
from django_pool_access.persons import Guest, Owner

NOW = datetime(2025, 1, 15, 15, 0, tzinfo=timezone.utc)


def record(person, status="active", entered=NOW - timedelta(hours=1), hours=2):
    return SimpleNamespace(
        person=person,
        status=status,
        entry_time=entered,
        expected_exit_time=entered + timedelta(hours=hours),
    )


@pytest.fixture
def records():
    return [
        record(Owner(id="o1", department_code="603A")),
        record(Owner(id="o2", department_code="704B")),
        record(Guest(id="g1", department_code="603A", guest_type="friend")),
        record(Guest(id="g2", department_code="603A", guest_type="airbnb"), status="completed"),
    ]


class TestCurrentOccupancy:
    def test_counts_only_active(self, records):
        assert current_occupancy(records) == 3

    def test_empty(self):
        assert current_occupancy([]) == 0


class TestByCategory:
    def test_splits_active_records(self, records):
        assert by_category(records) == {"owners": 2, "guests": 1}

    def test_rejects_unknown_person(self):
        stray = record(SimpleNamespace(id="x", department_code="603A"))

        with pytest.raises(TypeError):
            by_category([stray])


class TestRemainingCapacity:
    def test_free_places(self, records):
        assert remaining_capacity(records, 10) == 7

    def test_never_negative(self, records):
        # Capacity lowered below current occupancy
        assert remaining_capacity(records, 2) == 0


class TestPoolStats:
    def test_summary(self, records):
        config = SimpleNamespace(
            max_capacity=4,
            is_active=True,
            opening_time=time(8, 0),
            closing_time=time(22, 0),
        )
        records.append(
            record(Owner(id="o3", department_code="101A"), status="completed",
                   entered=NOW - timedelta(days=1))
        )

        stats = pool_stats(records, config, NOW)

        assert stats["current_occupancy"] == 3
        assert stats["max_capacity"] == 4
        assert stats["remaining_capacity"] == 1
        assert stats["occupancy_percentage"] == 75.0
        assert stats["active_owners"] == 2
        assert stats["active_guests"] == 1
        assert stats["today_entries"] == 4
        assert stats["overtime_count"] == 0
        assert stats["is_open"] is True

    def test_counts_overtime_and_closed_pool(self):
        config = SimpleNamespace(
            max_capacity=5,
            is_active=False,
            opening_time=time(8, 0),
            closing_time=time(22, 0),
        )
        late = record(Owner(id="o1", department_code="603A"),
                      entered=NOW - timedelta(hours=3), hours=1)

        stats = pool_stats([late], config, NOW)

        assert stats["overtime_count"] == 1
        assert stats["is_open"] is False
