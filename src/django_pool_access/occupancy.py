"""Occupancy views derived from access records.

Pure functions: no queries, no side effects. Pass any iterable of
records (model instances or objects exposing status and person).
"""

from datetime import datetime

from django.utils import timezone

from .expiry import overtime_accesses, is_within_opening_hours
from .models import AccessRecord
from .persons import Guest, Owner, unknown_person


def _active(records) -> list:
    return [record for record in records if record.status == AccessRecord.Status.ACTIVE]


def current_occupancy(records) -> int:
    """Number of people currently in the pool."""
    return len(_active(records))


def by_category(records) -> dict:
    """Active records split into owners and guests."""
    counts = {'owners': 0, 'guests': 0}
    for record in _active(records):
        person = record.person
        if isinstance(person, Owner):
            counts['owners'] += 1
        elif isinstance(person, Guest):
            counts['guests'] += 1
        else:
            raise unknown_person(person)
    return counts


def remaining_capacity(records, max_capacity: int) -> int:
    """Free places left, never negative."""
    return max(0, max_capacity - current_occupancy(records))


def pool_stats(records, config, now: datetime | None = None) -> dict:
    """
    Dashboard summary for staff and owners.

    Args:
        records: Access records to summarize (typically today's plus all active)
        config: The PoolConfig snapshot
        now: Reference time (defaults to now)

    Returns:
        Dict with occupancy, capacity and category counts
    """
    now = now or timezone.now()
    records = list(records)
    occupancy = current_occupancy(records)
    categories = by_category(records)
    today = timezone.localdate(now) if timezone.is_aware(now) else now.date()

    today_entries = 0
    for record in records:
        entry = record.entry_time
        entry_day = timezone.localdate(entry) if timezone.is_aware(entry) else entry.date()
        if entry_day == today:
            today_entries += 1

    percentage = (occupancy / config.max_capacity * 100) if config.max_capacity else 0.0

    return {
        'current_occupancy': occupancy,
        'max_capacity': config.max_capacity,
        'remaining_capacity': remaining_capacity(records, config.max_capacity),
        'occupancy_percentage': round(percentage, 1),
        'active_owners': categories['owners'],
        'active_guests': categories['guests'],
        'today_entries': today_entries,
        'overtime_count': len(overtime_accesses(records, now)),
        'is_open': config.is_active and is_within_opening_hours(config, now),
    }
