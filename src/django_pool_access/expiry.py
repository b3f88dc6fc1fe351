"""Expected-exit and overtime arithmetic.

Overtime is informational only. Nothing here closes a record; only
ledger.mark_exit() does.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from django.utils import timezone

from .models import AccessRecord


@dataclass(frozen=True)
class Remaining:
    """Time left until (or past) the expected exit, in whole minutes."""

    minutes: int
    is_overtime: bool


def expected_exit(entry_time: datetime, hours: int) -> datetime:
    """Return entry_time + hours, in entry_time's own zone."""
    return entry_time + timedelta(hours=hours)


def remaining(now: datetime, expected_exit_time: datetime) -> Remaining:
    """
    Minutes between now and the expected exit.

    is_overtime is True only once now is strictly past expected_exit_time.
    Minutes are the absolute difference truncated toward zero.
    """
    delta = expected_exit_time - now
    minutes = int(abs(delta).total_seconds() // 60)
    return Remaining(minutes=minutes, is_overtime=expected_exit_time < now)


def overtime_accesses(records, now: datetime | None = None) -> list:
    """Active records whose expected exit has passed, most overdue first."""
    now = now or timezone.now()
    overdue = [
        record for record in records
        if record.status == AccessRecord.Status.ACTIVE
        and remaining(now, record.expected_exit_time).is_overtime
    ]
    return sorted(overdue, key=lambda record: record.expected_exit_time)


def is_within_opening_hours(config, moment: datetime | None = None) -> bool:
    """
    Whether moment falls inside [opening_time, closing_time).

    Uses the current time zone's wall clock. Informational only: the
    ledger does not reject entries outside opening hours.
    """
    moment = moment or timezone.now()
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    wall = moment.time()
    if config.opening_time <= config.closing_time:
        return config.opening_time <= wall < config.closing_time
    # Opening hours wrap past midnight
    return wall >= config.opening_time or wall < config.closing_time
