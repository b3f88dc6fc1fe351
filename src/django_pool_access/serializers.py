"""JSON representations for the pool access API.

Keys are camelCase and timestamps ISO-8601, matching the web client.
"""

from django.utils import timezone

from .expiry import remaining

# camelCase wire name -> PoolConfig field
CONFIG_WIRE_FIELDS = {
    'maxCapacity': 'max_capacity',
    'maxHoursPerVisit': 'max_hours_per_visit',
    'openingTime': 'opening_time',
    'closingTime': 'closing_time',
    'isActive': 'is_active',
}


def _iso(value):
    return value.isoformat() if value else None


def access_to_dict(record, now=None, can_close=None) -> dict:
    data = {
        'id': str(record.pk),
        'personType': record.person_type,
        'personId': record.person_id,
        'personName': record.person_name,
        'departmentCode': record.department_code,
        'guestType': record.guest_type or None,
        'entryTime': _iso(record.entry_time),
        'estimatedHours': record.estimated_hours,
        'expectedExitTime': _iso(record.expected_exit_time),
        'actualExitTime': _iso(record.actual_exit_time),
        'status': record.status,
    }
    if record.is_active:
        left = remaining(now or timezone.now(), record.expected_exit_time)
        data['remainingMinutes'] = left.minutes
        data['isOvertime'] = left.is_overtime
    if can_close is not None:
        data['canClose'] = can_close
    return data


def guest_to_dict(entry) -> dict:
    return {
        'id': str(entry.pk),
        'firstName': entry.first_name,
        'lastName': entry.last_name,
        'documentNumber': entry.document_number or None,
        'guestType': entry.guest_type,
        'departmentCode': entry.department_code,
        'registeredBy': entry.registered_by,
        'createdAt': _iso(entry.created_at),
    }


def config_to_dict(config) -> dict:
    return {
        'maxCapacity': config.max_capacity,
        'maxHoursPerVisit': config.max_hours_per_visit,
        'openingTime': config.opening_time.strftime('%H:%M'),
        'closingTime': config.closing_time.strftime('%H:%M'),
        'isActive': config.is_active,
        'updatedAt': _iso(config.updated_at),
    }


def config_changes_from_wire(body: dict) -> dict:
    """Map camelCase keys to field names; unknown keys pass through as-is."""
    return {CONFIG_WIRE_FIELDS.get(key, key): value for key, value in body.items()}


def stats_to_dict(stats: dict) -> dict:
    return {
        'currentOccupancy': stats['current_occupancy'],
        'maxCapacity': stats['max_capacity'],
        'remainingCapacity': stats['remaining_capacity'],
        'occupancyPercentage': stats['occupancy_percentage'],
        'activeOwners': stats['active_owners'],
        'activeGuests': stats['active_guests'],
        'todayEntries': stats['today_entries'],
        'overtimeCount': stats['overtime_count'],
        'isOpen': stats['is_open'],
    }
