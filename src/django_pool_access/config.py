"""Pool configuration service.

Provides:
- get_config: Read the current PoolConfig singleton
- update_config: Validated partial update (admin only, enforced by caller)
"""

import datetime
import logging
import re

from django.db import transaction

from .conf import MAX_HOURS_LIMIT
from .exceptions import InvalidConfigError
from .models import PoolConfig

logger = logging.getLogger(__name__)

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):([0-5]\d)$')

CONFIG_FIELDS = (
    'max_capacity',
    'max_hours_per_visit',
    'opening_time',
    'closing_time',
    'is_active',
)


def get_config() -> PoolConfig:
    """Return the current configuration, creating it from defaults if needed."""
    return PoolConfig.get_instance()


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_time(value):
    if isinstance(value, datetime.time):
        return value.replace(second=0, microsecond=0)
    if isinstance(value, str):
        match = TIME_PATTERN.match(value)
        if match:
            return datetime.time(int(match.group(1)), int(match.group(2)))
    return None


def validate_config_changes(changes: dict) -> dict:
    """
    Validate a partial configuration update.

    Returns:
        Cleaned values keyed by model field name

    Raises:
        InvalidConfigError: With every field error found
    """
    errors = {}
    cleaned = {}

    for field, value in changes.items():
        if field not in CONFIG_FIELDS:
            errors[field] = "unknown setting"
        elif field == 'max_capacity':
            if not _is_int(value) or value < 1:
                errors[field] = "must be an integer >= 1"
            else:
                cleaned[field] = value
        elif field == 'max_hours_per_visit':
            if not _is_int(value) or not 1 <= value <= MAX_HOURS_LIMIT:
                errors[field] = f"must be an integer between 1 and {MAX_HOURS_LIMIT}"
            else:
                cleaned[field] = value
        elif field in ('opening_time', 'closing_time'):
            parsed = _parse_time(value)
            if parsed is None:
                errors[field] = "must be a 24-hour time in HH:MM format"
            else:
                cleaned[field] = parsed
        elif field == 'is_active':
            if not isinstance(value, bool):
                errors[field] = "must be true or false"
            else:
                cleaned[field] = value

    if errors:
        raise InvalidConfigError(errors)
    return cleaned


def update_config(**changes) -> PoolConfig:
    """
    Apply a partial configuration update atomically.

    Args:
        **changes: Any subset of max_capacity, max_hours_per_visit,
            opening_time, closing_time, is_active

    Returns:
        The updated PoolConfig

    Raises:
        InvalidConfigError: If any value is invalid (nothing is saved)
    """
    cleaned = validate_config_changes(changes)

    with transaction.atomic():
        PoolConfig.get_instance()
        config = PoolConfig.objects.select_for_update().get(pk=1)
        for field, value in cleaned.items():
            setattr(config, field, value)
        config.save()

    logger.info("Pool configuration updated: %s", sorted(cleaned))
    return config
