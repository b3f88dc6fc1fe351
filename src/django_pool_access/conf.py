"""Django Pool Access configuration.

All settings can be overridden in your Django settings.py.

Example:
    # settings.py
    POOL_ACCESS_DEFAULTS = {'max_capacity': 25, 'max_hours_per_visit': 3}
    POOL_ACCESS_DEPARTMENT_RESOLVER = 'residents.auth.department_for_request'
"""

from django.conf import settings
from django.utils.module_loading import import_string


# =============================================================================
# DEFAULTS
# =============================================================================

# Initial values for the PoolConfig singleton, used only when the row is created
DEFAULT_POOL_CONFIG = {
    'max_capacity': 10,
    'max_hours_per_visit': 2,
    'opening_time': '08:00',
    'closing_time': '22:00',
    'is_active': True,
}

# Upper bound for max_hours_per_visit
MAX_HOURS_LIMIT = 12

# Session key read by the default department resolver
DEPARTMENT_SESSION_KEY = 'department_code'


def get_setting(name: str, default=None):
    """Get a setting with POOL_ACCESS_ prefix."""
    return getattr(settings, f"POOL_ACCESS_{name}", default)


def get_config_defaults() -> dict:
    """Return PoolConfig creation defaults merged with POOL_ACCESS_DEFAULTS."""
    defaults = dict(DEFAULT_POOL_CONFIG)
    defaults.update(get_setting('DEFAULTS', {}) or {})
    return defaults


def session_department(request) -> str:
    """Default resolver: department code stored in the session at login."""
    return request.session.get(DEPARTMENT_SESSION_KEY, '')


def get_requester_department(request) -> str:
    """Resolve the department code of the user making the request."""
    resolver = get_setting('DEPARTMENT_RESOLVER')
    if resolver is None:
        return session_department(request)
    if isinstance(resolver, str):
        resolver = import_string(resolver)
    return resolver(request) or ''
