"""django-pool-access: Capacity-gated pool access ledger."""

__version__ = "0.1.0"

_EXPORTS = {
    # ledger
    "register_access": "ledger",
    "mark_exit": "ledger",
    "can_close": "ledger",
    "get_access": "ledger",
    "active_accesses": "ledger",
    "access_history": "ledger",
    "get_active_access_for": "ledger",
    # directory
    "register_guest": "directory",
    "remove_guest": "directory",
    "list_by_department": "directory",
    "list_all": "directory",
    "get_guest": "directory",
    "resolve_guest": "directory",
    # occupancy
    "current_occupancy": "occupancy",
    "by_category": "occupancy",
    "remaining_capacity": "occupancy",
    "pool_stats": "occupancy",
    # expiry
    "expected_exit": "expiry",
    "remaining": "expiry",
    "overtime_accesses": "expiry",
    # config
    "get_config": "config",
    "update_config": "config",
    # persons
    "Owner": "persons",
    "Guest": "persons",
    "GuestType": "persons",
}

__all__ = list(_EXPORTS)


def __getattr__(name):
    """Lazy imports to prevent AppRegistryNotReady errors."""
    if name in _EXPORTS:
        from importlib import import_module

        module = import_module(f".{_EXPORTS[name]}", __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
