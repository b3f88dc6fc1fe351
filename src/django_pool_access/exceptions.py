"""Custom exceptions for django-pool-access."""


class PoolAccessError(Exception):
    """Base exception for pool access errors."""
    pass


class CapacityExceededError(PoolAccessError):
    """Raised when the pool already holds max_capacity active accesses."""

    def __init__(self, max_capacity: int, current_occupancy: int):
        self.max_capacity = max_capacity
        self.current_occupancy = current_occupancy
        super().__init__(
            f"Pool is full: {current_occupancy} of {max_capacity} places taken"
        )


class DuplicateAccessError(PoolAccessError):
    """Raised when a person already has an active access."""

    def __init__(self, person_id, access_id=None):
        self.person_id = person_id
        self.access_id = access_id
        super().__init__(f"Person '{person_id}' is already in the pool")


class NotFoundError(PoolAccessError):
    """Raised when an access record or registration does not exist."""

    def __init__(self, kind: str, object_id):
        self.kind = kind
        self.object_id = object_id
        super().__init__(f"{kind} '{object_id}' not found")


class AlreadyExitedError(PoolAccessError):
    """Raised when marking exit on a completed access."""

    def __init__(self, access_id):
        self.access_id = access_id
        super().__init__(f"Access '{access_id}' has already been closed")


class HasActiveAccessError(PoolAccessError):
    """Raised when removing a guest who is currently in the pool."""

    def __init__(self, entry_id):
        self.entry_id = entry_id
        super().__init__(
            f"Guest '{entry_id}' has an active pool access and cannot be removed"
        )


class InvalidConfigError(PoolAccessError):
    """Raised when a pool configuration update is invalid.

    errors maps field name -> message.
    """

    def __init__(self, errors: dict):
        self.errors = errors
        details = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
        super().__init__(f"Invalid pool configuration ({details})")


class InvalidDurationError(PoolAccessError):
    """Raised when estimated hours fall outside [1, max_hours_per_visit]."""

    def __init__(self, hours, max_hours: int):
        self.hours = hours
        self.max_hours = max_hours
        super().__init__(
            f"Estimated hours must be between 1 and {max_hours}, got {hours}"
        )


class PoolInactiveError(PoolAccessError):
    """Raised when registering access while the pool is disabled."""

    def __init__(self):
        super().__init__("Pool is not accepting entries")


class DepartmentMismatchError(PoolAccessError):
    """Raised when the department does not match the person's department."""

    def __init__(self, expected: str, given: str):
        self.expected = expected
        self.given = given
        super().__init__(
            f"Department '{given}' does not match person's department '{expected}'"
        )


class ConfigDeletionError(PoolAccessError):
    """Raised when attempting to delete the PoolConfig singleton."""

    def __init__(self):
        super().__init__("PoolConfig is a singleton and cannot be deleted")
