"""
Error types raised by the data access layer.

Database driver errors (IntegrityError, OperationalError, ...) are not wrapped;
they propagate from SQLAlchemy unchanged.
"""


class DatabaseError(Exception):
    """Base class for errors raised by the DAOs themselves."""


class RecordNotFoundError(DatabaseError, LookupError):
    """The requested row does not exist (or has been soft-deleted)."""

    def __init__(self, entity: str = "record", identifier=None):
        self.entity = entity
        self.identifier = identifier
        if identifier is None:
            message = f"{entity} does not exist"
        else:
            message = f"{entity} {identifier} does not exist"
        super().__init__(message)


class InvalidParamsError(DatabaseError, ValueError):
    """Invalid pagination, ordering or relation parameters."""


class InvalidValueError(DatabaseError, ValueError):
    """A field value was rejected before reaching the database."""


class BatchSizeExceededError(DatabaseError, ValueError):
    def __init__(self, size: int, maximum: int):
        self.size = size
        self.maximum = maximum
        super().__init__(f"batch size {size} exceeds maximum allowed {maximum}")


class AdvisoryLockError(DatabaseError):
    """A non-blocking transaction advisory lock could not be acquired."""

    def __init__(self, lock_id: int):
        self.lock_id = lock_id
        super().__init__(f"failed to acquire transaction advisory lock {lock_id}")
