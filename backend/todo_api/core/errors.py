class TodoError(Exception):
    """Base class for failures raised by the todo handlers."""


class ValidationError(TodoError):
    """Malformed input: empty or oversized title, missing update fields."""


class NotFound(TodoError):
    """The referenced todo id does not exist."""


class StorageUnavailable(TodoError):
    """The underlying database could not be reached."""
