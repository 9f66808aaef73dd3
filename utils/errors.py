# utils/errors.py


class StoreError(RuntimeError):
    """The key-value store could not be reached or written."""


class ValidationFailed(ValueError):
    """A required field is missing or a value is rejected."""


class NotFound(LookupError):
    pass


class Forbidden(PermissionError):
    pass
