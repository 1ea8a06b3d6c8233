class StoreError(Exception):
    """Base class for failures raised by the community store."""


class ValidationError(StoreError):
    pass


class NotFoundError(StoreError):
    pass


class StorageError(StoreError):
    """A document could not be written (or read for a reason other than absence)."""
