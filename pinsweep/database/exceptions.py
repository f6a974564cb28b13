class StoreError(Exception):
    """Base exception for shared store errors."""


class PoolNotInitializedError(StoreError, RuntimeError):
    """Raised when a connection is requested before init_pool()."""


class FileTaskNotFoundError(StoreError):
    """Raised when a file task cannot be found in the database."""
