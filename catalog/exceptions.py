"""Custom exception classes for the catalog."""


class CatalogException(Exception):
    """
    Base exception class for all catalog errors.
    """
    pass


class StorageError(CatalogException):
    """
    Raised by a record store when the underlying storage fails
    (connection loss, constraint violation, lock timeout).
    """
    pass


class IngestionFailedError(CatalogException):
    """
    Raised when an ingestion batch was rolled back as a whole.
    """
    pass


class UnknownStoreBackendError(CatalogException):
    """
    Raised when the configured store backend name is not recognised.
    """
    pass
