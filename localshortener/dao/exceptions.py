"""Exceptions related to Data Access Objects (DAO) operations.

These exceptions never escape the public DAO interface: reads that fail
return an empty collection and writes that fail return False. They exist
so that the failure paths inside each DAO stay explicit and testable.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, OOM, quota, etc.).

    CorruptedDataError:
        Raised when the stored collection cannot be deserialized.

Example:
    >>> from localshortener.dao.exceptions import CorruptedDataError
    >>> raise CorruptedDataError("Stored URL records are not a JSON array.")
    Traceback (most recent call last):
        ...
    localshortener.dao.exceptions.CorruptedDataError: Stored URL records are not a JSON array.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, storage quota exceeded, etc.
    """

    pass


class CorruptedDataError(DAOError):
    """Exception raised when stored URL records cannot be deserialized."""

    pass
