"""Exceptions shared by the storage gateway, the repository and the HTTP layer"""


class StorageError(Exception):
    """Database I/O failed"""
    pass


class StorageTimeout(StorageError):
    """A storage call did not finish within its timeout"""
    pass


class ConstraintViolation(StorageError):
    """The store rejected a write (duplicate key, missing required column)"""
    pass


class StorageUnavailable(StorageError):
    """The database could not be reached when the service started"""
    pass
