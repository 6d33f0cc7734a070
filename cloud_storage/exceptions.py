# exceptions.py


class StorageError(Exception):
    """Base class for errors raised by the storage adapters themselves."""
    pass


class InvalidArgumentError(StorageError, ValueError):
    """An argument passed to an adapter operation is not acceptable."""
    pass


class PathTraversalError(InvalidArgumentError):
    """A remote path tries to leave the configured base directory."""
    pass


class DestinationExistsError(InvalidArgumentError):
    """The local download target already exists and overwrite was not requested."""
    pass
