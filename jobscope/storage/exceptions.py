class StorageError(Exception):
    """Raised when the key-value backend cannot be read or written."""

    user_message = (
        "Local storage could not be read or written. "
        "Check the storage file or database settings and try again."
    )
