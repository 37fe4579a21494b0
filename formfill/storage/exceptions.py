class StorageError(Exception):
    """Base exception for all storage-related errors."""


class TemplateNotFoundError(StorageError):
    """Raised when a template cannot be found in storage."""


class FilledFormNotFoundError(StorageError):
    """Raised when a filled form cannot be found in storage."""


class DuplicateTemplateError(StorageError):
    """Raised when a template id is already taken."""
