class FormFamilyError(Exception):
    """Raised when a form-family configuration cannot be provided."""


class UnknownFormFamilyError(FormFamilyError):
    """Raised when no bundled configuration exists for the requested family."""


class FormFamilyLoadError(FormFamilyError):
    """Raised when a form-family file cannot be read or has the wrong shape."""
