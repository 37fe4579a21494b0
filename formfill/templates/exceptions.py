class TemplateError(Exception):
    """Base exception for all template-related errors."""


class TemplateParseError(TemplateError):
    """Raised when a JSON document cannot be turned into a Template."""


class TemplateLoadError(TemplateError):
    """Raised when a template file cannot be read or decoded."""
