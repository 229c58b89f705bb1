"""Exceptions raised while building a review report."""


class ReportError(Exception):
    """Base class for all report builder errors."""


class ValidationError(ReportError, ValueError):
    """A finding was rejected at construction time.

    Raised for an unknown category or severity, an empty title, or a raw
    findings payload that cannot be decoded.
    """


class TemplateError(ReportError):
    """A finding lacks data the report template requires."""
