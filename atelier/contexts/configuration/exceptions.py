"""Custom exceptions for template configuration validation and customization."""

from typing import List, Optional


class TemplateValidationError(ValueError):
    """
    Exception raised when a template configuration fails structural validation.

    Attributes:
        message: Error description
        errors: Every structural error found (not just the first)
        template_id: Identifier of the configuration being validated, if known
    """

    def __init__(
        self,
        message: str,
        errors: Optional[List[str]] = None,
        template_id: Optional[str] = None,
    ):
        self.message = message
        self.errors = list(errors or [])
        self.template_id = template_id

        parts = [message]
        if self.errors:
            parts.append(", ".join(self.errors))

        super().__init__(": ".join(parts))


class InvalidCustomizationError(TemplateValidationError):
    """
    Exception raised when a customization overlay is malformed.

    Raised before any merge result exists, e.g. when an overlay group is not a
    mapping, names an unknown field, or tries to set `id` or `version`.
    """

    pass
