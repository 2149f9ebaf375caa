from __future__ import annotations


class TodoAppError(Exception):
    """Base class for errors surfaced to the user."""


class ValidationError(TodoAppError):
    """Form input rejected before any storage access.

    ``errors`` maps a field name (``title``, ``deadline``) to its message.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = dict(errors)
        details = "; ".join(f"{field}: {message}" for field, message in self.errors.items())
        super().__init__(details or "invalid input")


class ImportFormatError(TodoAppError):
    """Import file is not a JSON array of todo records."""
