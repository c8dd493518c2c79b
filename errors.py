"""Exception types surfaced by the category services.

Callers are expected to distinguish three failure classes:

- ValidationError: the input itself is malformed. Fix the input and resubmit.
- NotFoundError: a referenced category does not exist.
- ConflictError: the input is well-formed but clashes with stored state
  (duplicate name, cycle, delete with children or documents). Re-fetch and
  retry with updated assumptions.

None of these are retried internally.
"""

from typing import Dict


class FolioError(Exception):
    """Base class for all errors raised by Folio services."""


class ValidationError(FolioError):
    """Raised when input fails field-level validation.

    Attributes:
        errors: Mapping of field name to a human-readable message, one entry
            per offending field.
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        summary = "; ".join(f"{field}: {msg}" for field, msg in self.errors.items())
        super().__init__(f"Validation failed - {summary}")


class NotFoundError(FolioError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, identifier, message: str = None):
        self.entity = entity
        self.identifier = identifier
        super().__init__(message or f"{entity} with ID {identifier} not found")


class ConflictError(FolioError):
    """Raised when a request conflicts with the current stored state."""

    def __init__(self, message: str, field: str = None):
        self.field = field
        super().__init__(message)
