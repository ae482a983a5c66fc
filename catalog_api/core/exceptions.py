"""Catalog domain exceptions.

Raised by the service layer when a referenced entity is missing or a
business rule is violated. The API layer translates them into HTTP
responses (see ``catalog_api.api.errors``).
"""


class CatalogError(Exception):
    """Base class for catalog business errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CatalogError):
    """A referenced category or product does not exist or is soft-deleted."""


class InvalidOperationError(CatalogError):
    """A business rule forbids the requested change."""


class CycleDetectedError(InvalidOperationError):
    """Reparenting would make a category its own ancestor."""


class ValidationFailureError(CatalogError):
    """Input passed schema validation but cannot be used (e.g. a name with no slug characters)."""
