"""Domain-level exception hierarchy for service and repository layers."""

from __future__ import annotations


class DomainError(Exception):
    """Base class for domain-specific failures."""


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist."""


class ConflictError(DomainError):
    """Raised when a state conflict occurs (e.g. duplicate order numbers)."""


class ValidationError(DomainError):
    """Raised when input validation fails at the domain/service layer."""


class InsufficientStockError(ValidationError):
    """Raised at checkout when a cart line asks for more units than are free."""

    def __init__(self, *, equipment_id: int, name: str, available: int, requested: int) -> None:
        self.equipment_id = equipment_id
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough units of {name}. Available: {available}, requested: {requested}"
        )


class AuthenticationError(DomainError):
    """Raised when a back-office call lacks an authenticated session."""


class InfrastructureError(DomainError):
    """Raised when infrastructure (DB or external service) is unavailable."""
