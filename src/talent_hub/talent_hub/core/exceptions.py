from __future__ import annotations

from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    `errors` maps a form field to its message when the failure is field-scoped.
    """

    def __init__(self, message: str = "Dados inválidos", errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.errors: dict[str, str] = dict(errors or {})


class ProvisioningError(DomainError):
    """Raised when the account provisioning collaborator rejects a user."""

    GENERIC_MESSAGE = "Erro ao processar cadastro"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.GENERIC_MESSAGE)


class MembershipWriteError(DomainError):
    """Raised when team memberships could not be written for a new user."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""
