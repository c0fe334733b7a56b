from __future__ import annotations

from typing import Optional

from .enums import ApprovalStage


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a request or principal cannot be found."""


class AuthorizationError(DomainError):
    """Raised when a principal lacks permission for the current stage."""

    def __init__(self, message: str, *, stage: Optional[ApprovalStage] = None):
        super().__init__(message)
        self.stage = stage


class InvalidStateError(DomainError):
    """Raised when a request already left its pending stages."""


class ConflictError(DomainError):
    """Raised when the stored status moved between decision and write."""


class StoreError(DomainError):
    """Raised when the persistence layer fails."""
