"""Custom exception hierarchy for svcrecovery."""

from __future__ import annotations


class RecoveryError(Exception):
    """Base exception for all svcrecovery errors."""


class ParseError(RecoveryError):
    """Raised when status output or a desired-state document cannot be parsed."""


class CommandError(RecoveryError):
    """Raised when the service-control tool fails or exits nonzero."""

    def __init__(self, message: str, service: str = "", returncode: int | None = None) -> None:
        super().__init__(message)
        self.service = service
        self.returncode = returncode


class UserCancelledError(RecoveryError):
    """Raised when the user cancels a confirmation prompt."""


class AuditError(RecoveryError):
    """Raised when the audit database cannot be opened."""
