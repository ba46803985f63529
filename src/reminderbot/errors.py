"""Custom exception types for the PR reminder bot."""

from __future__ import annotations

from typing import Optional


class ReminderBotError(Exception):
    """Base exception for all recoverable reminder bot errors."""


class ConfigurationError(ReminderBotError):
    """Raised when runtime configuration values are missing or invalid."""


class AuthenticationError(ReminderBotError):
    """Raised when GitHub credentials are unavailable."""


class RemoteCallError(ReminderBotError):
    """Raised when a GitHub API request fails or returns an unexpected response."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(RemoteCallError):
    """Raised when GitHub answers 404 for the requested resource."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404)
