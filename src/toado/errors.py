"""Error types raised by the storage layer and the command dispatcher.

Every error carries the exit code the CLI terminates with when the error
reaches the command wrapper.
"""

from __future__ import annotations

from toado.utils import exit_codes


class ToadoError(Exception):
    """Base application error with exit code."""

    exit_code: int = exit_codes.ERROR_GENERAL

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(ToadoError):
    """Missing or invalid input fields."""

    exit_code = exit_codes.ERROR_INVALID_ARGS


class NotFoundError(ToadoError):
    """A referenced task or project id does not exist."""

    exit_code = exit_codes.ERROR_NOT_FOUND

    def __init__(self, kind: str, identifier: object):
        super().__init__(f"{kind} not found: {identifier}")
        self.kind = kind
        self.identifier = identifier


class StorageError(ToadoError):
    """The database file could not be opened, read or written."""

    exit_code = exit_codes.ERROR_STORAGE


class ConfigError(ToadoError):
    """The configuration file is unreadable or malformed."""

    exit_code = exit_codes.ERROR_CONFIG
