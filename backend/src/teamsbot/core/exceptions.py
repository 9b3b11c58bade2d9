"""Custom exceptions for the TeamsBot messaging extension.

Every failure a single invoke can hit maps to one of these; the API layer
turns them into structured error responses.
"""

from typing import Any


class TeamsBotException(Exception):
    """Base exception class for the messaging extension."""

    def __init__(
        self,
        message: str,
        error_code: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# Data source
class DataSourceError(TeamsBotException):
    """Raised when the character data source is missing, unreadable, or malformed."""

    def __init__(self, source: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Character data source '{source}' could not be loaded: {reason}",
            error_code="DATA_SOURCE_ERROR",
            status_code=500,
            details=details or {"source": source, "reason": reason},
        )


# Invoke payloads
class MalformedQueryError(TeamsBotException):
    """Raised when query parameters are not a list of name/value objects."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Malformed query parameters: {reason}",
            error_code="MALFORMED_QUERY",
            status_code=400,
            details=details or {"reason": reason},
        )


class MalformedSelectionError(TeamsBotException):
    """Raised when a selectItem payload is not a five-field preview tuple."""

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Malformed selection payload: {reason}",
            error_code="MALFORMED_SELECTION",
            status_code=400,
            details=details or {"reason": reason},
        )


class UnknownCommandError(TeamsBotException):
    """Raised when a submitAction names a command with no registered implementation."""

    def __init__(self, command_id: str | None, details: dict[str, Any] | None = None):
        self.command_id = command_id
        super().__init__(
            message=f"Invalid CommandId: {command_id}",
            error_code="UNKNOWN_COMMAND",
            status_code=400,
            details=details or {"command_id": command_id},
        )


class InvalidCommandInputError(TeamsBotException):
    """Raised when command form data does not match the command's input shape."""

    def __init__(self, command_id: str, reason: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Invalid input for command '{command_id}': {reason}",
            error_code="INVALID_COMMAND_INPUT",
            status_code=400,
            details=details or {"command_id": command_id, "reason": reason},
        )


class UnsupportedInvokeError(TeamsBotException):
    """Raised for invoke activities this extension does not handle."""

    def __init__(self, invoke_name: str | None, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Unsupported invoke activity: {invoke_name}",
            error_code="UNSUPPORTED_INVOKE",
            status_code=501,
            details=details or {"invoke_name": invoke_name},
        )
