"""
Typed error classes for genlayer-cli.

This module provides the error hierarchy used by the CLI:
- GenlayerError: Base exception for all genlayer-cli errors
- MissingRequirementError: A required system tool is not installed
- VersionRequiredError: An installed tool is older than the minimum version
- ClientError: JSON-RPC / HTTP communication errors
- ValidationError: Input validation errors
- ConfigurationError: Config, keypair and env file errors
- UserDeclinedError: The user answered "no" to a confirmation prompt
"""

from typing import Any, Optional


class GenlayerError(Exception):
    """Base exception class for all genlayer-cli errors.

    Attributes:
        message: Human-readable error message
        code: Optional error code for programmatic handling
        details: Optional dictionary with additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        result: dict[str, Any] = {
            "type": self.__class__.__name__,
            "message": self.message,
        }
        if self.code:
            result["code"] = self.code
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class MissingRequirementError(GenlayerError):
    """Raised when a required system tool (git, docker, ...) is not installed."""

    def __init__(self, requirement: str, details: Optional[dict[str, Any]] = None):
        self.requirement = requirement
        details = details or {}
        details["requirement"] = requirement
        super().__init__(
            f"{requirement} is not installed. Please install {requirement}.",
            code="MISSING_REQUIREMENT",
            details=details,
        )


class VersionRequiredError(GenlayerError):
    """Raised when an installed tool does not satisfy the minimum version."""

    def __init__(
        self,
        tool: str,
        required_version: str,
        details: Optional[dict[str, Any]] = None,
    ):
        self.tool = tool
        self.required_version = required_version
        details = details or {}
        details["tool"] = tool
        details["required_version"] = required_version
        super().__init__(
            f"{tool} version {required_version} or higher is required. "
            f"Please update {tool}.",
            code="VERSION_REQUIRED",
            details=details,
        )


class ClientError(GenlayerError):
    """Errors talking to the JSON-RPC backend.

    Raised when:
    - The HTTP transport fails (connection refused, DNS, ...)
    - The backend answers with a non-OK HTTP status on a strict call
    - The backend answers with a JSON-RPC error object
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.url = url
        self.status_code = status_code
        details = details or {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, code=code or "CLIENT_ERROR", details=details)


class RequestTimeoutError(ClientError):
    """Raised when a request to the backend times out."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, url=url, code="TIMEOUT", details=details)


class ValidationError(GenlayerError):
    """Raised when user input fails validation."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.field = field
        self.value = value
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, code="VALIDATION_FAILED", details=details)


class ConfigurationError(GenlayerError):
    """Raised for problems with the config file, keypair file or env file."""

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.config_file = config_file
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        super().__init__(message, code=code or "CONFIGURATION_ERROR", details=details)


class UserDeclinedError(GenlayerError):
    """Raised when the user declines a confirmation prompt.

    This is not a failure: the top-level command group turns it into a clean
    exit with status 0.
    """

    def __init__(self, message: str = "Operation aborted!"):
        super().__init__(message, code="USER_DECLINED")


# Export all error classes for convenient importing
__all__ = [
    "GenlayerError",
    "MissingRequirementError",
    "VersionRequiredError",
    "ClientError",
    "RequestTimeoutError",
    "ValidationError",
    "ConfigurationError",
    "UserDeclinedError",
]
