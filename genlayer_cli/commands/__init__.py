"""
Commands module - CLI commands and the services behind them.
"""

from genlayer_cli.commands.errors import (
    ClientError,
    ConfigurationError,
    GenlayerError,
    MissingRequirementError,
    RequestTimeoutError,
    UserDeclinedError,
    ValidationError,
    VersionRequiredError,
)

__all__ = [
    "ClientError",
    "ConfigurationError",
    "GenlayerError",
    "MissingRequirementError",
    "RequestTimeoutError",
    "UserDeclinedError",
    "ValidationError",
    "VersionRequiredError",
]
