"""
System command runner - external processes, platform dispatch and versions.
"""

import logging
import re
import shlex
import subprocess
import sys
from typing import Optional

import click

from genlayer_cli.commands.constants import AVAILABLE_PLATFORMS
from genlayer_cli.commands.errors import GenlayerError, MissingRequirementError

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"(\d+\.\d+\.\d+)")


def get_platform() -> str:
    """Return the host platform as one of darwin, win32 or linux."""
    if sys.platform.startswith("linux"):
        return "linux"
    return sys.platform


def check_command(command: str, tool_name: str) -> None:
    """Run a check command and raise if the tool is not available.

    Raises:
        MissingRequirementError: If the executable is missing, exits non-zero,
            or writes anything to stderr.
    """
    try:
        completed = subprocess.run(
            shlex.split(command), capture_output=True, text=True, check=False
        )
    except FileNotFoundError as e:
        raise MissingRequirementError(tool_name) from e

    if completed.returncode != 0 or completed.stderr.strip():
        logger.debug("%s check failed: %s", tool_name, completed.stderr.strip())
        raise MissingRequirementError(tool_name)


def execute_command(command: str, tool_name: Optional[str] = None) -> dict[str, str]:
    """Run a shell command and return its output.

    Raises:
        GenlayerError: If the command exits non-zero.
    """
    logger.debug("Executing: %s", command)
    completed = subprocess.run(
        command, shell=True, capture_output=True, text=True, check=False
    )
    if completed.returncode != 0:
        message = completed.stderr.strip() or f"exit status {completed.returncode}"
        raise GenlayerError(
            f"Error executing {tool_name or command}: {message}.",
            code="COMMAND_FAILED",
            details={"command": command, "returncode": completed.returncode},
        )
    return {"stdout": completed.stdout, "stderr": completed.stderr}


def execute_command_by_platform(
    commands_by_platform: dict[str, str], tool_name: Optional[str] = None
) -> dict[str, str]:
    """Pick the command for the host platform and run it.

    Raises:
        GenlayerError: On an unsupported platform or a failing command.
    """
    platform = get_platform()
    if platform not in AVAILABLE_PLATFORMS or platform not in commands_by_platform:
        raise GenlayerError(
            f"Unsupported platform: {platform}.", code="UNSUPPORTED_PLATFORM"
        )
    return execute_command(commands_by_platform[platform], tool_name)


def get_version(tool_name: str) -> str:
    """Return the x.y.z version printed by ``<tool> --version``, or "" if none.

    Raises:
        GenlayerError: If the tool cannot be run.
    """
    try:
        output = execute_command(f"{tool_name} --version", tool_name)
    except GenlayerError as e:
        raise GenlayerError(
            f"Error getting {tool_name} version.", code="VERSION_UNAVAILABLE"
        ) from e

    match = VERSION_PATTERN.search(output["stdout"])
    return match.group(1) if match else ""


def open_url(url: str) -> None:
    """Open a URL with the platform default handler."""
    logger.debug("Opening %s", url)
    click.launch(url)
