"""
Unit tests for the system command runner.
"""

import subprocess
import sys
from unittest.mock import patch

import pytest

from genlayer_cli.commands.errors import GenlayerError, MissingRequirementError
from genlayer_cli.commands.system import (
    check_command,
    execute_command,
    execute_command_by_platform,
    get_platform,
    get_version,
)


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(
        args=[], returncode=returncode, stdout=stdout, stderr=stderr
    )


class TestCheckCommand:
    @patch("genlayer_cli.commands.system.subprocess.run")
    def test_passes_when_tool_answers(self, mock_run):
        mock_run.return_value = _completed(stdout="git version 2.40.0")
        check_command("git --version", "git")
        assert mock_run.call_args.args[0] == ["git", "--version"]

    @patch("genlayer_cli.commands.system.subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError()
        with pytest.raises(MissingRequirementError) as exc_info:
            check_command("docker --version", "docker")
        assert exc_info.value.requirement == "docker"

    @patch("genlayer_cli.commands.system.subprocess.run")
    def test_stderr_output_counts_as_missing(self, mock_run):
        mock_run.return_value = _completed(stderr="Cannot connect to the Docker daemon")
        with pytest.raises(MissingRequirementError):
            check_command("docker ps", "docker")

    @patch("genlayer_cli.commands.system.subprocess.run")
    def test_nonzero_exit_counts_as_missing(self, mock_run):
        mock_run.return_value = _completed(returncode=127)
        with pytest.raises(MissingRequirementError):
            check_command("git --version", "git")


class TestExecuteCommand:
    @patch("genlayer_cli.commands.system.subprocess.run")
    def test_returns_output(self, mock_run):
        mock_run.return_value = _completed(stdout="done", stderr="warn")
        assert execute_command("echo done") == {"stdout": "done", "stderr": "warn"}
        assert mock_run.call_args.kwargs["shell"] is True

    @patch("genlayer_cli.commands.system.subprocess.run")
    def test_failure_message_names_tool(self, mock_run):
        mock_run.return_value = _completed(returncode=1, stderr="fatal: not a repo")
        with pytest.raises(GenlayerError) as exc_info:
            execute_command("git pull", "git")
        assert exc_info.value.message == "Error executing git: fatal: not a repo."


class TestPlatformDispatch:
    @patch("genlayer_cli.commands.system.execute_command")
    @patch("genlayer_cli.commands.system.get_platform", return_value="linux")
    def test_runs_command_for_host(self, _platform, mock_execute):
        execute_command_by_platform({"linux": "run-linux", "darwin": "run-mac"}, "x")
        mock_execute.assert_called_once_with("run-linux", "x")

    @patch("genlayer_cli.commands.system.get_platform", return_value="sunos5")
    def test_unsupported_platform(self, _platform):
        with pytest.raises(GenlayerError, match="Unsupported platform: sunos5."):
            execute_command_by_platform({"linux": "a"})

    def test_get_platform_normalizes_linux(self, monkeypatch):
        monkeypatch.setattr(sys, "platform", "linux2")
        assert get_platform() == "linux"


class TestGetVersion:
    @patch("genlayer_cli.commands.system.execute_command")
    def test_parses_semver(self, mock_execute):
        mock_execute.return_value = {
            "stdout": "Docker version 26.1.3, build b72abbb",
            "stderr": "",
        }
        assert get_version("docker") == "26.1.3"

    @patch("genlayer_cli.commands.system.execute_command")
    def test_no_match_returns_empty_string(self, mock_execute):
        mock_execute.return_value = {"stdout": "unknown", "stderr": ""}
        assert get_version("node") == ""

    @patch("genlayer_cli.commands.system.execute_command")
    def test_failure_is_wrapped(self, mock_execute):
        mock_execute.side_effect = GenlayerError("boom")
        with pytest.raises(GenlayerError, match="Error getting node version."):
            get_version("node")
