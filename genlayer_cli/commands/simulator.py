"""
Simulator lifecycle orchestration.

SimulatorService sequences everything the ``init``, ``up`` and ``stop``
commands need from the local GenLayer simulator:

1. Requirement checks: git/docker installed, docker daemon reachable,
   minimum tool versions.
2. Docker reset: stop and remove containers, remove images, all matched by
   the ``genlayer-simulator-`` name prefix.
3. Checkout management: clone or pull the simulator repository.
4. Launch and readiness: run the platform terminal command, then poll the
   ``ping`` JSON-RPC method until the backend reports OK.
5. Population: clean the database, delete and create validators.
6. Environment: merge values into the simulator ``.env`` file.

The service never prints. Callers catch its exceptions and report them.
"""

import logging
import re
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional, Union

from dotenv import dotenv_values
from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion, Version

from genlayer_cli.commands.constants import (
    DEFAULT_PULL_OLLAMA_COMMAND,
    DEFAULT_REPO_GH_URL,
    DEFAULT_RUN_DOCKER_COMMAND,
    DEFAULT_RUN_SIMULATOR_COMMAND,
    DEFAULT_SIMULATOR_LOCATION,
    DOCKER_IMAGES_AND_CONTAINERS_NAME_PREFIX,
    MAX_VALIDATOR_STAKE,
    MIN_VALIDATOR_STAKE,
    READINESS_ERROR,
    READINESS_TIMEOUT,
    STARTING_TIMEOUT_ATTEMPTS,
    STARTING_TIMEOUT_WAIT_CYCLE,
    VERSION_REQUIREMENTS,
)
from genlayer_cli.commands.errors import (
    ClientError,
    ConfigurationError,
    GenlayerError,
    MissingRequirementError,
    VersionRequiredError,
)
from genlayer_cli.commands.manager import DockerManager
from genlayer_cli.commands.networks import AI_PROVIDERS
from genlayer_cli.commands.rpc_client import CONNECTION_REFUSED, JsonRpcClient
from genlayer_cli.commands.system import (
    check_command,
    execute_command,
    execute_command_by_platform,
    get_version,
    open_url,
)

logger = logging.getLogger(__name__)

ENV_FILE_NAME = ".env"
ENV_EXAMPLE_FILE_NAME = ".env.example"
DEFAULT_FRONTEND_PORT = "8080"


@dataclass
class ReadinessResult:
    """Outcome of waiting for the simulator backend."""

    initialized: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None


def normalize_ping_status(response: Any) -> Optional[str]:
    """Extract the status string from a ``ping`` response.

    The backend has answered ping in three shapes over time, all accepted:

    - ``{"result": "OK"}``
    - ``{"result": {"status": "OK"}}``
    - ``{"result": {"data": {"status": "OK"}}}``

    They are checked in that order and the first string found wins. Anything
    else (None, missing result, unexpected types) yields None.
    """
    if not isinstance(response, dict):
        return None
    result = response.get("result")
    if isinstance(result, str):
        return result
    if not isinstance(result, dict):
        return None
    status = result.get("status")
    if isinstance(status, str):
        return status
    data = result.get("data")
    if isinstance(data, dict) and isinstance(data.get("status"), str):
        return data["status"]
    return None


def is_ping_ok(response: Any) -> bool:
    return normalize_ping_status(response) == "OK"


_ENV_QUOTE_TRIGGERS = re.compile(r"[\s#'\"\\]")


def _format_env_value(value: str) -> str:
    """Render a value so ``dotenv_values`` reads it back unchanged.

    Values with whitespace, ``#``, quotes or backslashes are double-quoted
    with ``\\`` and ``"`` escaped. Everything else is written bare.
    """
    if not _ENV_QUOTE_TRIGGERS.search(value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _format_by_platform(templates: dict[str, str], location: Path) -> dict[str, str]:
    return {
        platform: template.format(location=location)
        for platform, template in templates.items()
    }


class SimulatorService:
    """Drives the local simulator through Docker, git and JSON-RPC."""

    def __init__(
        self,
        location: Optional[Union[str, Path]] = None,
        rpc: Optional[JsonRpcClient] = None,
        docker_manager: Optional[DockerManager] = None,
        wait_interval: float = STARTING_TIMEOUT_WAIT_CYCLE,
    ):
        self.location = Path(location) if location else DEFAULT_SIMULATOR_LOCATION
        self.rpc = rpc or JsonRpcClient()
        self.docker = docker_manager or DockerManager()
        self.wait_interval = wait_interval

    # Requirement checks

    def check_install_requirements(self) -> dict[str, bool]:
        """Report which of git and docker are installed.

        If docker is installed but its daemon does not answer, the platform
        "start docker" command is run once. The result still reports docker
        as installed.
        """
        requirements = {"git": False, "docker": False}

        for tool in requirements:
            try:
                check_command(f"{tool} --version", tool)
                requirements[tool] = True
            except MissingRequirementError:
                logger.debug("%s is not installed", tool)

        if requirements["docker"]:
            try:
                check_command("docker ps", "docker")
            except MissingRequirementError:
                logger.debug("Docker daemon not reachable, trying to start it")
                execute_command_by_platform(DEFAULT_RUN_DOCKER_COMMAND, "docker")

        return requirements

    def check_version(self, minimum_version: str, tool: str) -> None:
        """Raise VersionRequiredError if ``tool`` is older than ``minimum_version``."""
        installed = get_version(tool)
        try:
            satisfied = Version(installed) in SpecifierSet(f">={minimum_version}")
        except InvalidVersion:
            satisfied = False
        if not satisfied:
            raise VersionRequiredError(tool, minimum_version)

    def check_version_requirements(self) -> dict[str, str]:
        """Map each tool that fails its minimum version to the required version.

        Tools that satisfy their requirement are absent from the result.
        """
        missing_versions: dict[str, str] = {}
        for tool, minimum_version in VERSION_REQUIREMENTS.items():
            try:
                self.check_version(minimum_version, tool)
            except VersionRequiredError as e:
                missing_versions[tool] = e.required_version
        return missing_versions

    # Docker resources

    def reset_docker_containers(self) -> bool:
        """Stop and remove every simulator container. The first failure aborts."""
        containers = self.docker.list_containers(
            DOCKER_IMAGES_AND_CONTAINERS_NAME_PREFIX
        )
        for container in containers:
            if self.docker.is_container_running(container):
                self.docker.stop_container(container)
            self.docker.remove_container(container)
        return True

    def reset_docker_images(self) -> bool:
        """Force-remove every simulator image. The first failure aborts."""
        for image in self.docker.list_images(DOCKER_IMAGES_AND_CONTAINERS_NAME_PREFIX):
            self.docker.remove_image(image)
        return True

    def stop_docker_containers(self) -> None:
        for container in self.docker.list_containers(
            DOCKER_IMAGES_AND_CONTAINERS_NAME_PREFIX
        ):
            if self.docker.is_container_running(container):
                self.docker.stop_container(container)

    def is_localnet_running(self) -> bool:
        return any(
            self.docker.is_container_running(container)
            for container in self.docker.list_containers(
                DOCKER_IMAGES_AND_CONTAINERS_NAME_PREFIX
            )
        )

    # Checkout

    def download_simulator(self) -> dict[str, bool]:
        """Clone the simulator repository.

        Returns:
            ``{"wasInstalled": True}`` if the clone failed because a checkout
            already exists, ``{"wasInstalled": False}`` after a fresh clone.
        """
        try:
            execute_command(f"git clone {DEFAULT_REPO_GH_URL} {self.location}", "git")
        except GenlayerError:
            if self.location.exists():
                return {"wasInstalled": True}
            raise
        return {"wasInstalled": False}

    def update_simulator(self) -> dict[str, bool]:
        execute_command(f"cd {self.location} && git pull", "git")
        return {"wasInstalled": False}

    # Launch and readiness

    def run_simulator(self) -> dict[str, str]:
        return execute_command_by_platform(
            _format_by_platform(DEFAULT_RUN_SIMULATOR_COMMAND, self.location)
        )

    def wait_for_simulator_to_be_ready(
        self, retries: int = STARTING_TIMEOUT_ATTEMPTS
    ) -> ReadinessResult:
        """Poll ``ping`` until the backend reports OK.

        A non-OK or empty answer sleeps and retries until ``retries`` is spent
        (``TIMEOUT``). A refused connection means the containers are still
        starting, so it is retried the same way with a doubled sleep. Any
        other exception ends the wait at once with ``ERROR``.
        """
        while True:
            try:
                response = self.rpc.request("ping", [])
            except ClientError as e:
                if e.code != CONNECTION_REFUSED:
                    logger.debug("Ping failed: %s", e)
                    return ReadinessResult(
                        initialized=False,
                        error_code=READINESS_ERROR,
                        error_message=e.message,
                    )
                if retries <= 0:
                    return ReadinessResult(
                        initialized=False,
                        error_code=READINESS_TIMEOUT,
                        error_message=e.message,
                    )
                logger.debug("Simulator not listening yet, %d retries left", retries)
                time.sleep(self.wait_interval * 2)
                retries -= 1
                continue
            except (GenlayerError, ValueError) as e:
                logger.debug("Ping failed: %s", e)
                return ReadinessResult(
                    initialized=False,
                    error_code=READINESS_ERROR,
                    error_message=e.message if isinstance(e, GenlayerError) else str(e),
                )

            if is_ping_ok(response):
                return ReadinessResult(initialized=True)

            if retries <= 0:
                return ReadinessResult(initialized=False, error_code=READINESS_TIMEOUT)

            logger.debug("Simulator not ready yet, %d retries left", retries)
            time.sleep(self.wait_interval)
            retries -= 1

    def pull_ollama_model(self) -> bool:
        execute_command_by_platform(
            _format_by_platform(DEFAULT_PULL_OLLAMA_COMMAND, self.location), "ollama"
        )
        return True

    # Backend state

    def clean_database(self) -> Any:
        return self.rpc.call("sim_clearDbTables", [["current_state", "transactions"]])

    def delete_all_validators(self) -> Any:
        return self.rpc.call("sim_deleteAllValidators", [])

    def create_random_validators(
        self,
        num_validators: int,
        llm_providers: Iterable[str],
        llm_models: Optional[Iterable[str]] = None,
    ) -> Any:
        return self.rpc.call(
            "sim_createRandomValidators",
            [
                num_validators,
                MIN_VALIDATOR_STAKE,
                MAX_VALIDATOR_STAKE,
                list(llm_providers),
                list(llm_models or []),
            ],
        )

    # Environment file

    @property
    def env_file_path(self) -> Path:
        return self.location / ENV_FILE_NAME

    def ensure_env_file(self) -> bool:
        """Create ``.env`` from ``.env.example`` if it does not exist yet.

        Returns:
            True if the file was created.
        """
        if self.env_file_path.exists():
            return False
        example = self.location / ENV_EXAMPLE_FILE_NAME
        if not example.exists():
            raise ConfigurationError(
                f"Missing {ENV_EXAMPLE_FILE_NAME} in the simulator folder.",
                config_file=str(example),
            )
        shutil.copyfile(example, self.env_file_path)
        return True

    def add_config_to_env_file(self, new_config: dict[str, str]) -> None:
        """Merge ``new_config`` into ``.env``; new values win.

        The previous content is saved to ``.env.bak`` before the rewrite.

        Raises:
            ConfigurationError: If ``.env`` does not exist.
        """
        env_path = self.env_file_path
        if not env_path.exists():
            logger.error("Env file not found: %s", env_path)
            raise ConfigurationError(
                f"Env file not found: {env_path}", config_file=str(env_path)
            )

        original = env_path.read_text(encoding="utf-8")
        Path(f"{env_path}.bak").write_text(original, encoding="utf-8")

        merged = {
            key: "" if value is None else value
            for key, value in dotenv_values(env_path, interpolate=False).items()
        }
        merged.update({key: str(value) for key, value in new_config.items()})

        env_path.write_text(
            "\n".join(
                f"{key}={_format_env_value(value)}" for key, value in merged.items()
            ),
            encoding="utf-8",
        )

    def config_simulator(self, new_config: dict[str, str]) -> bool:
        self.add_config_to_env_file(new_config)
        return True

    def read_env_config_value(self, key: str) -> Optional[str]:
        if not self.env_file_path.exists():
            return None
        return dotenv_values(self.env_file_path, interpolate=False).get(key)

    # Frontend

    def get_frontend_url(self) -> str:
        port = self.read_env_config_value("FRONTEND_PORT") or DEFAULT_FRONTEND_PORT
        return f"http://localhost:{port}"

    def open_frontend(self) -> bool:
        open_url(self.get_frontend_url())
        return True

    def get_ai_providers_options(
        self, with_hint: bool = True, exclude: Iterable[str] = ()
    ) -> list[dict[str, str]]:
        excluded = set(exclude)
        return [
            {
                "name": f"{provider.name} {provider.hint}" if with_hint else provider.name,
                "value": key,
            }
            for key, provider in AI_PROVIDERS.items()
            if key not in excluded
        ]
