"""
Docker manager - container, image and exec access for the local simulator.
"""

import logging
from contextlib import contextmanager
from typing import Optional

import docker

from genlayer_cli.commands.errors import GenlayerError

logger = logging.getLogger(__name__)


@contextmanager
def docker_errors(action: str):
    """Re-raise Docker SDK failures as GenlayerError."""
    try:
        yield
    except docker.errors.DockerException as e:
        raise GenlayerError(f"Docker error while {action}: {e}", code="DOCKER_ERROR") from e


class DockerManager:
    """Wraps the Docker SDK client used by the simulator orchestrator.

    The client is created on first use so commands that never touch Docker
    (config, keygen, contract calls) work without a running daemon.
    """

    def __init__(self, client: Optional[docker.DockerClient] = None):
        self._client = client

    @property
    def client(self) -> docker.DockerClient:
        if self._client is None:
            try:
                self._client = docker.from_env()
            except docker.errors.DockerException as e:
                raise GenlayerError(
                    f"Failed to connect to Docker: {e}. "
                    "Make sure Docker is running and you have permission to access it.",
                    code="DOCKER_UNAVAILABLE",
                ) from e
        return self._client

    def list_containers(self, name_prefix: Optional[str] = None) -> list:
        """List all containers (running or not), optionally filtered by name prefix."""
        with docker_errors("listing containers"):
            containers = self.client.containers.list(all=True)
        if name_prefix is None:
            return containers
        return [c for c in containers if c.name.startswith(name_prefix)]

    def list_images(self, tag_prefix: Optional[str] = None) -> list:
        """List local images, optionally only those with a tag carrying the prefix."""
        with docker_errors("listing images"):
            images = self.client.images.list()
        if tag_prefix is None:
            return images
        return [
            image
            for image in images
            if any(tag.startswith(tag_prefix) for tag in (image.tags or []))
        ]

    def is_container_running(self, container) -> bool:
        return container.status == "running"

    def stop_container(self, container) -> None:
        logger.debug("Stopping container %s", container.name)
        with docker_errors(f"stopping {container.name}"):
            container.stop()

    def remove_container(self, container) -> None:
        logger.debug("Removing container %s", container.name)
        with docker_errors(f"removing {container.name}"):
            container.remove()

    def remove_image(self, image) -> None:
        logger.debug("Removing image %s", image.id)
        with docker_errors(f"removing image {image.id}"):
            self.client.images.remove(image.id, force=True)

    def exec_in_container(self, container_name: str, command: list[str]) -> str:
        """Run a command inside a running container and return its output.

        Raises:
            GenlayerError: If the container does not exist or the command fails.
        """
        with docker_errors(f"looking up {container_name}"):
            try:
                container = self.client.containers.get(container_name)
            except docker.errors.NotFound as e:
                raise GenlayerError(
                    f"Container '{container_name}' not found. "
                    "Is the simulator running?",
                    code="CONTAINER_NOT_FOUND",
                ) from e

        with docker_errors(f"running {command[0]} in {container_name}"):
            exit_code, output = container.exec_run(command)
        text = output.decode("utf-8", errors="replace") if output else ""
        if exit_code != 0:
            raise GenlayerError(
                f"Command {' '.join(command)} failed in {container_name}: "
                f"{text.strip()}",
                code="CONTAINER_EXEC_FAILED",
                details={"exit_code": exit_code},
            )
        return text
