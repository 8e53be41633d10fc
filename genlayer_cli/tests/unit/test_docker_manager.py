"""
Unit tests for DockerManager.
"""

from unittest.mock import MagicMock, patch

import docker
import pytest

from genlayer_cli.commands.errors import GenlayerError
from genlayer_cli.commands.manager import DockerManager


def _container(name, status="running"):
    container = MagicMock()
    container.name = name
    container.status = status
    return container


class TestDockerManager:
    @patch("docker.from_env")
    def test_client_is_created_lazily(self, mock_from_env):
        manager = DockerManager()
        mock_from_env.assert_not_called()
        assert manager.client is mock_from_env.return_value
        mock_from_env.assert_called_once()

    @patch("docker.from_env")
    def test_connection_failure_raises(self, mock_from_env):
        mock_from_env.side_effect = docker.errors.DockerException("no socket")
        with pytest.raises(GenlayerError, match="Failed to connect to Docker"):
            DockerManager().client

    def test_list_containers_filters_by_prefix(self):
        client = MagicMock()
        client.containers.list.return_value = [
            _container("genlayer-simulator-jsonrpc"),
            _container("postgres"),
        ]
        manager = DockerManager(client=client)

        names = [c.name for c in manager.list_containers("genlayer-simulator-")]

        assert names == ["genlayer-simulator-jsonrpc"]
        client.containers.list.assert_called_once_with(all=True)

    def test_list_images_filters_by_tag_prefix(self):
        client = MagicMock()
        matching = MagicMock(tags=["genlayer-simulator-webapp:latest"])
        other = MagicMock(tags=["postgres:16"])
        untagged = MagicMock(tags=[])
        client.images.list.return_value = [matching, other, untagged]

        assert DockerManager(client=client).list_images("genlayer-simulator-") == [matching]

    def test_remove_image_forces(self):
        client = MagicMock()
        image = MagicMock(id="sha256:abc")
        DockerManager(client=client).remove_image(image)
        client.images.remove.assert_called_once_with("sha256:abc", force=True)

    def test_stop_failure_is_wrapped(self):
        container = _container("genlayer-simulator-x")
        container.stop.side_effect = docker.errors.APIError("conflict")
        with pytest.raises(GenlayerError, match="stopping genlayer-simulator-x"):
            DockerManager(client=MagicMock()).stop_container(container)

    def test_exec_in_container_returns_output(self):
        client = MagicMock()
        client.containers.get.return_value.exec_run.return_value = (0, b"pulled\n")
        output = DockerManager(client=client).exec_in_container(
            "ollama", ["ollama", "pull", "llama3"]
        )
        assert output == "pulled\n"
        client.containers.get.assert_called_once_with("ollama")

    def test_exec_in_missing_container(self):
        client = MagicMock()
        client.containers.get.side_effect = docker.errors.NotFound("nope")
        with pytest.raises(GenlayerError) as exc_info:
            DockerManager(client=client).exec_in_container("ollama", ["ollama", "rm", "x"])
        assert exc_info.value.code == "CONTAINER_NOT_FOUND"

    def test_exec_nonzero_exit_raises(self):
        client = MagicMock()
        client.containers.get.return_value.exec_run.return_value = (1, b"model not found")
        with pytest.raises(GenlayerError, match="model not found"):
            DockerManager(client=client).exec_in_container("ollama", ["ollama", "rm", "x"])
