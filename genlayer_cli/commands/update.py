"""
Update command - Manage resources of the running simulator, such as Ollama models.
"""

from typing import Optional

import click

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.constants import (
    DEFAULT_OLLAMA_MODEL,
    DEFAULT_OLLAMA_MODEL_KEY,
    OLLAMA_CONTAINER_NAME,
)
from genlayer_cli.commands.errors import GenlayerError
from genlayer_cli.commands.manager import DockerManager
from genlayer_cli.commands.result import fail, ok


class OllamaAction(BaseAction):
    def __init__(self, *args, docker_manager: Optional[DockerManager] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.docker = docker_manager or DockerManager()

    def resolve_model(self, model_name: Optional[str]) -> str:
        return (
            model_name
            or self.config.get_config_by_key(DEFAULT_OLLAMA_MODEL_KEY)
            or DEFAULT_OLLAMA_MODEL
        )

    def update_model(self, model_name: str) -> dict:
        return self._execute_model_command(
            "pull", model_name, f'Model "{model_name}" updated successfully'
        )

    def remove_model(self, model_name: str) -> dict:
        return self._execute_model_command(
            "rm", model_name, f'Model "{model_name}" removed successfully'
        )

    def _execute_model_command(
        self, command: str, model_name: str, success_message: str
    ) -> dict:
        self.reporter.start_spinner(f"Running ollama {command} {model_name}...")
        try:
            output = self.docker.exec_in_container(
                OLLAMA_CONTAINER_NAME, ["ollama", command, model_name]
            )
        except GenlayerError as e:
            message = f'Error executing command "{command}" on model "{model_name}"'
            self.reporter.fail_spinner(message, e)
            return fail(message, error=e)

        self.reporter.stop_spinner()
        if output.strip():
            self.reporter.log_info(output.strip())
        self.reporter.succeed_spinner(success_message)
        return ok(model_name)


@click.group()
def update():
    """Update resources like models or configurations."""
    pass


@update.command()
@click.option("--model", help="Model to update or remove.")
@click.option(
    "--remove",
    is_flag=True,
    default=False,
    help="Remove the specified model instead of updating.",
)
def ollama(model: Optional[str], remove: bool):
    """Manage Ollama models (update or remove)."""
    action = OllamaAction()
    model_name = action.resolve_model(model)
    if remove:
        return action.remove_model(model_name)
    return action.update_model(model_name)
