"""
Up command - Start an already installed GenLayer simulator.
"""

import click

from genlayer_cli.commands.constants import DEFAULT_NUM_VALIDATORS
from genlayer_cli.commands.errors import GenlayerError
from genlayer_cli.commands.localnet import LocalnetAction


class StartAction(LocalnetAction):
    def execute(
        self,
        reset_validators: bool = False,
        num_validators: int = DEFAULT_NUM_VALIDATORS,
        headless: bool = False,
        reset_db: bool = False,
        ollama: bool = False,
        restart: bool = True,
    ) -> bool:
        try:
            running = self.simulator.is_localnet_running()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error checking the GenLayer Localnet status", e)
            return False

        if running:
            if not restart:
                self.reporter.log_warning("GenLayer Localnet is already running.")
                return True
            self.confirm_prompt(
                "GenLayer Localnet is already running. Do you want to proceed?"
            )
            self.reporter.start_spinner("Stopping the running GenLayer Localnet...")
            try:
                self.simulator.stop_docker_containers()
            except GenlayerError as e:
                self.reporter.fail_spinner("Error stopping the running Localnet", e)
                return False

        hint = (
            f"creating {num_validators} new random validators"
            if reset_validators
            else "keeping the existing validators"
        )
        self.reporter.start_spinner(f"Starting GenLayer Localnet ({hint})...")
        if not self.run_and_wait():
            return False

        if reset_db and not self.reset_database():
            return False

        if reset_validators and not self.initialize_validators(
            num_validators, self.default_providers(include_ollama=ollama)
        ):
            return False

        self.finish(headless)
        return True


@click.command()
@click.option(
    "--reset-validators",
    is_flag=True,
    default=False,
    help="Remove all current validators and create new random ones.",
)
@click.option(
    "--numValidators",
    "-n",
    "num_validators",
    type=int,
    default=DEFAULT_NUM_VALIDATORS,
    show_default=True,
    help="Number of validators.",
)
@click.option("--headless", is_flag=True, default=False, help="Headless mode.")
@click.option("--reset-db", is_flag=True, default=False, help="Reset the database.")
@click.option(
    "--ollama",
    is_flag=True,
    default=False,
    help="Include Ollama as a provider for new validators.",
)
@click.option(
    "--restart/--no-restart",
    default=True,
    show_default=True,
    help="Restart the localnet if it is already running.",
)
def up(reset_validators, num_validators, headless, reset_db, ollama, restart):
    """Start GenLayer's simulator."""
    return StartAction().execute(
        reset_validators, num_validators, headless, reset_db, ollama, restart
    )
