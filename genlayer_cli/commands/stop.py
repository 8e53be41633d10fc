"""
Stop command - Stop all running GenLayer containers.
"""

import click

from genlayer_cli.commands.errors import GenlayerError
from genlayer_cli.commands.localnet import LocalnetAction


class StopAction(LocalnetAction):
    def stop(self) -> bool:
        self.confirm_prompt(
            "Are you sure you want to stop all running GenLayer containers? "
            "This will halt all active processes."
        )
        self.reporter.start_spinner("Stopping Docker containers...")
        try:
            self.simulator.stop_docker_containers()
        except GenlayerError as e:
            self.reporter.fail_spinner(
                "An error occurred while stopping the containers.", e
            )
            return False
        self.reporter.succeed_spinner(
            "All running GenLayer containers have been successfully stopped."
        )
        return True


@click.command()
def stop():
    """Stop all running localnet services."""
    return StopAction().stop()
