"""
Keygen command - Generate the keypair used to sign transactions.
"""

import click

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.constants import DEFAULT_KEYPAIR_PATH
from genlayer_cli.commands.errors import GenlayerError
from genlayer_cli.commands.keypair import KeypairManager
from genlayer_cli.commands.result import fail, ok


class KeypairCreator(BaseAction):
    def create_keypair(self, output: str, overwrite: bool) -> dict:
        self.reporter.start_spinner("Creating keypair...")
        try:
            created = KeypairManager(self.config).create_keypair(output, overwrite)
        except (GenlayerError, OSError) as e:
            self.reporter.fail_spinner("Failed to generate keypair", e)
            return fail("Failed to generate keypair", error=e)

        self.reporter.succeed_spinner(
            f"Keypair successfully created and saved to: {created['path']}"
        )
        return ok(created)


@click.group()
def keygen():
    """Manage keypair generation."""
    pass


@keygen.command()
@click.option(
    "--output",
    default=DEFAULT_KEYPAIR_PATH,
    show_default=True,
    help="Path to save the keypair.",
)
@click.option(
    "--overwrite",
    is_flag=True,
    default=False,
    help="Overwrite the existing file if it already exists.",
)
def create(output: str, overwrite: bool):
    """Generate a new keypair and save it to a file."""
    return KeypairCreator().create_keypair(output, overwrite)
