#!/usr/bin/env python3
"""
GenLayer CLI
A Python CLI tool for GenLayer contracts, validators and the local simulator.
"""

import logging

import click
from rich.logging import RichHandler

from genlayer_cli import __version__
from genlayer_cli.commands.call import call
from genlayer_cli.commands.config import config
from genlayer_cli.commands.deploy import deploy
from genlayer_cli.commands.errors import UserDeclinedError
from genlayer_cli.commands.init import init
from genlayer_cli.commands.keygen import keygen
from genlayer_cli.commands.network import network
from genlayer_cli.commands.result import exit_status
from genlayer_cli.commands.scaffold import new
from genlayer_cli.commands.stop import stop
from genlayer_cli.commands.up import up
from genlayer_cli.commands.update import update
from genlayer_cli.commands.utils import console
from genlayer_cli.commands.validators import validators
from genlayer_cli.commands.write import write


class GenlayerGroup(click.Group):
    """Root group mapping command outcomes to exit statuses.

    A declined confirmation exits 0. A command returning a failed result
    exits 1 after the action has already reported the error.
    """

    def invoke(self, ctx: click.Context):
        try:
            outcome = super().invoke(ctx)
        except UserDeclinedError as e:
            console.print(f"[yellow]{e.message}[/yellow]")
            ctx.exit(0)
        status = exit_status(outcome)
        if status:
            ctx.exit(status)
        return outcome


@click.group(cls=GenlayerGroup)
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output.")
def cli(verbose: bool):
    """GenLayer CLI - Contracts, validators and the local simulator."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


# Contracts
cli.add_command(deploy)
cli.add_command(call)
cli.add_command(write)

# Local simulator
cli.add_command(init)
cli.add_command(up)
cli.add_command(stop)
cli.add_command(validators)
cli.add_command(update)

# Configuration and project setup
cli.add_command(config)
cli.add_command(keygen)
cli.add_command(network)
cli.add_command(new)


def main():
    """Main entry point for the genlayer CLI."""
    cli()


if __name__ == "__main__":
    main()
