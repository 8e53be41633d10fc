"""
Network command - Select which GenLayer network contract commands target.
"""

from typing import Optional

import click
from rich.prompt import Prompt

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.constants import NETWORK_KEY
from genlayer_cli.commands.networks import NETWORKS, NetworkDescriptor, find_network
from genlayer_cli.commands.result import fail, ok


class NetworkActions(BaseAction):
    def set_network(self, network_name: Optional[str] = None) -> dict:
        if network_name is not None:
            selected = find_network(network_name)
            if selected is None:
                self.reporter.fail_spinner(f"Network {network_name} not found")
                return fail(f"Network {network_name} not found")
        else:
            selected = self.prompt_network()

        self.config.write_config(NETWORK_KEY, selected.to_json())
        self.reporter.succeed_spinner(f"Network successfully set to {selected.name}")
        return ok(selected.alias)

    def prompt_network(self) -> NetworkDescriptor:
        for alias, network in NETWORKS.items():
            self.reporter.console.print(f"  [cyan]{alias}[/cyan] - {network.name}")
        alias = Prompt.ask(
            "Select which network do you want to use:",
            choices=list(NETWORKS),
            default="localnet",
            console=self.reporter.console,
        )
        return NETWORKS[alias]


@click.command()
@click.argument("network_name", required=False)
def network(network_name: Optional[str]):
    """Set the network to use."""
    return NetworkActions().set_network(network_name)
