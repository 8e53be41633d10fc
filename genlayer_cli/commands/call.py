"""
Call command - Read state from a deployed intelligent contract.
"""

from typing import Optional

import click

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.client import get_client
from genlayer_cli.commands.result import fail, ok
from genlayer_cli.commands.utils import VariadicOption, parse_args


class CallAction(BaseAction):
    def __init__(self, *args, rpc_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.rpc_url = rpc_url

    def call(self, contract_address: str, method: str, args: list) -> dict:
        self.reporter.start_spinner(
            f"Calling method {method} on contract at {contract_address}..."
        )
        try:
            client = get_client(self.config, self.rpc_url)
            result = client.read_contract(
                address=contract_address,
                function_name=method,
                args=args,
            )
        except Exception as e:
            self.reporter.fail_spinner("Error during read operation", e)
            return fail("Error during read operation", error=e)

        self.reporter.succeed_spinner("Read operation successfully executed", result)
        return ok(result)


@click.command()
@click.argument("contract_address")
@click.argument("method")
@click.option(
    "--args",
    "args",
    cls=VariadicOption,
    help="Positional arguments for the method (space-separated). "
    "JSON literals are decoded.",
)
@click.option("--rpc", help="RPC URL for the network.")
def call(contract_address, method, args, rpc):
    """Call a read-only method on a deployed contract."""
    return CallAction(rpc_url=rpc).call(contract_address, method, parse_args(args))
