"""
Write command - Send a state-changing transaction to an intelligent contract.
"""

from typing import Optional

import click

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.client import get_client
from genlayer_cli.commands.constants import (
    WRITE_RECEIPT_INTERVAL,
    WRITE_RECEIPT_RETRIES,
)
from genlayer_cli.commands.result import fail, ok
from genlayer_cli.commands.utils import VariadicOption, parse_args


class WriteAction(BaseAction):
    def __init__(self, *args, rpc_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.rpc_url = rpc_url

    def write(self, contract_address: str, method: str, args: list) -> dict:
        self.reporter.start_spinner(
            f"Calling write method {method} on contract at {contract_address}..."
        )
        try:
            client = get_client(self.config, self.rpc_url)
            tx_hash = client.write_contract(
                address=contract_address,
                function_name=method,
                args=args,
                value=0,
            )
            receipt = client.wait_for_transaction_receipt(
                transaction_hash=tx_hash,
                interval=WRITE_RECEIPT_INTERVAL,
                retries=WRITE_RECEIPT_RETRIES,
            )
        except Exception as e:
            self.reporter.fail_spinner("Error during write operation", e)
            return fail("Error during write operation", error=e)

        self.reporter.log_info(f"Write transaction hash: {tx_hash}")
        self.reporter.succeed_spinner("Write operation successfully executed", receipt)
        return ok(receipt, transaction_hash=tx_hash)


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
def write(contract_address, method, args, rpc):
    """Send a write transaction to a deployed contract."""
    return WriteAction(rpc_url=rpc).write(contract_address, method, parse_args(args))
