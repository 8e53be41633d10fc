"""
Deploy command - Deploy intelligent contracts or run the project's deploy scripts.

With ``--contract`` a single contract file is deployed and its receipt awaited.
Without it, every ``deploy/*.py`` script in the working directory is run in
numeric-prefix order (``1_token.py`` before ``2_market.py``), each receiving the
client through its ``main(client)`` function.
"""

import importlib.util
import re
from pathlib import Path
from typing import Any, Optional

import click

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.client import get_client, get_transaction_status
from genlayer_cli.commands.constants import (
    DEPLOY_RECEIPT_INTERVAL,
    DEPLOY_RECEIPT_RETRIES,
    DEPLOY_SCRIPTS_FOLDER,
)
from genlayer_cli.commands.errors import GenlayerError, ValidationError
from genlayer_cli.commands.result import fail, ok
from genlayer_cli.commands.utils import VariadicOption, parse_args, parse_kwargs

_NUMERIC_PREFIX = re.compile(r"^(\d+)")


def _script_sort_key(path: Path) -> tuple:
    """Numbered scripts first in numeric order, then the rest alphabetically."""
    match = _NUMERIC_PREFIX.match(path.name)
    if match:
        return (0, int(match.group(1)), path.name)
    return (1, 0, path.name)


def _contract_address(receipt: Any) -> Optional[str]:
    if not isinstance(receipt, dict):
        return None
    data = receipt.get("data")
    if isinstance(data, dict) and data.get("contract_address"):
        return data["contract_address"]
    return receipt.get("contract_address")


class DeployAction(BaseAction):
    """Deploys contracts through the GenLayer SDK."""

    def __init__(self, *args, rpc_url: Optional[str] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.rpc_url = rpc_url
        self._client = None

    @property
    def client(self):
        if self._client is None:
            self._client = get_client(self.config, self.rpc_url)
        return self._client

    def read_contract_code(self, contract_path: str) -> str:
        path = Path(contract_path)
        if not path.exists():
            raise ValidationError(
                f"Contract file not found: {contract_path}",
                field="contract",
                value=contract_path,
            )
        return path.read_text(encoding="utf-8")

    def deploy(
        self,
        contract: Optional[str],
        args: Optional[list] = None,
        kwargs: Optional[dict] = None,
    ) -> dict:
        """Deploy one contract file and wait until it is accepted."""
        if not contract:
            self.reporter.fail_spinner("No contract specified for deployment.")
            return fail("No contract specified for deployment.")

        if args and kwargs:
            self.reporter.fail_spinner(
                "Invalid usage: Please specify either `args` or `kwargs`, but not both."
            )
            return fail("args and kwargs are mutually exclusive")

        try:
            self.reporter.start_spinner("Setting up the deployment environment...")
            self.reporter.set_spinner_text("Reading contract code...")
            code = self.read_contract_code(contract)
            if not code.strip():
                self.reporter.fail_spinner("Contract code is empty.")
                return fail("Contract code is empty.")

            self.reporter.set_spinner_text("Starting contract deployment...")
            tx_hash = self.client.deploy_contract(
                code=code,
                args=args or [],
                kwargs=kwargs or {},
                leader_only=False,
            )
            receipt = self.client.wait_for_transaction_receipt(
                transaction_hash=tx_hash,
                status=get_transaction_status("ACCEPTED"),
                interval=DEPLOY_RECEIPT_INTERVAL,
                retries=DEPLOY_RECEIPT_RETRIES,
            )
        except Exception as e:
            self.reporter.fail_spinner("Error deploying contract", e)
            return fail("Error deploying contract", error=e)

        summary = {
            "Transaction Hash": tx_hash,
            "Contract Address": _contract_address(receipt),
        }
        self.reporter.succeed_spinner("Contract deployed successfully.", summary)
        return ok(summary)

    def find_deploy_scripts(self, deploy_dir: Path) -> list[Path]:
        return sorted(
            (p for p in deploy_dir.glob("*.py") if not p.name.startswith("_")),
            key=_script_sort_key,
        )

    def execute_script(self, script: Path) -> None:
        """Import a deploy script and call its ``main(client)``."""
        spec = importlib.util.spec_from_file_location(f"deploy_{script.stem}", script)
        if spec is None or spec.loader is None:
            raise GenlayerError(f"Cannot load deploy script: {script}")
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        main = getattr(module, "main", None)
        if not callable(main):
            raise GenlayerError(f'No "main" function found in: {script}')
        main(self.client)

    def deploy_scripts(self, deploy_dir: Optional[Path] = None) -> dict:
        """Run every deploy script in order. A failing script does not stop the rest."""
        deploy_dir = deploy_dir or Path.cwd() / DEPLOY_SCRIPTS_FOLDER
        self.reporter.start_spinner("Searching for deploy scripts...")

        if not deploy_dir.is_dir():
            self.reporter.fail_spinner("No deploy folder found.")
            return fail("No deploy folder found.")

        scripts = self.find_deploy_scripts(deploy_dir)
        if not scripts:
            self.reporter.fail_spinner("No deploy scripts found.")
            return fail("No deploy scripts found.")

        self.reporter.set_spinner_text(
            f"Found {len(scripts)} deploy scripts. Executing..."
        )
        executed, failed = [], []
        for script in scripts:
            self.reporter.start_spinner(f"Executing file: {script}")
            try:
                self.execute_script(script)
            except Exception as e:
                self.reporter.fail_spinner(f"Error executing: {script}", e)
                failed.append(str(script))
                continue
            self.reporter.succeed_spinner(f"Successfully executed: {script}")
            executed.append(str(script))

        if failed:
            return fail("Some deploy scripts failed", executed=executed, failed=failed)
        return ok(executed)


@click.command()
@click.option("--contract", help="Path to the intelligent contract to deploy.")
@click.option("--rpc", help="RPC URL for the network.")
@click.option(
    "--args",
    "args",
    cls=VariadicOption,
    help="Positional constructor arguments (space-separated). "
    "JSON literals are decoded.",
)
@click.option("--kwargs", help="Keyword arguments in KEY=VALUE,KEY=VALUE format.")
def deploy(contract, rpc, args, kwargs):
    """Deploy intelligent contracts."""
    action = DeployAction(rpc_url=rpc)
    if not contract:
        if args or kwargs:
            action.reporter.fail_spinner("No contract specified for deployment.")
            return fail("No contract specified for deployment.")
        return action.deploy_scripts()

    try:
        parsed_kwargs = parse_kwargs(kwargs)
    except ValidationError as e:
        action.reporter.fail_spinner(e.message)
        return fail(e.message, error=e)
    return action.deploy(contract, parse_args(args), parsed_kwargs)
