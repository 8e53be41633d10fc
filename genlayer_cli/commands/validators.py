"""
Validators command - Manage the validators of the local simulator.

Every subcommand relays to one ``sim_*`` JSON-RPC method of the simulator
backend. Validators are owned by the backend; nothing is cached locally.
"""

import json
from typing import Any, Optional

import click
from rich.prompt import Prompt

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.constants import (
    DEFAULT_VALIDATOR_STAKE,
    MAX_VALIDATOR_STAKE,
    MIN_VALIDATOR_STAKE,
)
from genlayer_cli.commands.errors import (
    ClientError,
    GenlayerError,
    UserDeclinedError,
    ValidationError,
)
from genlayer_cli.commands.result import fail, ok
from genlayer_cli.commands.rpc_client import JsonRpcClient
from genlayer_cli.commands.utils import VariadicOption


def _parse_positive_int(value: Any, field: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        number = 0
    if number < 1:
        raise ValidationError(
            f"Invalid {field}. Please provide a positive integer.",
            field=field,
            value=value,
        )
    return number


def _parse_config(raw: Optional[str]) -> Optional[Any]:
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Invalid JSON config: {e.msg}", field="config", value=raw
        ) from e


class ValidatorsAction(BaseAction):
    def __init__(self, *args, rpc: Optional[JsonRpcClient] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.rpc = rpc or JsonRpcClient()

    def _result(self, method: str, params: Optional[list] = None) -> Any:
        response = self.rpc.call(method, params or [])
        return response.get("result") if isinstance(response, dict) else response

    def get_validator(self, address: Optional[str] = None) -> dict:
        try:
            if address:
                self.reporter.start_spinner(
                    f"Fetching validator with address: {address}"
                )
                result = self._result("sim_getValidator", [address])
                self.reporter.succeed_spinner(
                    f"Successfully fetched validator with address: {address}", result
                )
            else:
                self.reporter.start_spinner("Fetching all validators...")
                result = self._result("sim_getAllValidators")
                self.reporter.succeed_spinner(
                    "Successfully fetched all validators.", result
                )
        except GenlayerError as e:
            self.reporter.fail_spinner("Error fetching validators", e)
            return fail("Error fetching validators", error=e)
        return ok(result)

    def delete_validator(self, address: Optional[str] = None) -> dict:
        try:
            if address:
                self.confirm_prompt(
                    "This command will delete the validator with the address: "
                    f"{address}. Do you want to continue?"
                )
                self.reporter.start_spinner(
                    f"Deleting validator with address: {address}"
                )
                result = self._result("sim_deleteValidator", [address])
                self.reporter.succeed_spinner(f"Deleted Address: {result}")
            else:
                self.confirm_prompt(
                    "This command will delete all validators. Do you want to continue?"
                )
                self.reporter.start_spinner("Deleting all validators...")
                result = self._result("sim_deleteAllValidators")
                self.reporter.succeed_spinner("Successfully deleted all validators")
        except UserDeclinedError:
            raise
        except GenlayerError as e:
            self.reporter.fail_spinner("Error deleting validators", e)
            return fail("Error deleting validators", error=e)
        return ok(result)

    def count_validators(self) -> dict:
        self.reporter.start_spinner("Counting all validators...")
        try:
            result = self._result("sim_countValidators")
        except GenlayerError as e:
            self.reporter.fail_spinner("Error counting validators", e)
            return fail("Error counting validators", error=e)
        self.reporter.succeed_spinner(f"Total Validators: {result}")
        return ok(result)

    def update_validator(
        self,
        address: str,
        stake: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        config: Optional[str] = None,
    ) -> dict:
        self.reporter.start_spinner(f"Fetching validator with address: {address}...")
        try:
            current = self._result("sim_getValidator", [address])
            if not current:
                raise ValidationError(
                    f"Validator with address {address} not found.",
                    field="address",
                    value=address,
                )
            if not isinstance(current, dict):
                raise ClientError(
                    f"Unexpected validator data for {address}: {current!r}",
                    details={"method": "sim_getValidator"},
                )
            self.reporter.log_info("Current Validator Details:", current)

            updated = {
                "address": address,
                "stake": (
                    _parse_positive_int(stake, "stake")
                    if stake is not None
                    else current.get("stake")
                ),
                "provider": provider or current.get("provider"),
                "model": model or current.get("model"),
                "config": (
                    _parse_config(config) if config is not None else current.get("config")
                ),
            }
            self.reporter.log_info("Updated Validator Details:", updated)

            self.reporter.set_spinner_text("Updating validator...")
            result = self._result(
                "sim_updateValidator",
                [
                    updated["address"],
                    updated["stake"],
                    updated["provider"],
                    updated["model"],
                    updated["config"],
                ],
            )
        except GenlayerError as e:
            self.reporter.fail_spinner("Error updating validator", e)
            return fail("Error updating validator", error=e)

        self.reporter.succeed_spinner("Validator successfully updated", result)
        return ok(result)

    def create_random_validators(
        self,
        count: Any,
        providers: Optional[list[str]] = None,
        models: Optional[list[str]] = None,
    ) -> dict:
        providers = list(providers or [])
        models = list(models or [])
        try:
            number = _parse_positive_int(count, "count")
            self.reporter.start_spinner(f"Creating {number} random validator(s)...")
            self.reporter.log_info(
                f"Providers: {', '.join(providers) if providers else 'None'}"
            )
            self.reporter.log_info(f"Models: {', '.join(models) if models else 'None'}")
            result = self._result(
                "sim_createRandomValidators",
                [number, MIN_VALIDATOR_STAKE, MAX_VALIDATOR_STAKE, providers, models],
            )
        except GenlayerError as e:
            self.reporter.fail_spinner("Error creating random validators", e)
            return fail("Error creating random validators", error=e)

        self.reporter.succeed_spinner("Random validators successfully created", result)
        return ok(result)

    def create_validator(
        self,
        stake: Any = DEFAULT_VALIDATOR_STAKE,
        config: Optional[str] = None,
        provider: Optional[str] = None,
        model: Optional[str] = None,
    ) -> dict:
        try:
            parsed_stake = _parse_positive_int(stake, "stake")
            if model and not provider:
                raise ValidationError(
                    "You must specify a provider if using a model.", field="model"
                )
            parsed_config = _parse_config(config)

            self.reporter.start_spinner("Fetching available providers and models...")
            entries = self._result("sim_getProvidersAndModels") or []
            if not entries:
                raise GenlayerError("No providers or models available.")
            self.reporter.stop_spinner()

            available_providers = list(
                dict.fromkeys(e["provider"] for e in entries if e.get("is_available"))
            )
            if provider is None:
                provider = self._choose("Select a provider:", available_providers)
            elif provider not in available_providers:
                raise ValidationError(
                    f"Provider {provider} is not available.",
                    field="provider",
                    value=provider,
                )

            available_models = [
                e
                for e in entries
                if e["provider"] == provider and e.get("is_model_available")
            ]
            if not available_models:
                raise GenlayerError("No models available for the selected provider.")
            model_names = [e["model"] for e in available_models]
            if model is None:
                model = self._choose("Select a model:", model_names)
            elif model not in model_names:
                raise ValidationError(
                    f"Model {model} is not available for provider {provider}.",
                    field="model",
                    value=model,
                )
            details = next(e for e in available_models if e["model"] == model)

            validator = {
                "stake": parsed_stake,
                "provider": details["provider"],
                "model": details["model"],
                "config": parsed_config if parsed_config is not None else details.get("config"),
                "plugin": details.get("plugin"),
                "plugin_config": details.get("plugin_config"),
            }
            self.reporter.log_info("Creating validator with the following details:", validator)

            self.reporter.start_spinner("Creating validator...")
            result = self._result("sim_createValidator", list(validator.values()))
        except GenlayerError as e:
            self.reporter.fail_spinner("Error creating validator", e)
            return fail("Error creating validator", error=e)

        self.reporter.succeed_spinner("Validator successfully created", result)
        return ok(result)

    def _choose(self, message: str, choices: list[str]) -> str:
        if not choices:
            raise GenlayerError(f"No options available for: {message}")
        return Prompt.ask(
            message, choices=choices, default=choices[0], console=self.reporter.console
        )


@click.group()
def validators():
    """Manage validator operations."""
    pass


@validators.command(name="get")
@click.option("--address", help="Address of the validator to fetch.")
def get_validators(address: Optional[str]):
    """Retrieve one validator, or all of them."""
    return ValidatorsAction().get_validator(address)


@validators.command(name="delete")
@click.option("--address", help="Address of the validator to delete.")
def delete_validators(address: Optional[str]):
    """Delete one validator, or all of them."""
    return ValidatorsAction().delete_validator(address)


@validators.command(name="count")
def count_validators():
    """Count all validators."""
    return ValidatorsAction().count_validators()


@validators.command(name="update")
@click.argument("address")
@click.option("--stake", help="New stake for the validator.")
@click.option("--provider", help="New provider for the validator.")
@click.option("--model", help="New model for the validator.")
@click.option("--config", help="New JSON config for the validator.")
def update_validator(address, stake, provider, model, config):
    """Update a validator's details."""
    return ValidatorsAction().update_validator(address, stake, provider, model, config)


@validators.command(name="create-random")
@click.option("--count", default="1", show_default=True, help="Number of validators.")
@click.option(
    "--providers",
    cls=VariadicOption,
    help="Providers to pick from (space-separated).",
)
@click.option("--models", cls=VariadicOption, help="Models to pick from (space-separated).")
def create_random_validators(count, providers, models):
    """Create random validators."""
    return ValidatorsAction().create_random_validators(
        count, list(providers), list(models)
    )


@validators.command(name="create")
@click.option(
    "--stake",
    default=str(DEFAULT_VALIDATOR_STAKE),
    show_default=True,
    help="Stake amount for the validator.",
)
@click.option("--config", help="Optional JSON config for the validator.")
@click.option("--provider", help="Provider for the validator.")
@click.option("--model", help="Model for the validator.")
def create_validator(stake, config, provider, model):
    """Create a new validator with the selected provider and model."""
    return ValidatorsAction().create_validator(stake, config, provider, model)
