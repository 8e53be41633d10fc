"""
Config command - Inspect and edit the CLI configuration file.
"""

from typing import Any, Optional

import click
from rich import box
from rich.table import Table

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.result import fail, ok


class ConfigActions(BaseAction):
    def set(self, key_value: str) -> dict:
        key, sep, value = key_value.partition("=")
        self.reporter.start_spinner(f"Updating configuration: {key}")

        if not key or not sep:
            self.reporter.fail_spinner("Invalid format. Use 'key=value'.")
            return fail("Invalid format. Use 'key=value'.")

        self.config.write_config(key, value)
        self.reporter.succeed_spinner("Configuration successfully updated")
        return ok({key: value})

    def get(self, key: Optional[str] = None) -> dict:
        if key:
            self.reporter.start_spinner(f"Retrieving value for: {key}")
            value = self.config.get_config_by_key(key)
            if value is None:
                self.reporter.fail_spinner(f"No configuration found for '{key}'.")
                return fail(f"No configuration found for '{key}'.")
            self.reporter.succeed_spinner(
                "Configuration successfully retrieved", f"{key}={value}"
            )
            return ok(value)

        self.reporter.start_spinner("Retrieving all configurations")
        config = self.config.get_config()
        self.reporter.succeed_spinner("All configurations successfully retrieved")
        self._print_config_table(config)
        return ok(config)

    def reset(self, key: str) -> dict:
        self.reporter.start_spinner(f"Resetting configuration: {key}")
        if not self.config.remove_config(key):
            self.reporter.fail_spinner(f"Configuration key '{key}' does not exist.")
            return fail(f"Configuration key '{key}' does not exist.")

        self.reporter.succeed_spinner("Configuration successfully reset")
        return ok(key)

    def _print_config_table(self, config: dict[str, Any]) -> None:
        if not config:
            self.reporter.log_warning("Configuration is empty")
            return
        table = Table(title="GenLayer Configuration", box=box.ROUNDED)
        table.add_column("Key", style="cyan")
        table.add_column("Value", style="green")
        for key, value in config.items():
            table.add_row(key, str(value))
        self.reporter.console.print(table)


@click.group(name="config")
def config():
    """Manage CLI configuration, including the default network."""
    pass


@config.command(name="set")
@click.argument("key_value", metavar="KEY=VALUE")
def set_config(key_value: str):
    """Set a configuration value."""
    return ConfigActions().set(key_value)


@config.command(name="get")
@click.argument("key", required=False)
def get_config(key: Optional[str]):
    """Get one configuration value, or the whole configuration."""
    return ConfigActions().get(key)


@config.command(name="reset")
@click.argument("key")
def reset_config(key: str):
    """Remove a configuration value."""
    return ConfigActions().reset(key)
