"""
Console reporter - spinner and status lines for command actions.
"""

from typing import Any, Optional

from rich.console import Console
from rich.status import Status

from genlayer_cli.commands.utils import console as default_console
from genlayer_cli.commands.utils import to_json


class Reporter:
    """Spinner plus colored status lines on a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or default_console
        self._status: Optional[Status] = None

    def start_spinner(self, message: str) -> None:
        self.stop_spinner()
        self._status = self.console.status(f"[cyan]{message}[/cyan]")
        self._status.start()

    def set_spinner_text(self, message: str) -> None:
        if self._status is None:
            self.start_spinner(message)
        else:
            self._status.update(f"[cyan]{message}[/cyan]")

    def stop_spinner(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def succeed_spinner(self, message: str, data: Optional[Any] = None) -> None:
        self.stop_spinner()
        self.console.print(f"[green]✓ {message}[/green]")
        if data is not None:
            self._print_data(data)

    def fail_spinner(self, message: str, error: Optional[Any] = None) -> None:
        self.stop_spinner()
        self.console.print(f"[red]✗ {message}[/red]")
        if error is not None:
            self.console.print(f"[red]{error}[/red]")

    def log_info(self, message: str, data: Optional[Any] = None) -> None:
        self.console.print(f"[cyan]{message}[/cyan]")
        if data is not None:
            self._print_data(data)

    def log_success(self, message: str, data: Optional[Any] = None) -> None:
        self.console.print(f"[green]✓ {message}[/green]")
        if data is not None:
            self._print_data(data)

    def log_warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def log_error(self, message: str, error: Optional[Any] = None) -> None:
        self.console.print(f"[red]✗ {message}[/red]")
        if error is not None:
            self.console.print(f"[red]{error}[/red]")

    def _print_data(self, data: Any) -> None:
        if isinstance(data, str):
            self.console.print(data, markup=False, highlight=False)
        else:
            self.console.print_json(to_json(data))
