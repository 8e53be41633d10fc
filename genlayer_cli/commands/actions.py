"""
Base class shared by every command action.
"""

from typing import Optional

from rich.prompt import Confirm

from genlayer_cli.commands.config_store import ConfigFileManager
from genlayer_cli.commands.errors import UserDeclinedError
from genlayer_cli.commands.reporter import Reporter


class BaseAction:
    """Holds the collaborators an action needs.

    The config store and reporter are handed in by the command so tests can
    substitute either one.
    """

    def __init__(
        self,
        config: Optional[ConfigFileManager] = None,
        reporter: Optional[Reporter] = None,
    ):
        self.config = config or ConfigFileManager()
        self.reporter = reporter or Reporter()

    def confirm_prompt(self, message: str) -> None:
        """Ask a yes/no question; answering no raises UserDeclinedError."""
        self.reporter.stop_spinner()
        if not Confirm.ask(message, default=True, console=self.reporter.console):
            raise UserDeclinedError()
