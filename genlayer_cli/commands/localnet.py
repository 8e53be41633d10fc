"""
Shared steps for the commands that start the local simulator (init, up).
"""

from typing import Iterable, Optional

from rich.prompt import Prompt

from genlayer_cli.commands.actions import BaseAction
from genlayer_cli.commands.constants import READINESS_ERROR, READINESS_TIMEOUT
from genlayer_cli.commands.errors import GenlayerError
from genlayer_cli.commands.networks import AI_PROVIDERS
from genlayer_cli.commands.simulator import SimulatorService


class LocalnetAction(BaseAction):
    """Base for actions that drive a SimulatorService.

    Each step reports its own failure and returns False so the caller can stop.
    """

    def __init__(self, *args, simulator: Optional[SimulatorService] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.simulator = simulator or SimulatorService()

    def run_and_wait(self) -> bool:
        try:
            self.simulator.run_simulator()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error starting the simulator", e)
            return False

        self.reporter.set_spinner_text("Waiting for the simulator to be ready...")
        try:
            readiness = self.simulator.wait_for_simulator_to_be_ready()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error waiting for the simulator to be ready", e)
            return False

        if readiness.initialized:
            return True
        if readiness.error_code == READINESS_TIMEOUT:
            self.reporter.fail_spinner(
                "The simulator is taking too long to initialize. "
                "Please try again later."
            )
        elif readiness.error_code == READINESS_ERROR:
            self.reporter.fail_spinner(
                "Unable to initialize the GenLayer simulator.",
                readiness.error_message,
            )
        return False

    def reset_database(self) -> bool:
        self.reporter.set_spinner_text("Resetting database...")
        try:
            self.simulator.clean_database()
        except GenlayerError as e:
            self.reporter.fail_spinner("Unable to reset the database", e)
            return False
        return True

    def initialize_validators(
        self, num_validators: int, providers: Iterable[str]
    ) -> bool:
        self.reporter.set_spinner_text("Initializing validators...")
        try:
            self.simulator.delete_all_validators()
            self.simulator.create_random_validators(num_validators, list(providers))
        except GenlayerError as e:
            self.reporter.fail_spinner("Unable to initialize the validators", e)
            return False
        return True

    def finish(self, headless: bool) -> None:
        message = "GenLayer simulator initialized successfully! "
        if not headless:
            message += (
                f"Go to {self.simulator.get_frontend_url()} "
                "in your browser to access it."
            )
        self.reporter.succeed_spinner(message)

        if headless:
            return
        self.reporter.start_spinner("Opening frontend...")
        try:
            self.simulator.open_frontend()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error opening the frontend", e)
            return
        self.reporter.succeed_spinner("Frontend opened successfully")

    def default_providers(self, include_ollama: bool) -> list[str]:
        return [key for key in AI_PROVIDERS if include_ollama or key != "ollama"]

    def prompt_providers(self, exclude: Iterable[str] = ()) -> list[str]:
        """Ask for one or more LLM providers; loops until the answer is valid."""
        options = self.simulator.get_ai_providers_options(with_hint=True, exclude=exclude)
        keys = [option["value"] for option in options]
        self.reporter.stop_spinner()
        console = self.reporter.console
        console.print("[bold]Select which LLM providers do you want to use:[/bold]")
        for index, option in enumerate(options, start=1):
            console.print(f"  {index}. {option['name']}")

        while True:
            answer = Prompt.ask(
                "Providers (comma separated numbers or names)", console=console
            )
            selected = []
            for token in (part.strip() for part in answer.split(",")):
                if token.isdigit() and 1 <= int(token) <= len(keys):
                    selected.append(keys[int(token) - 1])
                elif token in keys:
                    selected.append(token)
                elif token:
                    selected = []
                    break
            if selected:
                return list(dict.fromkeys(selected))
            console.print("[red]You must choose at least one valid option.[/red]")

    def prompt_api_keys(self, providers: Iterable[str]) -> dict[str, str]:
        """Ask for the API key of each selected provider that needs one."""
        env_config = {}
        for key in providers:
            provider = AI_PROVIDERS[key]
            if not provider.env_var:
                continue
            while True:
                value = Prompt.ask(
                    f"Please enter your {provider.name} API Key",
                    password=True,
                    console=self.reporter.console,
                )
                if value.strip():
                    env_config[provider.env_var] = value.strip()
                    break
                self.reporter.console.print(
                    f"[red]Please enter a valid API Key for {provider.name}.[/red]"
                )
        return env_config
