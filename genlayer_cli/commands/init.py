"""
Init command - Install and start the GenLayer simulator from scratch.
"""

import click

from genlayer_cli.commands.constants import DEFAULT_NUM_VALIDATORS
from genlayer_cli.commands.errors import GenlayerError, VersionRequiredError
from genlayer_cli.commands.localnet import LocalnetAction

MISSING_REQUIREMENTS_MESSAGES = {
    ("git", "docker"): "Git and Docker are not installed. Please install them and try again.",
    ("docker",): "Docker is not installed. Please install Docker and try again.",
    ("git",): "Git is not installed. Please install Git and try again.",
}


class InitAction(LocalnetAction):
    def check_requirements(self) -> bool:
        self.reporter.start_spinner("Checking installation requirements...")
        try:
            installed = self.simulator.check_install_requirements()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error checking the installation requirements", e)
            return False

        missing = tuple(tool for tool in ("git", "docker") if not installed.get(tool))
        if missing:
            self.reporter.fail_spinner(MISSING_REQUIREMENTS_MESSAGES[missing])
            return False

        self.reporter.set_spinner_text("Checking version requirements...")
        try:
            missing_versions = self.simulator.check_version_requirements()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error checking the version requirements", e)
            return False

        if missing_versions:
            self.reporter.stop_spinner()
            for tool, version in missing_versions.items():
                self.reporter.log_error(VersionRequiredError(tool, version).message)
            return False

        self.reporter.stop_spinner()
        return True

    def execute(
        self,
        num_validators: int = DEFAULT_NUM_VALIDATORS,
        headless: bool = False,
        reset_db: bool = False,
        disable_ollama: bool = False,
    ) -> bool:
        if not self.check_requirements():
            return False

        self.confirm_prompt(
            "This command is going to reset GenLayer docker images and containers, "
            "providers API Keys, and GenLayer database (accounts, transactions, "
            "validators and logs). Contract code (gpy files) will be kept. "
            "Do you want to continue?"
        )

        self.reporter.start_spinner("Resetting Docker containers and images...")
        try:
            self.simulator.reset_docker_containers()
            self.simulator.reset_docker_images()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error resetting Docker containers and images", e)
            return False

        self.reporter.set_spinner_text("Downloading GenLayer Simulator from GitHub...")
        try:
            downloaded = self.simulator.download_simulator()
            if downloaded["wasInstalled"]:
                self.reporter.set_spinner_text("Updating GenLayer Simulator...")
                self.simulator.update_simulator()
        except GenlayerError as e:
            self.reporter.fail_spinner("Error downloading the GenLayer Simulator", e)
            return False

        providers = self.prompt_providers(exclude=("ollama",) if disable_ollama else ())
        env_config = self.prompt_api_keys(providers)

        self.reporter.start_spinner("Configuring GenLayer Simulator environment...")
        try:
            self.simulator.ensure_env_file()
            self.simulator.config_simulator(env_config)
        except GenlayerError as e:
            self.reporter.fail_spinner("Error configuring the simulator environment", e)
            return False

        self.reporter.set_spinner_text("Running the GenLayer Simulator...")
        if not self.run_and_wait():
            return False

        if "ollama" in providers:
            self.reporter.set_spinner_text("Pulling llama3 from Ollama...")
            try:
                self.simulator.pull_ollama_model()
            except GenlayerError as e:
                self.reporter.fail_spinner("Error pulling the Ollama model", e)
                return False

        if reset_db and not self.reset_database():
            return False

        if not self.initialize_validators(num_validators, providers):
            return False

        self.finish(headless)
        return True


@click.command()
@click.option(
    "--numValidators",
    "-n",
    "num_validators",
    type=int,
    default=DEFAULT_NUM_VALIDATORS,
    show_default=True,
    help="Number of validators.",
)
@click.option("--headless", is_flag=True, default=False, help="Headless mode.")
@click.option("--reset-db", is_flag=True, default=False, help="Reset the database.")
@click.option(
    "--disable-ollama",
    is_flag=True,
    default=False,
    help="Do not offer the Ollama provider.",
)
def init(num_validators: int, headless: bool, reset_db: bool, disable_ollama: bool):
    """Initialize the GenLayer environment."""
    return InitAction().execute(num_validators, headless, reset_db, disable_ollama)
