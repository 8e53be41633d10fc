"""
Constants and configuration values used across the genlayer-cli codebase.
"""

import os
from pathlib import Path

# Config file location
CONFIG_FOLDER = Path.home() / ".genlayer"
CONFIG_FILE_NAME = "genlayer-config.json"
DEFAULT_KEYPAIR_PATH = "./keypair.json"

# Config keys
KEYPAIR_PATH_KEY = "keyPairPath"
NETWORK_KEY = "network"
DEFAULT_OLLAMA_MODEL_KEY = "defaultOllamaModel"

# JSON-RPC endpoint of the local simulator
DEFAULT_JSON_RPC_URL = os.environ.get("GENLAYER_RPC_URL", "http://localhost:4000/api")
JSON_RPC_VERSION = "2.0"
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Simulator repository and location
DEFAULT_REPO_GH_URL = "git@github.com:yeagerai/genlayer-simulator.git"
SIMULATOR_FOLDER_NAME = "genlayer-simulator"
DEFAULT_SIMULATOR_LOCATION = Path.home() / SIMULATOR_FOLDER_NAME

# Docker naming convention for everything the simulator creates
DOCKER_IMAGES_AND_CONTAINERS_NAME_PREFIX = "genlayer-simulator-"
OLLAMA_CONTAINER_NAME = "ollama"
DEFAULT_OLLAMA_MODEL = "llama3"

# Polling and wait intervals
STARTING_TIMEOUT_WAIT_CYCLE = 2.0  # seconds between ping attempts
STARTING_TIMEOUT_ATTEMPTS = 120  # ping attempts before giving up

# Transaction receipt polling
DEPLOY_RECEIPT_RETRIES = 15
DEPLOY_RECEIPT_INTERVAL = 2000  # milliseconds
WRITE_RECEIPT_RETRIES = 100
WRITE_RECEIPT_INTERVAL = 5000  # milliseconds

# Validator defaults
DEFAULT_NUM_VALIDATORS = 5
DEFAULT_VALIDATOR_STAKE = 1
MIN_VALIDATOR_STAKE = 1
MAX_VALIDATOR_STAKE = 10

# Minimum tool versions
VERSION_REQUIREMENTS = {
    "docker": "25.0.0",
    "node": "18.0.0",
}

# Deploy scripts
DEPLOY_SCRIPTS_FOLDER = "deploy"

# Platform specific shell templates. "{location}" is the simulator checkout.
AVAILABLE_PLATFORMS = ("darwin", "win32", "linux")

DEFAULT_RUN_SIMULATOR_COMMAND = {
    "darwin": (
        "osascript -e 'tell application \"Terminal\" to do script "
        "\"cd {location} && docker compose build && docker compose up\"'"
    ),
    "win32": (
        'start cmd.exe /k "cd {location} && docker compose build && docker compose up"'
    ),
    "linux": (
        "x-terminal-emulator -e 'bash -c \"cd {location} && docker compose build "
        "&& docker compose up\"'"
    ),
}

DEFAULT_RUN_DOCKER_COMMAND = {
    "darwin": "open -a Docker",
    "win32": 'start "" "Docker Desktop"',
    "linux": "sudo systemctl start docker",
}

DEFAULT_PULL_OLLAMA_COMMAND = {
    "darwin": "cd {location} && docker exec ollama ollama pull llama3",
    "win32": "cd /d {location} && docker exec ollama ollama pull llama3",
    "linux": "cd {location} && docker exec ollama ollama pull llama3",
}

# Readiness outcomes
READINESS_TIMEOUT = "TIMEOUT"
READINESS_ERROR = "ERROR"
