"""
Keypair manager - generate and read back the account used to sign transactions.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Union

from eth_account import Account

from genlayer_cli.commands.config_store import ConfigFileManager
from genlayer_cli.commands.constants import DEFAULT_KEYPAIR_PATH, KEYPAIR_PATH_KEY
from genlayer_cli.commands.errors import ConfigurationError

logger = logging.getLogger(__name__)


class KeypairManager:
    """Persists a ``{address, privateKey}`` file and records its location."""

    def __init__(self, config: ConfigFileManager):
        self.config = config

    def get_private_key(self) -> str:
        """Return the stored private key, or an empty string if there is none."""
        keypair_path = self.config.get_config_by_key(KEYPAIR_PATH_KEY)
        if not keypair_path or not os.path.exists(keypair_path):
            return ""

        with open(keypair_path, encoding="utf-8") as f:
            keypair_data = json.load(f)

        return keypair_data.get("privateKey") or ""

    def require_private_key(self) -> str:
        """Like get_private_key, but a missing key is an error."""
        private_key = self.get_private_key()
        if not private_key:
            raise ConfigurationError(
                "Keypair file not found or has no private key. "
                "Run 'genlayer keygen create' to generate one.",
                config_file=self.config.get_config_by_key(KEYPAIR_PATH_KEY),
            )
        return private_key

    def create_keypair(
        self,
        output_path: Union[str, Path] = DEFAULT_KEYPAIR_PATH,
        overwrite: bool = False,
    ) -> dict[str, Any]:
        """Generate a fresh keypair and write it to ``output_path``.

        Relative paths are resolved against the config folder.

        Raises:
            ConfigurationError: If the file exists and ``overwrite`` is False.
        """
        final_output_path = self.config.get_file_path(output_path).resolve()

        if final_output_path.exists() and not overwrite:
            raise ConfigurationError(
                f"The file at {final_output_path} already exists. "
                "Use the '--overwrite' option to replace it.",
                config_file=str(final_output_path),
            )

        account = Account.create()
        keypair_data = {
            "address": account.address,
            "privateKey": "0x" + bytes(account.key).hex(),
        }

        final_output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(final_output_path, "w", encoding="utf-8") as f:
            json.dump(keypair_data, f, indent=2)
        try:
            os.chmod(final_output_path, 0o600)
        except OSError:
            pass

        self.config.write_config(KEYPAIR_PATH_KEY, str(final_output_path))
        logger.debug("Created keypair %s at %s", account.address, final_output_path)
        return {"address": account.address, "path": str(final_output_path)}
