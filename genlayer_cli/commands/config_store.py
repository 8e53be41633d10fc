"""
Config store for genlayer-cli.

The whole CLI shares one flat JSON object persisted at
~/.genlayer/genlayer-config.json. Every write is a full read-modify-write of
the file; absent keys read as None.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from genlayer_cli.commands.constants import CONFIG_FILE_NAME, CONFIG_FOLDER
from genlayer_cli.commands.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ConfigFileManager:
    """Reads and writes the CLI config file.

    Creating an instance makes sure the folder exists and that the file holds
    at least an empty JSON object. Doing so twice is harmless.
    """

    def __init__(
        self,
        base_folder: Optional[Union[str, Path]] = None,
        file_name: str = CONFIG_FILE_NAME,
    ):
        self.folder_path = Path(base_folder) if base_folder else CONFIG_FOLDER
        self.config_file_path = self.folder_path / file_name
        self._ensure_config_file()

    def _ensure_config_file(self) -> None:
        self.folder_path.mkdir(parents=True, exist_ok=True)
        if not self.config_file_path.exists():
            self._save({})

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.config_file_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Config file is not valid JSON: {e}",
                config_file=str(self.config_file_path),
            ) from e
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object.",
                config_file=str(self.config_file_path),
            )
        return data

    def _save(self, data: dict[str, Any]) -> None:
        # Write atomically using temp file
        temp_path = self.config_file_path.with_suffix(".tmp")
        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

        try:
            os.chmod(temp_path, 0o600)
        except OSError:
            pass

        os.replace(temp_path, self.config_file_path)
        logger.debug("Saved config to %s", self.config_file_path)

    def get_folder_path(self) -> Path:
        return self.folder_path

    def get_file_path(self, file_name: str) -> Path:
        """Resolve a file name against the config folder."""
        return self.folder_path / file_name

    def get_config(self) -> dict[str, Any]:
        return self._load()

    def get_config_by_key(self, key: str) -> Optional[Any]:
        return self._load().get(key)

    def write_config(self, key: str, value: Any) -> None:
        config = self._load()
        config[key] = value
        self._save(config)

    def remove_config(self, key: str) -> bool:
        """Remove a key from the config.

        Returns:
            True if the key existed and was removed, False if it was absent
            (the file is left untouched in that case).
        """
        config = self._load()
        if key not in config:
            return False
        del config[key]
        self._save(config)
        return True
