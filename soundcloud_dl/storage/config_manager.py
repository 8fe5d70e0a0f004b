"""
Loads configuration from the environment (and an optional .env file), applies
CLI overrides, and validates the result.
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import dotenv_values
from pydantic import ValidationError

from soundcloud_dl.exceptions import ConfigError
from soundcloud_dl.models.config import DownloadConfig

log = logging.getLogger(__name__)

# Environment variable -> DownloadConfig field
ENV_KEYS = {
    "CLIENT_ID": "client_id",
    "PROFILE_URL": "profile_url",
    "OUT_DIR": "out_dir",
    "SC_API_BASE_URL": "api_base_url",
}


class ConfigManager:
    """Builds a DownloadConfig from defaults, .env, the environment and CLI options."""

    def __init__(
        self,
        env_file: Path | None = Path(".env"),
        environ: dict[str, str] | None = None,
    ):
        self.env_file = env_file
        self._environ = os.environ if environ is None else environ

    def load_config(self, cli_options: dict[str, Any] | None = None) -> DownloadConfig:
        """
        Resolves every setting and validates it.

        Real environment variables take precedence over the .env file, and CLI
        options take precedence over both.

        Raises:
            ConfigError: If a required setting is missing or validation fails.
        """
        settings = self._get_env_as_dict()

        if cli_options:
            settings.update(
                {key: value for key, value in cli_options.items() if value is not None}
            )

        missing = [
            env_name
            for env_name, field in ENV_KEYS.items()
            if field in ("client_id", "profile_url") and not settings.get(field)
        ]
        if missing:
            raise ConfigError(
                f"Missing required setting(s): {', '.join(missing)}. "
                "Set them in the environment or in a .env file."
            )

        try:
            return DownloadConfig(**settings)
        except ValidationError as e:
            raise ConfigError(f"Configuration validation failed:\n{e}") from e

    def _get_env_as_dict(self) -> dict[str, Any]:
        """Merges .env values with the process environment, environment winning."""
        merged: dict[str, Any] = {}

        if self.env_file and self.env_file.is_file():
            log.debug(f"Loading settings from [dim]{self.env_file}[/dim]")
            merged.update(
                {k: v for k, v in dotenv_values(self.env_file).items() if v is not None}
            )

        merged.update(
            {k: v for k, v in self._environ.items() if k in ENV_KEYS and v}
        )

        return {
            ENV_KEYS[key]: value for key, value in merged.items() if key in ENV_KEYS
        }
