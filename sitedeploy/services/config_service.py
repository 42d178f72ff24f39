"""Configuration service for loading the deployment target from .env."""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import dotenv_values

from sitedeploy.constants import (
    CONFIG_FILENAME,
    CONFIG_TEMPLATE_FILENAME,
    DEFAULT_DEPLOY_BRANCH,
    DEFAULT_SSH_PORT,
    REQUIRED_CONFIG_KEYS,
)
from sitedeploy.exceptions import ConfigurationError, MissingConfigKeysError
from sitedeploy.models.config import DeployConfig

CONFIG_KEYS = REQUIRED_CONFIG_KEYS + ("DEPLOY_BRANCH", "SSH_PORT")


class ConfigService:
    """Service for reading and validating deployment configuration."""

    def __init__(
        self,
        site_dir: Path,
        env_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """
        Initialize config service.

        Args:
            site_dir: Directory holding the site and its .env file
            env_file: Explicit configuration file (defaults to site_dir/.env)
            environ: Process environment used for keys the file leaves unset
        """
        self.site_dir = Path(site_dir)
        self.env_file = Path(env_file) if env_file else self.site_dir / CONFIG_FILENAME
        self.environ = os.environ if environ is None else environ

    def read_values(self) -> Dict[str, str]:
        """
        Read raw key/value pairs, file values taking precedence.

        Raises:
            ConfigurationError: If the configuration file does not exist
        """
        if not self.env_file.is_file():
            raise ConfigurationError(
                f"{self.env_file.name} file not found! ({self.env_file})",
                context=(
                    f"Please copy {CONFIG_TEMPLATE_FILENAME} to {CONFIG_FILENAME} "
                    "and configure your settings (or run: sitedeploy init)"
                ),
            )

        # A key present in the file, even empty, shadows the environment
        file_values = {
            key: (value or "").strip()
            for key, value in dotenv_values(self.env_file).items()
        }
        values = {
            key: self.environ[key]
            for key in CONFIG_KEYS
            if key not in file_values and self.environ.get(key)
        }
        values.update(file_values)
        return values

    def validate(self, values: Mapping[str, str]) -> List[str]:
        """Return the required keys that are unset or empty."""
        return [key for key in REQUIRED_CONFIG_KEYS if not values.get(key)]

    def _parse_port(self, raw: Optional[str]) -> int:
        if not raw:
            return DEFAULT_SSH_PORT
        try:
            port = int(raw)
        except ValueError:
            port = 0
        if not 1 <= port <= 65535:
            raise ConfigurationError(
                f"SSH_PORT must be a port number, got '{raw}'",
                context=str(self.env_file),
            )
        return port

    def load(self) -> DeployConfig:
        """
        Load the deployment configuration.

        Returns:
            DeployConfig with defaults applied

        Raises:
            ConfigurationError: If the file is missing or values are invalid
        """
        values = self.read_values()
        missing = self.validate(values)
        if missing:
            raise MissingConfigKeysError(missing, str(self.env_file))

        return DeployConfig(
            remote_user=values["REMOTE_USER"],
            remote_host=values["REMOTE_HOST"],
            remote_path=values["REMOTE_PATH"],
            deploy_branch=values.get("DEPLOY_BRANCH") or DEFAULT_DEPLOY_BRANCH,
            ssh_port=self._parse_port(values.get("SSH_PORT")),
        )
