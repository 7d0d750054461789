"""
Configuration Service

Builds the server configuration from the process environment and an
optional .env file.
"""

import os
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from dotenv import dotenv_values

from stackctl.constants import (
    CONFIG_DIR_NAME,
    DEFAULT_TIMEOUT,
    EDGE_STACK_MARKERS,
    ENV_EDGE_MARKERS,
    ENV_FILE_NAME,
    ENV_LOG_DIR,
    ENV_READ_ONLY,
    ENV_SERVER_URL,
    ENV_SKIP_TLS_VERIFY,
    ENV_TIMEOUT,
    ENV_TOKEN,
    FALSY_VALUES,
    LOG_DIR_NAME,
    TRUTHY_VALUES,
)
from stackctl.exceptions import ConfigurationError
from stackctl.models.config import ServerConfig


def default_config_dir() -> Path:
    """Get ~/.stackctl."""
    return Path.home() / CONFIG_DIR_NAME


class ConfigService:
    """
    Configuration loading service.

    Priority (highest first):
    1. Process environment
    2. First .env found in the search paths
    3. Defaults from stackctl.constants
    """

    def __init__(
        self,
        env_file: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.env_file = env_file
        self.environ = os.environ if environ is None else environ

    def search_paths(self) -> List[Path]:
        """Get candidate .env locations in lookup order."""
        if self.env_file is not None:
            return [Path(self.env_file)]
        return [
            Path.cwd() / ENV_FILE_NAME,
            default_config_dir() / ENV_FILE_NAME,
        ]

    def find_env_file(self) -> Optional[Path]:
        """Smart .env file detection"""
        for path in self.search_paths():
            if path.exists():
                return path
        return None

    def load_values(self) -> Dict[str, str]:
        """Merge .env values with the process environment."""
        values: Dict[str, str] = {}

        env_file = self.find_env_file()
        if env_file is None and self.env_file is not None:
            raise ConfigurationError(
                f"Env file not found: {self.env_file}",
                context="Pass an existing file or drop --config",
            )
        if env_file is not None:
            for key, value in dotenv_values(env_file).items():
                if value is not None:
                    values[key] = value

        for key in (
            ENV_SERVER_URL,
            ENV_TOKEN,
            ENV_SKIP_TLS_VERIFY,
            ENV_TIMEOUT,
            ENV_EDGE_MARKERS,
            ENV_READ_ONLY,
            ENV_LOG_DIR,
        ):
            if key in self.environ:
                values[key] = self.environ[key]

        return values

    def load(self) -> ServerConfig:
        """
        Load server configuration.

        Returns:
            ServerConfig

        Raises:
            ConfigurationError: If a value is invalid
        """
        values = self.load_values()

        log_dir = values.get(ENV_LOG_DIR)
        return ServerConfig(
            server_url=values.get(ENV_SERVER_URL, "").strip(),
            token=values.get(ENV_TOKEN, "").strip(),
            skip_tls_verify=parse_bool(ENV_SKIP_TLS_VERIFY, values.get(ENV_SKIP_TLS_VERIFY)),
            timeout=parse_timeout(values.get(ENV_TIMEOUT)),
            edge_markers=parse_markers(values.get(ENV_EDGE_MARKERS)),
            read_only=parse_bool(ENV_READ_ONLY, values.get(ENV_READ_ONLY)),
            log_dir=Path(log_dir).expanduser()
            if log_dir
            else default_config_dir() / LOG_DIR_NAME,
        )


def parse_bool(key: str, raw: Optional[str]) -> bool:
    """Parse a boolean setting."""
    if raw is None:
        return False
    value = raw.strip().lower()
    if value in TRUTHY_VALUES:
        return True
    if value in FALSY_VALUES:
        return False
    raise ConfigurationError(
        f"Invalid boolean for {key}: '{raw}'",
        context=f"Use one of: {', '.join(sorted((TRUTHY_VALUES | FALSY_VALUES) - {''}))}",
    )


def parse_timeout(raw: Optional[str]) -> float:
    """Parse the request timeout in seconds."""
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid timeout for {ENV_TIMEOUT}: '{raw}'")
    if timeout <= 0:
        raise ConfigurationError(f"Timeout must be positive, got {raw}")
    return timeout


def parse_markers(raw: Optional[str]) -> Tuple[str, ...]:
    """Parse comma-separated edge stack markers."""
    if raw is None:
        return EDGE_STACK_MARKERS
    markers = tuple(part.strip() for part in raw.split(",") if part.strip())
    if not markers:
        raise ConfigurationError(f"{ENV_EDGE_MARKERS} is set but lists no markers")
    return markers
