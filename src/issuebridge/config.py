"""Configuration loading for IssueBridge."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = "issuebridge.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class LoggingConfig:
    """Logging settings passed through to setup_logging."""

    dir: str | None = None
    level: str | None = None
    console: bool = True


@dataclass
class HttpConfig:
    """Outbound HTTP settings for tracker calls."""

    timeout: float = 30.0


@dataclass
class AppConfig:
    """IssueBridge application configuration.

    `gitlab_url` is the public base URL of the host application. Entity links
    posted to the tracker (users, projects, commits, issues) are built on it.
    """

    gitlab_url: str = "http://localhost"
    database: str = "issuebridge.db"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    root_path: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> AppConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.
            root_path: Root directory containing the config file.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section has the wrong shape.
        """
        gitlab_data = data.get("gitlab", {})
        logging_data = data.get("logging", {})
        http_data = data.get("http", {})
        for name, section in (("gitlab", gitlab_data), ("logging", logging_data), ("http", http_data)):
            if not isinstance(section, dict):
                raise ConfigError(f"Section '{name}' must be a mapping")

        gitlab_url = gitlab_data.get("url", "http://localhost")
        if not isinstance(gitlab_url, str) or not gitlab_url.startswith(("http://", "https://")):
            raise ConfigError(f"gitlab.url must be an http(s) URL, got {gitlab_url!r}")

        try:
            timeout = float(http_data.get("timeout", 30.0))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"http.timeout must be a number: {e}") from e

        return cls(
            gitlab_url=gitlab_url,
            database=str(data.get("database", "issuebridge.db")),
            logging=LoggingConfig(
                dir=logging_data.get("dir"),
                level=logging_data.get("level"),
                console=bool(logging_data.get("console", True)),
            ),
            http=HttpConfig(timeout=timeout),
            root_path=root_path,
        )

    def apply_env(self, environ: dict[str, str] | None = None) -> AppConfig:
        """Override fields from ISSUEBRIDGE_* environment variables."""
        env = os.environ if environ is None else environ
        if env.get("ISSUEBRIDGE_GITLAB_URL"):
            self.gitlab_url = env["ISSUEBRIDGE_GITLAB_URL"]
        if env.get("ISSUEBRIDGE_DB_PATH"):
            self.database = env["ISSUEBRIDGE_DB_PATH"]
        return self

    def get_database_path(self) -> str:
        """Get the database path, resolved against the config directory."""
        if self.database == ":memory:" or Path(self.database).is_absolute():
            return self.database
        return str(self.root_path / self.database)


def load_config(config_path: Path | str) -> AppConfig:
    """Load IssueBridge configuration from a YAML file.

    Args:
        config_path: Path to issuebridge.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return AppConfig.from_dict(data, config_path.parent)


def find_config(start_path: Path | str | None = None) -> Path:
    """Find issuebridge.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to issuebridge.yaml file.

    Raises:
        ConfigError: If no config file is found.
    """
    start_path = Path.cwd() if start_path is None else Path(start_path)
    current = start_path.resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILENAME
        if config_path.exists():
            return config_path

    raise ConfigError(f"No {CONFIG_FILENAME} found in {start_path} or any parent directory")


def resolve_config(config_path: Path | str | None = None) -> AppConfig:
    """Load the given config, or the nearest one, or fall back to defaults.

    Environment overrides are applied in every case.
    """
    if config_path is not None:
        return load_config(config_path).apply_env()
    try:
        found = find_config()
    except ConfigError:
        return AppConfig().apply_env()
    return load_config(found).apply_env()
