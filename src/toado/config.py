"""Configuration management for the Toado CLI.

The configuration file is TOML. When no path is given the file is looked up
in the platform config directory and written with the defaults on first run.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir, user_data_dir
from pydantic import ValidationError as PydanticValidationError

from toado.errors import ConfigError
from toado.models import AppConfig, describe_errors
from toado.utils.logger import get_logger

APP_NAME = "toado"
CONFIG_FILE_NAME = "config.toml"
DATABASE_FILE_NAME = "database"

DEFAULT_CONFIG = """\
# Toado configuration

[table]
separate_columns = true
separate_rows = false

# Box drawing characters used to render tables
horizontal = "─"
vertical = "│"
up_horizontal = "┴"
down_horizontal = "┬"
vertical_right = "├"
vertical_left = "┤"
vertical_horizontal = "┼"
down_right = "┌"
down_left = "┐"
up_right = "└"
up_left = "┘"

[list]
default_verbose = false
"""


def default_config_path() -> Path:
    """Location of config.toml when ``--config`` is not given."""
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILE_NAME


def default_database_path() -> Path:
    """Location of the database file when ``--file`` is not given."""
    return Path(user_data_dir(APP_NAME)) / DATABASE_FILE_NAME


@dataclass(frozen=True)
class Settings:
    """Runtime settings resolved from the command line.

    Attributes:
        database_path: SQLite database file
        config_path: Explicit config file, or None for the default location
    """

    database_path: Path
    config_path: Path | None = None

    @classmethod
    def from_options(
        cls, file: str | Path | None = None, config: str | Path | None = None
    ) -> Settings:
        return cls(
            database_path=Path(file) if file else default_database_path(),
            config_path=Path(config) if config else None,
        )


class ConfigManager:
    """Loads the TOML configuration file."""

    def __init__(self, path: Path | None = None):
        self.explicit = path is not None
        self.config_file = path if path is not None else default_config_path()
        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from file.

        An explicit path must exist. The default path is created with the
        default contents if missing.

        Raises:
            ConfigError: If the file cannot be read, is not valid TOML, or
                holds invalid values
        """
        if not self.config_file.exists():
            if self.explicit:
                raise ConfigError(f"Config file not found: {self.config_file}")
            self.write_default()

        try:
            contents = self.config_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self.config_file}: {e}") from e

        return self.parse(contents, source=str(self.config_file))

    def write_default(self) -> None:
        """Write the default configuration to the config file location."""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)
            self.config_file.write_text(DEFAULT_CONFIG, encoding="utf-8")
        except OSError as e:
            raise ConfigError(
                f"Failed to create config file {self.config_file}: {e}"
            ) from e
        get_logger("config").info("wrote default config: %s", self.config_file)

    @staticmethod
    def parse(contents: str, source: str = "<string>") -> AppConfig:
        """Parse TOML text into an AppConfig."""
        try:
            data = tomllib.loads(contents)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Malformed config file {source}: {e}") from e

        try:
            return AppConfig.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigError(
                f"Invalid config file {source}: {describe_errors(e)}"
            ) from e
