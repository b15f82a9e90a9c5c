"""Configuration management for tablebuilder."""

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tablebuilder.exceptions import ConfigError

CONFIG_SECTION = "tablebuilder"
DEFAULT_CONFIG_FILE = "tablebuilder.cfg"


def load_config_file(path: Optional[Path] = None) -> dict[str, str]:
    """Load settings from the [tablebuilder] section of an INI file.

    Args:
        path: File to read. Defaults to $TABLEBUILDER_CONFIG, then
            ./tablebuilder.cfg.

    Returns:
        Dict of the section's keys; empty if the default file does not exist.

    Raises:
        ConfigError: If the file cannot be parsed, an explicitly requested
            file is missing, or the section is absent.
    """
    explicit = path is not None or "TABLEBUILDER_CONFIG" in os.environ
    cfg_path = path or Path(os.environ.get("TABLEBUILDER_CONFIG", DEFAULT_CONFIG_FILE))
    if not cfg_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {cfg_path}")
        return {}

    config = configparser.ConfigParser()
    try:
        config.read(cfg_path)
    except configparser.Error as e:
        raise ConfigError(f"Invalid config file {cfg_path}: {e}") from e

    if CONFIG_SECTION not in config:
        raise ConfigError(f"Section [{CONFIG_SECTION}] not found in {cfg_path}")

    return {key: value.strip() for key, value in config[CONFIG_SECTION].items()}


@dataclass
class Config:
    """Configuration for tablebuilder."""

    prefix: Optional[str] = None
    collate: Optional[str] = None
    schema_path: str = "schema"

    @classmethod
    def from_env(
        cls,
        *,
        prefix: Optional[str] = None,
        collate: Optional[str] = None,
        schema_path: Optional[str] = None,
        config_file: Optional[Path] = None,
    ) -> "Config":
        """Load configuration from a config file and env vars, with overrides.

        Priority (highest to lowest):
        1. Explicit parameters (CLI args)
        2. Environment variables
        3. [tablebuilder] section of the config file
        """
        file_cfg = load_config_file(config_file)

        def resolve(explicit, env_key, cfg_key):
            if explicit is not None:
                return explicit
            env_val = os.environ.get(env_key)
            if env_val is not None:
                return env_val
            return file_cfg.get(cfg_key)

        return cls(
            prefix=resolve(prefix, "TABLEBUILDER_PREFIX", "prefix"),
            collate=resolve(collate, "TABLEBUILDER_COLLATE", "collate"),
            schema_path=resolve(schema_path, "TABLEBUILDER_SCHEMA_PATH", "schema_path")
            or "schema",
        )
