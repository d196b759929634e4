"""
Configuration loader — reads dockergen.yml into a typed model.

The file is optional. When present it sits in the scanned project
directory and supplies defaults for the ``init`` options; CLI flags
still take precedence over anything it sets.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "dockergen.yml"


class ConfigError(Exception):
    """Raised when dockergen.yml is unreadable or invalid."""


class DockergenConfig(BaseModel):
    """Per-project defaults for ``dockergen init``.

    Unset fields (None) defer to the built-in defaults.
    """

    model_config = ConfigDict(extra="forbid")

    port: int | None = Field(default=None, ge=1, le=65535)
    multi_stage: bool | None = None
    compose: bool | None = None


def find_config_file(project_dir: Path) -> Path | None:
    """Return the config file path in *project_dir*, or None."""
    candidate = project_dir / CONFIG_FILE
    return candidate if candidate.is_file() else None


def load_config(project_dir: Path) -> DockergenConfig:
    """Load and validate dockergen.yml from *project_dir*.

    Returns an all-default config when the file does not exist.

    Raises:
        ConfigError: If the file exists but is invalid.
    """
    path = find_config_file(project_dir)
    if path is None:
        logger.debug("No %s in %s, using defaults", CONFIG_FILE, project_dir)
        return DockergenConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return DockergenConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = DockergenConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config
