"""
Configuration loader — reads crudgen.yml into a Settings model.

The file is optional: with none found, built-in defaults point at a
local Ollama server.  Values are layered in precedence order:

    CRUDGEN_* env vars  >  crudgen.yml  >  defaults
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from crudgen.adapters.ollama import DEFAULT_ENDPOINT

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "crudgen.yml"

# Environment variable → settings field
_ENV_OVERRIDES = {
    "CRUDGEN_ENDPOINT": "endpoint",
    "CRUDGEN_INTERPRET_MODEL": "interpret_model",
    "CRUDGEN_GENERATE_MODEL": "generate_model",
    "CRUDGEN_TIMEOUT": "timeout",
}


class ConfigError(Exception):
    """Raised when crudgen configuration is invalid or unreadable."""


class Settings(BaseModel):
    """Effective crudgen settings.

    Attributes:
        endpoint:        Ollama generate endpoint URL.
        interpret_model: Model that turns the request into a plan.
        generate_model:  Model that writes the project files.
        timeout:         HTTP timeout in seconds (None = wait forever).
        workspace:       Root directory for generated files, if pinned.
        config_path:     File the settings were loaded from, if any.
    """

    endpoint: str = DEFAULT_ENDPOINT
    interpret_model: str = "llama3.1:8b"
    generate_model: str = "codellama:13b"
    timeout: float | None = Field(default=None, gt=0)
    workspace: Path | None = None

    config_path: Path | None = Field(default=None, exclude=True)

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["config_path"] = str(self.config_path) if self.config_path else None
        return data


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for crudgen.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to crudgen.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _read_file(path: Path) -> dict:
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

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
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def load_settings(
    path: Path | None = None,
    environ: dict[str, str] | None = None,
) -> Settings:
    """Load, layer and validate crudgen settings.

    Args:
        path:    Explicit config file. If None, searches upward from cwd.
        environ: Environment mapping (default: ``os.environ``).

    Returns:
        Validated Settings. A relative ``workspace`` is resolved against
        the config file's directory.

    Raises:
        ConfigError: If the file is unreadable or the values are invalid.
    """
    if path is None:
        path = find_config_file()

    data = _read_file(path) if path is not None else {}

    env = os.environ if environ is None else environ
    for var, key in _ENV_OVERRIDES.items():
        if env.get(var):
            data[key] = env[var]

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        source = path or "environment"
        raise ConfigError(f"Invalid configuration in {source}: {e}") from e

    if path is not None:
        settings.config_path = path.resolve()
        if settings.workspace is not None and not settings.workspace.is_absolute():
            settings.workspace = settings.config_path.parent / settings.workspace

    logger.info(
        "Settings: endpoint=%s interpret=%s generate=%s",
        settings.endpoint, settings.interpret_model, settings.generate_model,
    )
    return settings
