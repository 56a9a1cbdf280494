"""
Config check use case — validate crudgen.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from crudgen.core.config.loader import ConfigError, Settings, find_config_file, load_settings


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    settings: Settings | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.settings.to_dict() if self.settings else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate crudgen configuration and report issues.

    A missing config file is not an error: defaults apply.

    Args:
        config_path: Optional explicit path to crudgen.yml.

    Returns:
        ConfigCheckResult with the effective settings and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()
    result.config_path = config_path

    if config_path is None:
        result.warnings.append("No crudgen.yml found. Using built-in defaults.")

    try:
        settings = load_settings(config_path)
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    result.settings = settings

    if not settings.endpoint.startswith(("http://", "https://")):
        result.errors.append(f"Endpoint must be an http(s) URL: {settings.endpoint}")

    if settings.workspace is not None and not settings.workspace.is_dir():
        result.warnings.append(f"Workspace directory does not exist: {settings.workspace}")

    if settings.interpret_model == settings.generate_model:
        result.warnings.append(
            f"Both stages use the same model ({settings.generate_model})."
        )

    result.valid = len(result.errors) == 0
    return result
