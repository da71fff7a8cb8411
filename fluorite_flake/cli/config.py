"""CLI configuration.

Settings come from built-in defaults, then an optional YAML file, then
FLUORITE_* environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".fluorite-flake"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"

FALSE_VALUES = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when the configuration file is invalid."""


@dataclass
class Config:
    """CLI configuration.

    Attributes:
        log_level: Default log level
        audit_dir: Directory for cleanup audit logs
        audit_enabled: Whether executed cleanups are written to the audit log
    """

    log_level: str = "INFO"
    audit_dir: str = str(DEFAULT_CONFIG_DIR / "audit-logs")
    audit_enabled: bool = True

    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        """Load configuration.

        Args:
            path: YAML config file (default: ~/.fluorite-flake/config.yaml, optional)

        Returns:
            Config with file and environment overrides applied

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping
        """
        config = cls()

        config_path = Path(path).expanduser() if path else DEFAULT_CONFIG_FILE
        if config_path.exists():
            config._apply(cls._read_file(config_path))
        elif path:
            raise ConfigError(f"Config file not found: {config_path}")

        config._apply_environment()
        return config

    @staticmethod
    def _read_file(config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {config_path} must contain a mapping")
        return data

    def _apply(self, data: Dict[str, Any]) -> None:
        known = {f.name for f in fields(self)}
        for key, value in data.items():
            if key not in known:
                logger.debug(f"Ignoring unknown config key: {key}")
                continue
            if key == "audit_enabled":
                value = _to_bool(value)
            elif value is not None:
                value = str(value)
            setattr(self, key, value)

    def _apply_environment(self) -> None:
        if os.environ.get("FLUORITE_LOG_LEVEL"):
            self.log_level = os.environ["FLUORITE_LOG_LEVEL"]
        if os.environ.get("FLUORITE_AUDIT_DIR"):
            self.audit_dir = os.environ["FLUORITE_AUDIT_DIR"]
        if os.environ.get("FLUORITE_AUDIT_ENABLED"):
            self.audit_enabled = _to_bool(os.environ["FLUORITE_AUDIT_ENABLED"])


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() not in FALSE_VALUES
