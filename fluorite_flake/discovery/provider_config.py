"""Provider configuration files.

Parses vercel.json and domains.json into explicit structures instead of
duck-typed JSON access.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

VERCEL_CONFIG_FILE = "vercel.json"
DOMAINS_FILE = "domains.json"


@dataclass(frozen=True)
class VercelProjectConfig:
    """Validated subset of vercel.json.

    Attributes:
        project_id: "projectId" field (optional)
        org_id: "orgId" field (optional)
        aliases: "alias" field normalized to a list (empty when absent)
    """

    project_id: Optional[str] = None
    org_id: Optional[str] = None
    aliases: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "VercelProjectConfig":
        """Create config from parsed JSON.

        Non-string identifiers are ignored. "alias" may be a string or a list;
        list entries are converted to strings.
        """
        return cls(
            project_id=_optional_str(data.get("projectId")),
            org_id=_optional_str(data.get("orgId")),
            aliases=_normalize_alias(data.get("alias")),
        )


def _optional_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


def _normalize_alias(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, list):
        return [str(item) for item in value]
    return []


def _read_json(path: Path) -> Any:
    """Read a JSON file, returning None when the file does not exist.

    Raises:
        OSError: If the file exists but cannot be read
        ValueError: If the content is not valid JSON
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    return json.loads(content)


def load_vercel_config(project_path: Path) -> Optional[VercelProjectConfig]:
    """Load vercel.json from the project root.

    Malformed or unreadable config is logged and treated as missing.

    Args:
        project_path: Project directory

    Returns:
        Parsed config, None if absent or invalid
    """
    config_path = project_path / VERCEL_CONFIG_FILE
    try:
        data = _read_json(config_path)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable {VERCEL_CONFIG_FILE} at {config_path}: {e}")
        return None

    if data is None:
        return None

    if not isinstance(data, dict):
        logger.warning(f"Ignoring {VERCEL_CONFIG_FILE} at {config_path}: expected a JSON object")
        return None

    return VercelProjectConfig.from_dict(data)


def load_domains(project_path: Path) -> List[str]:
    """Load the fallback domain list from domains.json.

    Args:
        project_path: Project directory

    Returns:
        Domain strings, empty if the file is absent or malformed
    """
    domains_path = project_path / DOMAINS_FILE
    try:
        data = _read_json(domains_path)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to read domain list {domains_path}: {e}")
        return []

    if isinstance(data, list):
        return [str(item) for item in data]

    if data is not None:
        logger.warning(f"Ignoring {DOMAINS_FILE} at {domains_path}: expected a JSON list")
    return []
