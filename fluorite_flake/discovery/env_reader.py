"""Dotenv file reading and layering.

Reads the fixed set of dotenv files for each environment tier of a project and
merges them into an EnvironmentMap.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from dotenv import dotenv_values

from fluorite_flake.models.environment import EnvironmentKey, EnvironmentMap

logger = logging.getLogger(__name__)

SHARED_ENV_FILES: List[str] = [".env"]

# Files within a tier are merged in listed order (later file wins)
ENVIRONMENT_ENV_FILES: Dict[EnvironmentKey, List[str]] = {
    EnvironmentKey.DEVELOPMENT: [".env.local", ".env.development"],
    EnvironmentKey.STAGING: [".env.staging"],
    EnvironmentKey.PRODUCTION: [".env.prod", ".env.production"],
}


def parse_env_content(content: str) -> Dict[str, str]:
    """Parse dotenv formatted text.

    Each line is parsed on its own, so an unterminated quote only loses its
    own line. Blank lines and "#" comments are ignored, the first "="
    separates key and value, and surrounding quotes are stripped from values.
    Keys without a value are dropped.

    Args:
        content: Dotenv file content

    Returns:
        Dictionary of variable names to values
    """
    variables: Dict[str, str] = {}
    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        parsed = dotenv_values(stream=io.StringIO(line), interpolate=False)
        for key, value in parsed.items():
            if key and value is not None:
                variables[key.strip()] = value
    return variables


class EnvironmentMapReader:
    """Reads a project's dotenv files into a layered EnvironmentMap."""

    def __init__(
        self,
        shared_files: Optional[List[str]] = None,
        environment_files: Optional[Dict[EnvironmentKey, List[str]]] = None,
    ) -> None:
        self.shared_files = shared_files if shared_files is not None else SHARED_ENV_FILES
        self.environment_files = environment_files if environment_files is not None else ENVIRONMENT_ENV_FILES

    def read(self, project_path: Union[str, Path]) -> EnvironmentMap:
        """Read and merge every dotenv file of a project.

        Missing files contribute nothing. Unreadable files are logged and
        treated as empty so one bad file never aborts discovery.

        Args:
            project_path: Project directory

        Returns:
            Layered environment map
        """
        root = Path(project_path)
        shared = self._merge_files(root, self.shared_files)
        tiers = {
            environment: self._merge_files(root, self.environment_files.get(environment, []))
            for environment in EnvironmentKey
        }
        return EnvironmentMap.from_layers(shared, tiers)

    def _merge_files(self, root: Path, file_names: List[str]) -> Dict[str, str]:
        merged: Dict[str, str] = {}
        for file_name in file_names:
            merged.update(self._read_file(root / file_name))
        return merged

    def _read_file(self, file_path: Path) -> Dict[str, str]:
        try:
            content = file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read environment file {file_path}: {e}")
            return {}

        logger.debug(f"Loaded environment file {file_path}")
        return parse_env_content(content)
