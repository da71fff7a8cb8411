"""Resource discovery.

Infers the cloud resources attached to a local project from its dotenv files
and provider config files. No provider API is called.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union
from urllib.parse import urlparse

from fluorite_flake.discovery.env_reader import EnvironmentMapReader
from fluorite_flake.discovery.provider_config import load_domains, load_vercel_config
from fluorite_flake.models.dependency_graph import ResourceType
from fluorite_flake.models.environment import EnvironmentKey, EnvironmentMap
from fluorite_flake.models.inventory import (
    BlobStoreResource,
    DatabaseResource,
    DatabaseResources,
    EnvironmentVariable,
    ProjectInventory,
    StorageResources,
    VercelResources,
)
from fluorite_flake.restore.dependency import DependencyAnalyzer
from fluorite_flake.utils.masking import mask_sensitive_value

logger = logging.getLogger(__name__)

VERCEL_ENV_PREFIX = "VERCEL_"
DATABASE_PROVIDER_KEY = "DATABASE_PROVIDER"

# Explicit DATABASE_PROVIDER values
PROVIDER_ALIASES: Dict[str, ResourceType] = {
    "turso": ResourceType.TURSO_DATABASE,
    "libsql": ResourceType.TURSO_DATABASE,
    "supabase": ResourceType.SUPABASE_PROJECT,
    "postgres": ResourceType.SUPABASE_PROJECT,
}

ENVIRONMENT_SUFFIXES: Dict[EnvironmentKey, List[str]] = {
    EnvironmentKey.DEVELOPMENT: ["DEV", "DEVELOPMENT"],
    EnvironmentKey.STAGING: ["STAGING", "STG"],
    EnvironmentKey.PRODUCTION: ["PROD", "PRODUCTION"],
}

# resource type -> (url keys, token keys, fallback identifier)
DATABASE_KEYS: Dict[ResourceType, tuple] = {
    ResourceType.TURSO_DATABASE: (
        ["TURSO_DATABASE_URL", "LIBSQL_DATABASE_URL"],
        ["TURSO_AUTH_TOKEN", "LIBSQL_AUTH_TOKEN"],
        "unknown-database",
    ),
    ResourceType.SUPABASE_PROJECT: (
        ["NEXT_PUBLIC_SUPABASE_URL", "SUPABASE_URL"],
        ["SUPABASE_SERVICE_ROLE_KEY", "SUPABASE_SERVICE_ROLE"],
        "unknown-project",
    ),
}

BLOB_STORE_ID_KEYS = ["BLOB_STORE_ID"]
BLOB_TOKEN_KEYS = ["BLOB_READ_WRITE_TOKEN", "BLOB_RW_TOKEN"]


class DiscoveryError(Exception):
    """Raised when a project's resources cannot be discovered."""


def lookup_env_value(
    env_vars: Dict[str, str],
    base_keys: List[str],
    environment: EnvironmentKey,
    shared_vars: Dict[str, str],
) -> Optional[str]:
    """Find a variable for an environment tier.

    For each base key in order, tries the environment-suffixed variants
    (e.g. TURSO_DATABASE_URL_PROD), then the bare key in the tier layer, then
    the bare key in the shared layer. Empty values count as absent.

    Args:
        env_vars: Tier layer
        base_keys: Candidate variable names in priority order
        environment: Environment tier
        shared_vars: Shared layer

    Returns:
        First value found, None otherwise
    """
    for base_key in base_keys:
        for suffix in ENVIRONMENT_SUFFIXES[environment]:
            value = env_vars.get(f"{base_key}_{suffix}")
            if value:
                return value

        if env_vars.get(base_key):
            return env_vars[base_key]

        if shared_vars.get(base_key):
            return shared_vars[base_key]

    return None


def extract_host_label(url: str, fallback: str) -> str:
    """Return the first hostname label of a URL (database name / project ref)."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        hostname = None

    if not hostname:
        return fallback
    return hostname.split(".")[0]


class ResourceDiscoverer:
    """Discovers the cloud resources attached to a local project.

    Every call re-reads the project from disk; nothing is cached.

    Attributes:
        reader: Dotenv reader
        analyzer: Dependency/risk analyzer used to populate the inventory graph
    """

    def __init__(
        self,
        reader: Optional[EnvironmentMapReader] = None,
        analyzer: Optional[DependencyAnalyzer] = None,
    ) -> None:
        self.reader = reader or EnvironmentMapReader()
        self.analyzer = analyzer or DependencyAnalyzer()

    def discover(self, project_path: Union[str, Path]) -> ProjectInventory:
        """Discover the resources of a project.

        Args:
            project_path: Project directory

        Returns:
            Fresh ProjectInventory

        Raises:
            DiscoveryError: If the project name cannot be derived from the path
        """
        root = Path(os.path.abspath(project_path))
        project_name = root.name
        if not project_name:
            raise DiscoveryError(f"Could not determine project name from path '{project_path}'")

        logger.debug(f"Discovering resources for {project_name} at {root}")

        env_map = self.reader.read(root)

        return ProjectInventory(
            project_name=project_name,
            project_path=str(root),
            vercel=self._discover_vercel(root, env_map),
            databases=self._discover_databases(env_map),
            storage=self._discover_storage(env_map),
            dependencies=self.analyzer.build_graph(),
        )

    def _discover_vercel(self, root: Path, env_map: EnvironmentMap) -> Optional[VercelResources]:
        env_vars = env_map.combined
        config = load_vercel_config(root)

        project_id = (
            (config.project_id if config else None)
            or env_vars.get("VERCEL_PROJECT_ID")
            or env_vars.get("VERCEL_PROJECT_NAME")
            or None
        )
        org_id = (config.org_id if config else None) or env_vars.get("VERCEL_ORG_ID") or None

        namespaced = {key: value for key, value in env_vars.items() if key.startswith(VERCEL_ENV_PREFIX)}

        if not (project_id or org_id or namespaced):
            return None

        if config and config.aliases:
            domains = list(config.aliases)
        else:
            domains = load_domains(root)

        return VercelResources(
            project_id=project_id,
            org_id=org_id,
            domains=domains,
            environment_variables=[
                EnvironmentVariable(key=key, masked_value=mask_sensitive_value(value))
                for key, value in namespaced.items()
            ],
        )

    def detect_database_type(self, env_vars: Dict[str, str]) -> Optional[ResourceType]:
        """Determine which database family the project uses.

        An explicit DATABASE_PROVIDER wins. Otherwise Turso markers (TURSO_* or
        LIBSQL* keys) are checked before Supabase markers (any key containing
        "supabase"), so Turso wins when both are present.

        Args:
            env_vars: Combined environment variables

        Returns:
            TURSO_DATABASE, SUPABASE_PROJECT, or None when no database is configured
        """
        provider = env_vars.get(DATABASE_PROVIDER_KEY, "").strip().lower()
        if provider in PROVIDER_ALIASES:
            return PROVIDER_ALIASES[provider]

        has_turso = any(key.startswith("TURSO_") or key.startswith("LIBSQL") for key in env_vars)
        has_supabase = any("supabase" in key.lower() for key in env_vars)

        if has_turso and has_supabase:
            logger.warning(
                "Both Turso and Supabase variables found; assuming Turso. "
                f"Set {DATABASE_PROVIDER_KEY} to choose explicitly."
            )

        if has_turso:
            return ResourceType.TURSO_DATABASE
        if has_supabase:
            return ResourceType.SUPABASE_PROJECT
        return None

    def _discover_databases(self, env_map: EnvironmentMap) -> Optional[DatabaseResources]:
        db_type = self.detect_database_type(env_map.combined)
        if db_type is None:
            return None

        url_keys, token_keys, fallback = DATABASE_KEYS[db_type]
        resources: List[DatabaseResource] = []

        for environment in EnvironmentKey:
            env_vars = env_map.layer(environment)
            url = lookup_env_value(env_vars, url_keys, environment, env_map.shared)
            if not url:
                continue

            token = lookup_env_value(env_vars, token_keys, environment, env_map.shared)
            resources.append(
                DatabaseResource(
                    environment=environment,
                    identifier=extract_host_label(url, fallback),
                    url=url,
                    token=token,
                )
            )

        return DatabaseResources(type=db_type, resources=resources)

    def _discover_storage(self, env_map: EnvironmentMap) -> Optional[StorageResources]:
        stores: List[BlobStoreResource] = []
        seen_ids = set()

        for environment in EnvironmentKey:
            env_vars = env_map.layer(environment)
            store_id = lookup_env_value(env_vars, BLOB_STORE_ID_KEYS, environment, env_map.shared)
            token = lookup_env_value(env_vars, BLOB_TOKEN_KEYS, environment, env_map.shared)

            if not (store_id and token):
                continue
            if store_id in seen_ids:
                continue

            stores.append(BlobStoreResource(id=store_id, name=f"{environment.value}-blob-store", token=token))
            seen_ids.add(store_id)

        if not stores:
            return None
        return StorageResources(blob_stores=stores)
