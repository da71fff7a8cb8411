"""Project inventory model.

Read-only snapshot of the cloud resources discovered for one local project.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fluorite_flake.models.dependency_graph import DependencyGraph, ResourceType
from fluorite_flake.models.environment import EnvironmentKey
from fluorite_flake.utils.masking import mask_sensitive_value


@dataclass(frozen=True)
class EnvironmentVariable:
    """Provider environment variable with its display (masked) value."""

    key: str
    masked_value: str


@dataclass(frozen=True)
class VercelResources:
    """Hosting project discovered from vercel.json and VERCEL_* variables.

    Attributes:
        project_id: Vercel project ID or name (optional)
        org_id: Vercel organization/team ID (optional)
        domains: Linked domains
        environment_variables: VERCEL_* variables with masked values
    """

    project_id: Optional[str] = None
    org_id: Optional[str] = None
    domains: List[str] = field(default_factory=list)
    environment_variables: List[EnvironmentVariable] = field(default_factory=list)


@dataclass(frozen=True)
class DatabaseResource:
    """Database instance for one environment tier.

    Attributes:
        environment: Environment tier the database serves
        identifier: Database name (Turso) or project ref (Supabase)
        url: Connection URL
        token: Raw auth token (optional, never displayed unmasked)
    """

    environment: EnvironmentKey
    identifier: str
    url: str
    token: Optional[str] = None


@dataclass(frozen=True)
class DatabaseResources:
    """Databases of a single family discovered for the project."""

    type: ResourceType
    resources: List[DatabaseResource] = field(default_factory=list)


@dataclass(frozen=True)
class BlobStoreResource:
    """Vercel Blob store."""

    id: str
    name: str
    token: str


@dataclass(frozen=True)
class StorageResources:
    """Storage resources discovered for the project."""

    blob_stores: List[BlobStoreResource] = field(default_factory=list)


@dataclass(frozen=True)
class ProjectInventory:
    """Discovered-resources snapshot for one local project.

    Created fresh on every discovery run and never mutated afterwards.

    Attributes:
        project_name: Project directory basename
        project_path: Absolute project directory
        dependencies: Deletion order, risk assessment and backup requirements
        vercel: Hosting project resources (optional)
        databases: Database resources (optional)
        storage: Storage resources (optional)
    """

    project_name: str
    project_path: str
    dependencies: DependencyGraph
    vercel: Optional[VercelResources] = None
    databases: Optional[DatabaseResources] = None
    storage: Optional[StorageResources] = None

    @property
    def has_resources(self) -> bool:
        return bool(self.available_resource_types())

    def database_count(self, resource_type: ResourceType) -> int:
        """Count discovered databases of the given type."""
        if self.databases is None or self.databases.type != resource_type:
            return 0
        return len(self.databases.resources)

    def available_resource_types(self) -> List[ResourceType]:
        """Resource types with at least one deletable resource.

        Returns:
            Resource types in display order
        """
        types: List[ResourceType] = []

        if self.vercel is not None:
            types.append(ResourceType.VERCEL_PROJECT)
        if self.database_count(ResourceType.TURSO_DATABASE) > 0:
            types.append(ResourceType.TURSO_DATABASE)
        if self.database_count(ResourceType.SUPABASE_PROJECT) > 0:
            types.append(ResourceType.SUPABASE_PROJECT)
        if self.storage is not None and self.storage.blob_stores:
            types.append(ResourceType.BLOB_STORE)

        return types

    def to_dict(self) -> Dict[str, Any]:
        """Convert inventory to a display dictionary with secrets masked."""
        data: Dict[str, Any] = {
            "project_name": self.project_name,
            "project_path": self.project_path,
            "vercel": None,
            "databases": None,
            "storage": None,
            "deletion_order": [
                {
                    "type": priority.type.value,
                    "priority": priority.priority,
                    "dependencies": [dep.value for dep in priority.dependencies],
                }
                for priority in self.dependencies.deletion_order
            ],
            "risk_level": self.dependencies.risk_assessment.overall.value,
        }

        if self.vercel is not None:
            data["vercel"] = {
                "project_id": self.vercel.project_id,
                "org_id": self.vercel.org_id,
                "domains": list(self.vercel.domains),
                "environment_variables": {var.key: var.masked_value for var in self.vercel.environment_variables},
            }

        if self.databases is not None:
            data["databases"] = {
                "type": self.databases.type.value,
                "resources": [
                    {
                        "environment": resource.environment.value,
                        "identifier": resource.identifier,
                        "url": resource.url,
                        "token": mask_sensitive_value(resource.token) if resource.token else None,
                    }
                    for resource in self.databases.resources
                ],
            }

        if self.storage is not None:
            data["storage"] = {
                "blob_stores": [
                    {"id": store.id, "name": store.name, "token": mask_sensitive_value(store.token)}
                    for store in self.storage.blob_stores
                ]
            }

        return data
