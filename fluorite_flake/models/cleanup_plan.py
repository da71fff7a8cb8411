"""Cleanup plan model.

Represents the user's resource selection and the ordered deletion steps built
from it. A plan is immutable and is handed to an executor only after every
confirmation stage has passed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from fluorite_flake.models.dependency_graph import ResourceType, RiskLevel
from fluorite_flake.models.environment import EnvironmentKey
from fluorite_flake.utils.masking import mask_sensitive_value

SECRET_PARAMETERS = ("token",)


class CleanupScope(Enum):
    """Environment scope of a cleanup."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    ALL = "all"

    def environments(self) -> List[EnvironmentKey]:
        """Environment tiers covered by this scope."""
        if self is CleanupScope.ALL:
            return list(EnvironmentKey)
        return [EnvironmentKey(self.value)]


class BackupStatus(Enum):
    """Backup entry status."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ResourceSelection:
    """Resource types and environments chosen by the user.

    Attributes:
        selected_types: Resource types to delete
        scope: Environment scope
        environments: Environment tiers derived from the scope
        excluded_resources: Resource identifiers to leave alone
    """

    selected_types: List[ResourceType]
    scope: CleanupScope = CleanupScope.ALL
    environments: List[EnvironmentKey] = field(default_factory=lambda: list(EnvironmentKey))
    excluded_resources: List[str] = field(default_factory=list)

    @classmethod
    def for_scope(cls, selected_types: List[ResourceType], scope: CleanupScope) -> "ResourceSelection":
        """Create a selection whose environments follow the scope."""
        return cls(selected_types=list(selected_types), scope=scope, environments=scope.environments())


@dataclass(frozen=True)
class DeletionStep:
    """Single planned deletion action.

    Attributes:
        id: Step identifier (e.g. "turso-acme-prod")
        type: Resource type being deleted
        description: Human-readable description
        parameters: Provider-specific parameters (database name, store ID, ...)
        order: 1-based execution order across the whole plan
        requires_backup: Whether a backup must exist before execution
        environment: Environment tier (optional, database steps only)
        dependencies: Step IDs that must run first
    """

    id: str
    type: ResourceType
    description: str
    parameters: Dict[str, Any]
    order: int
    requires_backup: bool
    environment: Optional[EnvironmentKey] = None
    dependencies: List[str] = field(default_factory=list)

    def display_parameters(self) -> Dict[str, Any]:
        """Parameters with secret values masked."""
        return {
            key: mask_sensitive_value(str(value)) if key in SECRET_PARAMETERS and value else value
            for key, value in self.parameters.items()
        }


@dataclass(frozen=True)
class BackupEntry:
    """Single resource backup."""

    type: ResourceType
    resource_id: str
    status: BackupStatus = BackupStatus.PENDING
    file_path: Optional[str] = None
    error: Optional[str] = None
    size: Optional[int] = None


@dataclass(frozen=True)
class BackupPlan:
    """Backups to capture before execution.

    Attributes:
        destination: Directory the backups are written to
        entries: Backup entries
        estimated_size: Estimated total size in bytes
    """

    destination: str
    entries: List[BackupEntry] = field(default_factory=list)
    estimated_size: int = 0


@dataclass(frozen=True)
class CleanupPlan:
    """Ordered, dependency-aware deletion plan.

    Attributes:
        project_name: Project the plan belongs to
        steps: Deletion steps in execution order
        target_resources: Selection the plan was built from
        backup_plan: Backups to capture before execution
        estimated_duration: Estimated execution time in seconds
        risk_level: Overall risk level
    """

    project_name: str
    steps: List[DeletionStep]
    target_resources: ResourceSelection
    backup_plan: BackupPlan
    estimated_duration: int
    risk_level: RiskLevel

    @property
    def is_empty(self) -> bool:
        return not self.steps

    def to_dict(self) -> Dict[str, Any]:
        """Convert plan to dictionary for audit logs, with secrets masked."""
        return {
            "project_name": self.project_name,
            "risk_level": self.risk_level.value,
            "estimated_duration": self.estimated_duration,
            "target_resources": {
                "selected_types": [t.value for t in self.target_resources.selected_types],
                "scope": self.target_resources.scope.value,
                "environments": [env.value for env in self.target_resources.environments],
                "excluded_resources": list(self.target_resources.excluded_resources),
            },
            "backup_plan": {
                "destination": self.backup_plan.destination,
                "estimated_size": self.backup_plan.estimated_size,
                "entries": len(self.backup_plan.entries),
            },
            "steps": [
                {
                    "id": step.id,
                    "order": step.order,
                    "type": step.type.value,
                    "description": step.description,
                    "environment": step.environment.value if step.environment else None,
                    "requires_backup": step.requires_backup,
                    "parameters": step.display_parameters(),
                }
                for step in self.steps
            ],
        }
