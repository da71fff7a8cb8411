"""Resource types, deletion priorities and risk assessment models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple


class ResourceType(Enum):
    """Cleanable cloud resource type."""

    VERCEL_PROJECT = "vercel-project"
    TURSO_DATABASE = "turso-database"
    SUPABASE_PROJECT = "supabase-project"
    BLOB_STORE = "blob-store"
    ENVIRONMENT_VARIABLES = "environment-variables"
    DOMAINS = "domains"

    @property
    def is_database(self) -> bool:
        return self in (ResourceType.TURSO_DATABASE, ResourceType.SUPABASE_PROJECT)


class RiskLevel(Enum):
    """Risk / severity level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskFactorType(Enum):
    """Category of a deletion risk."""

    DATA_LOSS = "data_loss"
    SERVICE_DISRUPTION = "service_disruption"
    DEPENDENCY_BREAK = "dependency_break"
    COST_IMPACT = "cost_impact"


class BackupType(Enum):
    """Kind of backup required before deleting a resource."""

    CONFIG = "config"
    DATA = "data"
    FULL = "full"


@dataclass(frozen=True)
class DeletionPriority:
    """Position of a resource type in the deletion sequence.

    Attributes:
        type: Resource type
        priority: Priority (1 = deleted first)
        dependencies: Resource types that must be deleted before this one
    """

    type: ResourceType
    priority: int
    dependencies: Tuple[ResourceType, ...] = ()


@dataclass(frozen=True)
class RiskFactor:
    """Single deletion risk.

    Attributes:
        type: Risk category
        severity: How severe the risk is
        description: Human-readable explanation
        affected_resources: Resource types this risk applies to
    """

    type: RiskFactorType
    severity: RiskLevel
    description: str
    affected_resources: Tuple[ResourceType, ...] = ()

    def affects(self, resource_types: Iterable[ResourceType]) -> bool:
        """Check whether any of the given resource types is affected."""
        return any(resource_type in self.affected_resources for resource_type in resource_types)


@dataclass(frozen=True)
class RiskAssessment:
    """Overall risk of a cleanup with contributing factors and mitigations."""

    overall: RiskLevel
    factors: Tuple[RiskFactor, ...] = ()
    mitigations: Tuple[str, ...] = ()

    def relevant_factors(self, resource_types: Iterable[ResourceType]) -> List[RiskFactor]:
        """Return factors whose affected resources intersect the given types."""
        selected = list(resource_types)
        return [factor for factor in self.factors if factor.affects(selected)]


@dataclass(frozen=True)
class BackupRequirement:
    """Backup that should exist before a resource type is deleted.

    Attributes:
        resource_type: Resource type the requirement applies to
        resource_id: Resource identifier, "*" for every resource of the type
        required: Whether the backup is mandatory
        backup_type: Kind of backup
        estimated_size: Human-readable size estimate, None when unknown
    """

    resource_type: ResourceType
    resource_id: str
    required: bool
    backup_type: BackupType
    estimated_size: Optional[str] = None


@dataclass(frozen=True)
class DependencyGraph:
    """Deletion ordering, risk assessment and backup requirements for an inventory."""

    deletion_order: Tuple[DeletionPriority, ...]
    risk_assessment: RiskAssessment
    backup_requirements: Tuple[BackupRequirement, ...] = ()
