"""Data models for resource discovery and cleanup planning."""

from __future__ import annotations

from fluorite_flake.models.cleanup_plan import (
    BackupEntry,
    BackupPlan,
    BackupStatus,
    CleanupPlan,
    CleanupScope,
    DeletionStep,
    ResourceSelection,
)
from fluorite_flake.models.cleanup_result import CleanupResult, StepResult, StepStatus
from fluorite_flake.models.dependency_graph import (
    BackupRequirement,
    BackupType,
    DeletionPriority,
    DependencyGraph,
    ResourceType,
    RiskAssessment,
    RiskFactor,
    RiskFactorType,
    RiskLevel,
)
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

__all__ = [
    "BackupEntry",
    "BackupPlan",
    "BackupRequirement",
    "BackupStatus",
    "BackupType",
    "BlobStoreResource",
    "CleanupPlan",
    "CleanupResult",
    "CleanupScope",
    "DatabaseResource",
    "DatabaseResources",
    "DeletionPriority",
    "DeletionStep",
    "DependencyGraph",
    "EnvironmentKey",
    "EnvironmentMap",
    "EnvironmentVariable",
    "ProjectInventory",
    "ResourceSelection",
    "ResourceType",
    "RiskAssessment",
    "RiskFactor",
    "RiskFactorType",
    "RiskLevel",
    "StepResult",
    "StepStatus",
    "StorageResources",
    "VercelResources",
]
