"""Deletion ordering, risk assessment and backup requirements.

The data here is fixed policy, not computed from an inventory: cheap and
reversible resources are deleted first, irreversible data stores last, so a
failure part-way through leaves the fewest destructive steps executed.
"""

from __future__ import annotations

from typing import Tuple

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

DATABASE_TYPES = [ResourceType.TURSO_DATABASE, ResourceType.SUPABASE_PROJECT]

MITIGATIONS = [
    "Take a backup of every resource before deleting it",
    "Review the deletion targets stage by stage",
    "Check the audit log after the cleanup completes",
]


class DependencyAnalyzer:
    """Static deletion policy for discovered resources."""

    def deletion_order(self) -> Tuple[DeletionPriority, ...]:
        """Fixed deletion priority list.

        Blob stores (1) before the hosting project (2) before databases (3).
        The two database types share priority 3.
        """
        return (
            DeletionPriority(type=ResourceType.BLOB_STORE, priority=1),
            DeletionPriority(type=ResourceType.VERCEL_PROJECT, priority=2),
            DeletionPriority(type=ResourceType.TURSO_DATABASE, priority=3),
            DeletionPriority(type=ResourceType.SUPABASE_PROJECT, priority=3),
        )

    def assess_risk(self) -> RiskAssessment:
        """Fixed risk assessment with data-loss and service-disruption factors."""
        return RiskAssessment(
            overall=RiskLevel.MEDIUM,
            factors=(
                RiskFactor(
                    type=RiskFactorType.DATA_LOSS,
                    severity=RiskLevel.HIGH,
                    description="Deleting a database is irreversible and its data cannot be recovered",
                    affected_resources=tuple(DATABASE_TYPES),
                ),
                RiskFactor(
                    type=RiskFactorType.SERVICE_DISRUPTION,
                    severity=RiskLevel.HIGH,
                    description="Deleting the Vercel project takes the deployed site offline",
                    affected_resources=(ResourceType.VERCEL_PROJECT,),
                ),
            ),
            mitigations=tuple(MITIGATIONS),
        )

    def backup_requirements(self) -> Tuple[BackupRequirement, ...]:
        """Fixed backup requirements per resource type."""
        return (
            BackupRequirement(
                resource_type=ResourceType.VERCEL_PROJECT,
                resource_id="*",
                required=True,
                backup_type=BackupType.CONFIG,
                estimated_size="<1MB",
            ),
            BackupRequirement(
                resource_type=ResourceType.TURSO_DATABASE,
                resource_id="*",
                required=True,
                backup_type=BackupType.DATA,
            ),
            BackupRequirement(
                resource_type=ResourceType.SUPABASE_PROJECT,
                resource_id="*",
                required=True,
                backup_type=BackupType.DATA,
            ),
        )

    def build_graph(self) -> DependencyGraph:
        """Assemble the full dependency graph."""
        return DependencyGraph(
            deletion_order=self.deletion_order(),
            risk_assessment=self.assess_risk(),
            backup_requirements=self.backup_requirements(),
        )
