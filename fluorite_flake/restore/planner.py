"""Cleanup plan construction.

Turns an inventory and a user selection into an ordered list of deletion steps
following the inventory's deletion priority order.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from fluorite_flake.models.cleanup_plan import BackupPlan, CleanupPlan, DeletionStep, ResourceSelection
from fluorite_flake.models.dependency_graph import ResourceType
from fluorite_flake.models.inventory import ProjectInventory

logger = logging.getLogger(__name__)

SECONDS_PER_STEP = 30


class CleanupPlanBuilder:
    """Builds cleanup plans.

    Attributes:
        clock: Returns the current time in seconds since the epoch
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self.clock = clock or time.time

    def build(self, inventory: ProjectInventory, selection: ResourceSelection) -> CleanupPlan:
        """Build a deletion plan for the selected resources.

        Steps are emitted in the inventory's deletion order. Each step's order
        is its 1-based position in the whole plan.

        Args:
            inventory: Discovered resources
            selection: User's resource and environment selection

        Returns:
            CleanupPlan ready for confirmation
        """
        steps: List[DeletionStep] = []

        for priority in inventory.dependencies.deletion_order:
            if priority.type not in selection.selected_types:
                continue
            self._append_steps(steps, priority.type, inventory, selection)

        return CleanupPlan(
            project_name=inventory.project_name,
            steps=steps,
            target_resources=selection,
            backup_plan=self._create_backup_plan(),
            estimated_duration=len(steps) * SECONDS_PER_STEP,
            risk_level=inventory.dependencies.risk_assessment.overall,
        )

    def _append_steps(
        self,
        steps: List[DeletionStep],
        resource_type: ResourceType,
        inventory: ProjectInventory,
        selection: ResourceSelection,
    ) -> None:
        if resource_type == ResourceType.VERCEL_PROJECT:
            project_id = inventory.vercel.project_id if inventory.vercel else None
            if project_id:
                steps.append(
                    DeletionStep(
                        id=f"vercel-{project_id}",
                        type=resource_type,
                        description=f"Vercel project {project_id}",
                        parameters={"projectId": project_id},
                        order=len(steps) + 1,
                        requires_backup=True,
                    )
                )

        elif resource_type in (ResourceType.TURSO_DATABASE, ResourceType.SUPABASE_PROJECT):
            if inventory.databases is None or inventory.databases.type != resource_type:
                return

            is_turso = resource_type == ResourceType.TURSO_DATABASE
            prefix = "turso" if is_turso else "supabase"
            label = "Turso database" if is_turso else "Supabase project"
            param_key = "databaseName" if is_turso else "projectRef"

            for resource in inventory.databases.resources:
                if resource.environment not in selection.environments:
                    continue
                steps.append(
                    DeletionStep(
                        id=f"{prefix}-{resource.identifier}",
                        type=resource_type,
                        description=f"{label} {resource.identifier} ({resource.environment.value})",
                        parameters={param_key: resource.identifier},
                        environment=resource.environment,
                        order=len(steps) + 1,
                        requires_backup=True,
                    )
                )

        elif resource_type == ResourceType.BLOB_STORE:
            stores = inventory.storage.blob_stores if inventory.storage else []
            for store in stores:
                steps.append(
                    DeletionStep(
                        id=f"blob-{store.id}",
                        type=resource_type,
                        description=f"Vercel Blob store {store.name}",
                        parameters={"storeId": store.id, "token": store.token},
                        order=len(steps) + 1,
                        requires_backup=False,
                    )
                )

        else:
            logger.warning(f"Skipping unsupported resource type: {getattr(resource_type, 'value', resource_type)}")

    def _create_backup_plan(self) -> BackupPlan:
        timestamp_ms = int(self.clock() * 1000)
        return BackupPlan(destination=f"./cleanup-backup-{timestamp_ms}", entries=[], estimated_size=0)
