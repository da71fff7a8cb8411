"""Staged confirmation gate for cleanup plans.

A cleanup plan is approved only after five sequential stages pass:

    resource selection -> risk display -> backup attestation
    -> plan review -> final confirmation

Each stage returns a Transition (aborted, advanced or completed). A cancelled
prompt is treated exactly like a "no" answer. The gate never deletes anything.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, List, Optional

from fluorite_flake.models.cleanup_plan import CleanupPlan, CleanupScope, ResourceSelection
from fluorite_flake.models.dependency_graph import ResourceType
from fluorite_flake.models.inventory import ProjectInventory
from fluorite_flake.restore.planner import CleanupPlanBuilder
from fluorite_flake.restore.prompts import PromptOption, Prompter
from fluorite_flake.restore.reporter import CleanupReporter, resource_label

logger = logging.getLogger(__name__)


class GateStage(Enum):
    """Confirmation stage, in execution order."""

    RESOURCE_SELECTION = "resource selection"
    RISK_DISPLAY = "risk display"
    BACKUP_ATTESTATION = "backup attestation"
    PLAN_REVIEW = "plan review"
    FINAL_CONFIRMATION = "final confirmation"


class TransitionKind(Enum):
    ABORTED = "aborted"
    ADVANCED = "advanced"
    COMPLETED = "completed"


@dataclass(frozen=True)
class GateContext:
    """State accumulated while moving through the stages."""

    inventory: ProjectInventory
    selection: Optional[ResourceSelection] = None
    plan: Optional[CleanupPlan] = None


@dataclass(frozen=True)
class Transition:
    """Result of running one stage.

    Attributes:
        kind: Aborted, advanced or completed
        context: Context after the stage ran
        next_stage: Stage to run next (advanced only)
        reason: Why the flow stopped (aborted only)
    """

    kind: TransitionKind
    context: GateContext
    next_stage: Optional[GateStage] = None
    reason: Optional[str] = None

    @classmethod
    def aborted(cls, context: GateContext, reason: str) -> "Transition":
        return cls(kind=TransitionKind.ABORTED, context=context, reason=reason)

    @classmethod
    def advanced(cls, context: GateContext, next_stage: GateStage) -> "Transition":
        return cls(kind=TransitionKind.ADVANCED, context=context, next_stage=next_stage)

    @classmethod
    def completed(cls, context: GateContext) -> "Transition":
        return cls(kind=TransitionKind.COMPLETED, context=context)


@dataclass(frozen=True)
class GateOutcome:
    """Final result of the confirmation flow.

    Attributes:
        plan: Approved plan, None unless every stage passed
        aborted_at: Stage that rejected the flow (optional)
        reason: Human-readable rejection reason (optional)
    """

    plan: Optional[CleanupPlan] = None
    aborted_at: Optional[GateStage] = None
    reason: Optional[str] = None

    @property
    def approved(self) -> bool:
        return self.plan is not None


class ConfirmationGate:
    """Finite state machine driving the cleanup confirmation stages.

    Attributes:
        prompter: Prompt collaborator
        reporter: Terminal reporter
        planner: Cleanup plan builder
    """

    def __init__(
        self,
        prompter: Prompter,
        reporter: Optional[CleanupReporter] = None,
        planner: Optional[CleanupPlanBuilder] = None,
    ) -> None:
        self.prompter = prompter
        self.reporter = reporter or CleanupReporter()
        self.planner = planner or CleanupPlanBuilder()
        self._handlers: Dict[GateStage, Callable[[GateContext], Transition]] = {
            GateStage.RESOURCE_SELECTION: self._select_resources,
            GateStage.RISK_DISPLAY: self._display_risk,
            GateStage.BACKUP_ATTESTATION: self._attest_backup,
            GateStage.PLAN_REVIEW: self._review_plan,
            GateStage.FINAL_CONFIRMATION: self._confirm_project_name,
        }

    def run(self, inventory: ProjectInventory) -> GateOutcome:
        """Run every stage in order.

        Args:
            inventory: Discovered resources

        Returns:
            GateOutcome with the approved plan, or the stage and reason of rejection
        """
        self.reporter.display_header()

        stage = GateStage.RESOURCE_SELECTION
        context = GateContext(inventory=inventory)

        while True:
            transition = self.step(stage, context)
            context = transition.context

            if transition.kind == TransitionKind.ABORTED:
                reason = transition.reason or "cancelled"
                logger.info(f"Cleanup of {inventory.project_name} aborted at {stage.value}: {reason}")
                self.reporter.display_aborted(stage.value, reason)
                return GateOutcome(plan=None, aborted_at=stage, reason=reason)

            if transition.kind == TransitionKind.COMPLETED:
                logger.info(f"Cleanup plan for {inventory.project_name} approved")
                self.reporter.display_approved()
                return GateOutcome(plan=context.plan)

            stage = transition.next_stage

    def step(self, stage: GateStage, context: GateContext) -> Transition:
        """Run a single stage."""
        return self._handlers[stage](context)

    def _select_resources(self, context: GateContext) -> Transition:
        inventory = context.inventory
        self.reporter.display_inventory(inventory)

        available = inventory.available_resource_types()
        if not available:
            return Transition.aborted(context, "no deletable resources were discovered")

        options = [
            PromptOption(
                value=resource_type,
                label=resource_label(resource_type),
                hint=self._hint(resource_type, inventory),
            )
            for resource_type in available
        ]
        selected = self.prompter.multiselect("Select the resources to delete", options)
        if selected is None:
            return Transition.aborted(context, "resource selection was cancelled")
        if not selected:
            return Transition.aborted(context, "no resources were selected")

        scope = CleanupScope.ALL
        if self._requires_scope(inventory, selected):
            scope_options = [
                PromptOption(value=CleanupScope.DEVELOPMENT, label="Development only"),
                PromptOption(value=CleanupScope.STAGING, label="Staging only"),
                PromptOption(value=CleanupScope.PRODUCTION, label="Production only"),
                PromptOption(value=CleanupScope.ALL, label="All environments"),
            ]
            chosen = self.prompter.select("Select the environments to clean up", scope_options)
            if chosen is None:
                return Transition.aborted(context, "scope selection was cancelled")
            scope = chosen

        selection = ResourceSelection.for_scope(selected, scope)
        return Transition.advanced(replace(context, selection=selection), GateStage.RISK_DISPLAY)

    def _display_risk(self, context: GateContext) -> Transition:
        self.reporter.display_risk(context.inventory.dependencies.risk_assessment, context.selection)
        return Transition.advanced(context, GateStage.BACKUP_ATTESTATION)

    def _attest_backup(self, context: GateContext) -> Transition:
        self.reporter.display_backup_notice(context.selection)
        confirmed = self.prompter.confirm("Have all required backups been completed?", default=False)
        if not confirmed:
            return Transition.aborted(context, "backups were not confirmed")
        return Transition.advanced(context, GateStage.PLAN_REVIEW)

    def _review_plan(self, context: GateContext) -> Transition:
        plan = self.planner.build(context.inventory, context.selection)
        self.reporter.display_plan(plan)

        confirmed = self.prompter.confirm("Delete these resources according to this plan?", default=False)
        if not confirmed:
            return Transition.aborted(context, "the deletion plan was declined")
        return Transition.advanced(replace(context, plan=plan), GateStage.FINAL_CONFIRMATION)

    def _confirm_project_name(self, context: GateContext) -> Transition:
        project_name = context.inventory.project_name
        self.reporter.display_final_warning(project_name)

        answer = self.prompter.text(f'Type "{project_name}" to confirm')
        if answer is None:
            return Transition.aborted(context, "final confirmation was cancelled")
        if answer.strip() != project_name:
            return Transition.aborted(context, "the typed project name did not match")
        return Transition.completed(context)

    @staticmethod
    def _requires_scope(inventory: ProjectInventory, selected: List[ResourceType]) -> bool:
        return any(
            resource_type.is_database and inventory.database_count(resource_type) > 1 for resource_type in selected
        )

    @staticmethod
    def _hint(resource_type: ResourceType, inventory: ProjectInventory) -> str:
        if resource_type == ResourceType.VERCEL_PROJECT:
            return (inventory.vercel.project_id if inventory.vercel else None) or "project settings"
        if resource_type.is_database:
            return f"{inventory.database_count(resource_type)} environment(s)"
        if resource_type == ResourceType.BLOB_STORE:
            count = len(inventory.storage.blob_stores) if inventory.storage else 0
            return f"{count} store(s)"
        return ""
