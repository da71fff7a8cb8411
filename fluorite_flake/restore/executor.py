"""Cleanup plan execution.

Runs the steps of an approved cleanup plan against the provider CLIs, in plan
order, stopping at the first failure.
"""

from __future__ import annotations

import logging
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from fluorite_flake.models.cleanup_plan import CleanupPlan, DeletionStep
from fluorite_flake.models.cleanup_result import CleanupResult, StepResult, StepStatus
from fluorite_flake.restore.audit import AuditStorage
from fluorite_flake.restore.commands import (
    ProviderCommandError,
    ProviderCommandRunner,
    StepParameterError,
    UnsupportedStepError,
)
from fluorite_flake.restore.reporter import CleanupReporter

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CleanupExecutor:
    """Cleanup plan executor.

    Executes steps sequentially in their planned order. When a step fails the
    remaining steps are skipped and, if anything was already deleted, the
    result is flagged for manual rollback (automatic rollback is not
    supported).

    Attributes:
        runner: Provider command runner
        reporter: Terminal reporter
        audit_storage: Audit storage for execution logs (optional)
    """

    def __init__(
        self,
        runner: Optional[ProviderCommandRunner] = None,
        reporter: Optional[CleanupReporter] = None,
        audit_storage: Optional[AuditStorage] = None,
        now: Optional[Callable[[], datetime]] = None,
        timer: Optional[Callable[[], float]] = None,
    ) -> None:
        self.runner = runner or ProviderCommandRunner()
        self.reporter = reporter or CleanupReporter()
        self.audit_storage = audit_storage
        self.now = now or _utcnow
        self.timer = timer or time.monotonic

    def execute(self, plan: CleanupPlan) -> CleanupResult:
        """Execute an approved cleanup plan.

        Args:
            plan: Plan approved by the confirmation gate

        Returns:
            CleanupResult with one StepResult per planned step
        """
        result = CleanupResult(
            operation_id=f"op_{uuid.uuid4()}",
            project_name=plan.project_name,
            started_at=self.now(),
        )

        if plan.is_empty:
            self.reporter.console.print("[yellow]The plan contains no deletion steps[/yellow]")
            result.completed_at = self.now()
            self._log(plan, result)
            return result

        steps = sorted(plan.steps, key=lambda s: s.order)
        total = len(steps)
        self.reporter.console.print(f"\n[bold blue]🚀 Deleting {total} resource(s)[/bold blue]")

        for index, step in enumerate(steps):
            self.reporter.display_step_started(step)
            step_result = self._execute_step(step)
            result.step_results.append(step_result)
            self.reporter.display_step_result(step_result, len(result.step_results), total)

            if not step_result.success:
                for remaining in steps[index + 1 :]:
                    result.step_results.append(StepResult(step=remaining, status=StepStatus.SKIPPED))
                break

        deleted = [r for r in result.step_results if r.success]
        if result.failed_count and deleted:
            result.rollback_required = True
            self.reporter.display_rollback(deleted)
        self.reporter.display_skipped(result.step_results)

        result.completed_at = self.now()
        self.reporter.display_summary(result)
        self._log(plan, result)
        return result

    def _execute_step(self, step: DeletionStep) -> StepResult:
        started = self.timer()
        try:
            self.runner.delete(step)
        except (ProviderCommandError, StepParameterError, UnsupportedStepError) as e:
            logger.warning(f"Failed to delete {step.type.value} {step.id}: {e}")
            return StepResult(
                step=step,
                status=StepStatus.FAILED,
                duration_seconds=self.timer() - started,
                error_message=str(e),
            )

        return StepResult(step=step, status=StepStatus.SUCCEEDED, duration_seconds=self.timer() - started)

    def _log(self, plan: CleanupPlan, result: CleanupResult) -> None:
        if self.audit_storage is None:
            return
        audit_file = self.audit_storage.log_result(plan, result)
        logger.info(f"Audit log written to {audit_file}")
