"""Cleanup result model.

Outcome of executing an approved cleanup plan, one record per deletion step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from fluorite_flake.models.cleanup_plan import DeletionStep


class StepStatus(Enum):
    """Individual deletion step status."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class StepResult:
    """Deletion step result.

    Validation rules:
        - status=failed: requires error_message
        - status=succeeded: no error_message

    Attributes:
        step: Step that was executed
        status: Outcome
        duration_seconds: Time spent on the step
        error_message: Provider error if failed (optional)
    """

    step: DeletionStep
    status: StepStatus
    duration_seconds: float = 0.0
    error_message: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.status == StepStatus.SUCCEEDED

    def validate(self) -> bool:
        """Validate record invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.status == StepStatus.FAILED and not self.error_message:
            raise ValueError("Failed status requires error_message")
        if self.status == StepStatus.SUCCEEDED and self.error_message:
            raise ValueError("Succeeded status cannot have error_message")
        if self.duration_seconds < 0:
            raise ValueError("Duration cannot be negative")
        return True


@dataclass
class CleanupResult:
    """Cleanup execution result.

    State transitions:
        all steps succeeded -> success
        a step failed -> remaining steps skipped, rollback_required if
        anything was already deleted

    Attributes:
        operation_id: Unique identifier for the execution
        project_name: Project the plan belonged to
        started_at: When execution started (UTC)
        completed_at: When execution finished (UTC, optional)
        step_results: Result of every planned step
        rollback_required: Whether deleted resources need manual recreation
    """

    operation_id: str
    project_name: str
    started_at: datetime
    completed_at: Optional[datetime] = None
    step_results: List[StepResult] = field(default_factory=list)
    rollback_required: bool = False

    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.step_results if r.status == StepStatus.SUCCEEDED)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.step_results if r.status == StepStatus.FAILED)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.step_results if r.status == StepStatus.SKIPPED)

    @property
    def success(self) -> bool:
        return self.failed_count == 0 and self.skipped_count == 0

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()

    @property
    def first_error(self) -> Optional[str]:
        for result in self.step_results:
            if result.status == StepStatus.FAILED:
                return result.error_message
        return None

    def validate(self) -> bool:
        """Validate result invariants.

        Validation rules:
            - at most one failed step (execution stops on first failure)
            - completed_at must not be before started_at
            - rollback_required only when a step succeeded before a failure

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.failed_count > 1:
            raise ValueError("Execution must stop after the first failed step")

        if self.completed_at and self.completed_at < self.started_at:
            raise ValueError("Completion time before start time")

        if self.rollback_required and not (self.failed_count and self.succeeded_count):
            raise ValueError("Rollback requires a failure after at least one deletion")

        for result in self.step_results:
            result.validate()

        return True
