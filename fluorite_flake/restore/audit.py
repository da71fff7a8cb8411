"""Audit storage for cleanup executions.

Stores and retrieves audit logs in YAML format for troubleshooting and
accountability.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from fluorite_flake.models.cleanup_plan import CleanupPlan
from fluorite_flake.models.cleanup_result import CleanupResult

DEFAULT_AUDIT_DIR = Path.home() / ".fluorite-flake" / "audit-logs"


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat() + "Z"


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.rstrip("Z"))


class AuditStorage:
    """Audit log storage and retrieval.

    Stores cleanup audit logs as YAML files organized by year/month.

    Storage structure:
        ~/.fluorite-flake/audit-logs/
            2026/
                10/
                    cleanup-op_123.yaml
                    cleanup-op_456.yaml

    Attributes:
        storage_dir: Base directory for audit logs
    """

    def __init__(self, storage_dir: Optional[str] = None) -> None:
        """Initialize audit storage.

        Args:
            storage_dir: Base directory for audit logs (default: ~/.fluorite-flake/audit-logs)
        """
        self.storage_dir = Path(storage_dir) if storage_dir else DEFAULT_AUDIT_DIR
        self.storage_dir.mkdir(parents=True, exist_ok=True)

    def log_result(self, plan: CleanupPlan, result: CleanupResult) -> Path:
        """Log a cleanup execution.

        Creates a YAML file with the plan (secrets masked) and every step
        result. Overwrites an existing log with the same operation ID.

        Args:
            plan: Executed cleanup plan
            result: Execution result

        Returns:
            Path of the written audit file
        """
        year_month_dir = self.storage_dir / str(result.started_at.year) / f"{result.started_at.month:02d}"
        year_month_dir.mkdir(parents=True, exist_ok=True)

        audit_data = {
            "metadata": {
                "version": "1.0",
                "log_type": "resource_cleanup",
                "created_at": _isoformat(datetime.now(timezone.utc)),
            },
            "operation": {
                "operation_id": result.operation_id,
                "project_name": result.project_name,
                "started_at": _isoformat(result.started_at),
                "completed_at": _isoformat(result.completed_at),
                "duration_seconds": result.duration_seconds,
                "success": result.success,
                "rollback_required": result.rollback_required,
                "succeeded_count": result.succeeded_count,
                "failed_count": result.failed_count,
                "skipped_count": result.skipped_count,
            },
            "plan": plan.to_dict(),
            "results": [
                {
                    "step_id": step_result.step.id,
                    "order": step_result.step.order,
                    "resource_type": step_result.step.type.value,
                    "environment": step_result.step.environment.value if step_result.step.environment else None,
                    "status": step_result.status.value,
                    "duration_seconds": round(step_result.duration_seconds, 3),
                    "error_message": step_result.error_message,
                }
                for step_result in result.step_results
            ],
        }

        audit_file = year_month_dir / f"cleanup-{result.operation_id}.yaml"
        with open(audit_file, "w") as f:
            yaml.dump(audit_data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        return audit_file

    def get_operation(self, operation_id: str) -> Optional[dict]:
        """Retrieve an audit log by operation ID.

        Args:
            operation_id: Operation ID to retrieve

        Returns:
            Audit log dictionary if found, None otherwise
        """
        for audit_file in self.storage_dir.glob(f"*/*/cleanup-{operation_id}.yaml"):
            with open(audit_file, "r") as f:
                return yaml.safe_load(f)

        return None

    def query_operations(self, since: Optional[datetime] = None, until: Optional[datetime] = None) -> list[dict]:
        """Query audit logs within a date range.

        Args:
            since: Start date (inclusive), None for all
            until: End date (inclusive), None for all

        Returns:
            Audit logs ordered by storage path (year, month, file name)
        """
        results = []

        for audit_file in sorted(self.storage_dir.glob("*/*/cleanup-*.yaml")):
            with open(audit_file, "r") as f:
                audit_data = yaml.safe_load(f)

            started_at = _parse_timestamp(audit_data["operation"]["started_at"])

            if since and started_at < since:
                continue
            if until and started_at > until:
                continue

            results.append(audit_data)

        return results
