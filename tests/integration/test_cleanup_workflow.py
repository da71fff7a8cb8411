"""Integration tests for the discover -> confirm -> execute -> audit workflow."""

from __future__ import annotations

import io
import subprocess
from pathlib import Path
from unittest.mock import Mock

import pytest
from rich.console import Console

from fluorite_flake.discovery import ResourceDiscoverer
from fluorite_flake.models.cleanup_plan import CleanupScope
from fluorite_flake.models.cleanup_result import StepStatus
from fluorite_flake.models.dependency_graph import ResourceType
from fluorite_flake.restore import AuditStorage, CleanupExecutor, ConfirmationGate, GateStage
from fluorite_flake.restore.commands import ProviderCommandRunner
from fluorite_flake.restore.reporter import CleanupReporter
from tests.fixtures.inventories import write_project_files
from tests.fixtures.prompts import ScriptedPrompter


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Generated project with Vercel hosting, Turso per environment and a blob store."""
    return write_project_files(
        tmp_path / "acme",
        {
            "vercel.json": '{"projectId": "prj_acme", "orgId": "team_acme"}',
            "domains.json": '["acme.dev"]',
            ".env": "BLOB_STORE_ID=store_acme\nBLOB_READ_WRITE_TOKEN=vercel_blob_rw_acme_token\n",
            ".env.development": "TURSO_DATABASE_URL=libsql://acme-dev-org.turso.io\nTURSO_AUTH_TOKEN=dev_token_123\n",
            ".env.staging": "TURSO_DATABASE_URL=libsql://acme-stg-org.turso.io\n",
            ".env.production": "TURSO_DATABASE_URL=libsql://acme-prod-org.turso.io\nTURSO_AUTH_TOKEN=prod_token_456\n",
        },
    )


@pytest.fixture
def reporter() -> CleanupReporter:
    return CleanupReporter(Console(file=io.StringIO(), width=140))


class TestCleanupWorkflow:
    """End-to-end cleanup against a project on disk with mocked provider CLIs."""

    def test_production_cleanup(self, project_dir: Path, reporter: CleanupReporter, tmp_path: Path) -> None:
        """Test deleting production resources runs commands in deletion order."""
        inventory = ResourceDiscoverer().discover(project_dir)

        assert inventory.available_resource_types() == [
            ResourceType.VERCEL_PROJECT,
            ResourceType.TURSO_DATABASE,
            ResourceType.BLOB_STORE,
        ]
        assert inventory.vercel.domains == ["acme.dev"]

        prompter = ScriptedPrompter(
            [
                [ResourceType.TURSO_DATABASE, ResourceType.VERCEL_PROJECT, ResourceType.BLOB_STORE],
                CleanupScope.PRODUCTION,
                True,
                True,
                "acme",
            ]
        )
        outcome = ConfirmationGate(prompter=prompter, reporter=reporter).run(inventory)
        assert outcome.approved

        run = Mock(return_value=subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr=""))
        storage = AuditStorage(str(tmp_path / "audit"))
        executor = CleanupExecutor(runner=ProviderCommandRunner(run=run), reporter=reporter, audit_storage=storage)

        result = executor.execute(outcome.plan)

        assert result.success
        assert [call.args[0][:4] for call in run.call_args_list] == [
            ["vercel", "blob", "rm", "store_acme"],
            ["vercel", "project", "rm", "prj_acme"],
            ["turso", "db", "destroy", "acme-prod-org"],
        ]

        audit_data = storage.get_operation(result.operation_id)
        assert [r["step_id"] for r in audit_data["results"]] == [
            "blob-store_acme",
            "vercel-prj_acme",
            "turso-acme-prod-org",
        ]
        audit_text = next(storage.storage_dir.glob("*/*/*.yaml")).read_text()
        assert "vercel_blob_rw_acme_token" not in audit_text

    def test_partial_failure_requires_rollback(self, project_dir: Path, reporter: CleanupReporter) -> None:
        """Test a database failure after the blob and hosting deletions flags rollback."""
        inventory = ResourceDiscoverer().discover(project_dir)
        prompter = ScriptedPrompter(
            [
                [ResourceType.VERCEL_PROJECT, ResourceType.TURSO_DATABASE, ResourceType.BLOB_STORE],
                CleanupScope.ALL,
                True,
                True,
                "acme",
            ]
        )
        outcome = ConfirmationGate(prompter=prompter, reporter=reporter).run(inventory)

        def run(args, **kwargs):
            returncode = 1 if args[:2] == ["turso", "db"] else 0
            return subprocess.CompletedProcess(args=args, returncode=returncode, stdout="", stderr="quota exceeded")

        result = CleanupExecutor(runner=ProviderCommandRunner(run=run), reporter=reporter).execute(outcome.plan)

        assert [r.status for r in result.step_results] == [
            StepStatus.SUCCEEDED,
            StepStatus.SUCCEEDED,
            StepStatus.FAILED,
            StepStatus.SKIPPED,
            StepStatus.SKIPPED,
        ]
        assert result.rollback_required
        assert result.first_error == "turso failed: quota exceeded"

    def test_declined_plan_runs_nothing(self, project_dir: Path, reporter: CleanupReporter) -> None:
        """Test declining the plan review leaves no approved plan."""
        inventory = ResourceDiscoverer().discover(project_dir)
        prompter = ScriptedPrompter([[ResourceType.BLOB_STORE], True, False])

        outcome = ConfirmationGate(prompter=prompter, reporter=reporter).run(inventory)

        assert not outcome.approved
        assert outcome.aborted_at == GateStage.PLAN_REVIEW
