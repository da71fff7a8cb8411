"""Resource cleanup module.

This module plans and gates the deletion of cloud resources discovered for a
project, and provides an executor for approved plans.

Classes:
    DependencyAnalyzer: Fixed deletion order, risk assessment and backup requirements
    CleanupPlanBuilder: Ordered deletion plan construction
    ConfirmationGate: Staged human confirmation before a plan is approved
    CleanupExecutor: Provider CLI execution of approved plans
    AuditStorage: Audit log storage and retrieval
"""

from __future__ import annotations

from fluorite_flake.restore.audit import AuditStorage
from fluorite_flake.restore.dependency import DependencyAnalyzer
from fluorite_flake.restore.executor import CleanupExecutor
from fluorite_flake.restore.gate import ConfirmationGate, GateOutcome, GateStage
from fluorite_flake.restore.planner import CleanupPlanBuilder

__all__ = [
    "AuditStorage",
    "CleanupExecutor",
    "CleanupPlanBuilder",
    "ConfirmationGate",
    "DependencyAnalyzer",
    "GateOutcome",
    "GateStage",
]
