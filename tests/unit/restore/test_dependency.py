"""Tests for DependencyAnalyzer.

Test coverage for the fixed deletion order, risk assessment and backup
requirements.
"""

from __future__ import annotations

import dataclasses

import pytest

from fluorite_flake.models.dependency_graph import BackupType, ResourceType, RiskFactorType, RiskLevel
from fluorite_flake.restore.dependency import DependencyAnalyzer


class TestDependencyAnalyzer:
    """Test suite for DependencyAnalyzer."""

    def test_deletion_order(self) -> None:
        """Test blob stores go first and databases last."""
        order = DependencyAnalyzer().deletion_order()

        assert [(p.type, p.priority) for p in order] == [
            (ResourceType.BLOB_STORE, 1),
            (ResourceType.VERCEL_PROJECT, 2),
            (ResourceType.TURSO_DATABASE, 3),
            (ResourceType.SUPABASE_PROJECT, 3),
        ]

    def test_priorities_non_decreasing(self) -> None:
        """Test priorities never decrease along the list."""
        priorities = [p.priority for p in DependencyAnalyzer().deletion_order()]

        assert priorities == sorted(priorities)

    def test_risk_assessment(self) -> None:
        """Test overall risk is medium with data-loss and outage factors."""
        assessment = DependencyAnalyzer().assess_risk()

        assert assessment.overall == RiskLevel.MEDIUM
        assert [f.type for f in assessment.factors] == [
            RiskFactorType.DATA_LOSS,
            RiskFactorType.SERVICE_DISRUPTION,
        ]
        assert all(f.severity == RiskLevel.HIGH for f in assessment.factors)
        assert len(assessment.mitigations) == 3

    def test_data_loss_affects_databases_only(self) -> None:
        """Test the data-loss factor covers both database families."""
        data_loss = DependencyAnalyzer().assess_risk().factors[0]

        assert data_loss.affected_resources == (ResourceType.TURSO_DATABASE, ResourceType.SUPABASE_PROJECT)

    def test_backup_requirements(self) -> None:
        """Test hosting needs a config backup and databases a data backup."""
        requirements = DependencyAnalyzer().backup_requirements()

        assert [(r.resource_type, r.backup_type) for r in requirements] == [
            (ResourceType.VERCEL_PROJECT, BackupType.CONFIG),
            (ResourceType.TURSO_DATABASE, BackupType.DATA),
            (ResourceType.SUPABASE_PROJECT, BackupType.DATA),
        ]
        assert all(r.required and r.resource_id == "*" for r in requirements)
        assert requirements[0].estimated_size == "<1MB"

    def test_build_graph_is_stable(self) -> None:
        """Test two graphs built independently are equal."""
        assert DependencyAnalyzer().build_graph() == DependencyAnalyzer().build_graph()

    def test_graph_cannot_be_modified(self) -> None:
        """Test a built graph exposes no mutable sequences."""
        graph = DependencyAnalyzer().build_graph()

        assert isinstance(graph.deletion_order, tuple)
        assert isinstance(graph.backup_requirements, tuple)
        assert isinstance(graph.risk_assessment.factors, tuple)
        assert all(isinstance(f.affected_resources, tuple) for f in graph.risk_assessment.factors)
        with pytest.raises(dataclasses.FrozenInstanceError):
            graph.deletion_order = ()  # type: ignore[misc]
