"""Tests for dependency graph models."""

from __future__ import annotations

from fluorite_flake.models.dependency_graph import (
    ResourceType,
    RiskAssessment,
    RiskFactor,
    RiskFactorType,
    RiskLevel,
)


class TestResourceType:
    """Test suite for ResourceType."""

    def test_is_database(self) -> None:
        """Test only Turso and Supabase are database types."""
        assert ResourceType.TURSO_DATABASE.is_database
        assert ResourceType.SUPABASE_PROJECT.is_database
        assert not ResourceType.VERCEL_PROJECT.is_database
        assert not ResourceType.BLOB_STORE.is_database


class TestRiskAssessment:
    """Test suite for RiskAssessment."""

    def test_relevant_factors_filters_by_selection(self) -> None:
        """Test only factors affecting selected types are returned."""
        data_loss = RiskFactor(
            type=RiskFactorType.DATA_LOSS,
            severity=RiskLevel.HIGH,
            description="data",
            affected_resources=(ResourceType.TURSO_DATABASE,),
        )
        outage = RiskFactor(
            type=RiskFactorType.SERVICE_DISRUPTION,
            severity=RiskLevel.HIGH,
            description="outage",
            affected_resources=(ResourceType.VERCEL_PROJECT,),
        )
        assessment = RiskAssessment(overall=RiskLevel.MEDIUM, factors=(data_loss, outage))

        assert assessment.relevant_factors([ResourceType.TURSO_DATABASE]) == [data_loss]
        assert assessment.relevant_factors([ResourceType.BLOB_STORE]) == []
        assert assessment.relevant_factors(
            [ResourceType.VERCEL_PROJECT, ResourceType.TURSO_DATABASE]
        ) == [data_loss, outage]
