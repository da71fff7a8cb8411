"""Tests for the layered environment map."""

from __future__ import annotations

from fluorite_flake.models.environment import EnvironmentKey, EnvironmentMap


class TestEnvironmentMap:
    """Test suite for EnvironmentMap."""

    def test_from_layers_merges_shared_under_each_tier(self) -> None:
        """Test tier values override shared values within that tier only."""
        env_map = EnvironmentMap.from_layers(
            {"A": "shared", "B": "shared"},
            {EnvironmentKey.PRODUCTION: {"A": "prod"}},
        )

        assert env_map.layer(EnvironmentKey.PRODUCTION) == {"A": "prod", "B": "shared"}
        assert env_map.layer(EnvironmentKey.DEVELOPMENT) == {"A": "shared", "B": "shared"}
        assert env_map.shared == {"A": "shared", "B": "shared"}

    def test_combined_later_tiers_win(self) -> None:
        """Test combined view applies development, staging, production in order."""
        env_map = EnvironmentMap.from_layers(
            {"KEY": "shared"},
            {
                EnvironmentKey.PRODUCTION: {"KEY": "prod"},
                EnvironmentKey.DEVELOPMENT: {"KEY": "dev", "DEV_ONLY": "1"},
                EnvironmentKey.STAGING: {"KEY": "staging"},
            },
        )

        assert env_map.combined == {"KEY": "prod", "DEV_ONLY": "1"}

    def test_every_tier_present(self) -> None:
        """Test all tiers get a layer even without tier files."""
        env_map = EnvironmentMap.from_layers({}, {})

        assert set(env_map.by_environment) == set(EnvironmentKey)
        assert env_map.combined == {}

    def test_layer_for_unknown_tier_is_empty(self) -> None:
        """Test layer() on a map without tiers returns an empty dict."""
        assert EnvironmentMap().layer(EnvironmentKey.STAGING) == {}
