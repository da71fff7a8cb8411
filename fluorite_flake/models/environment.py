"""Layered environment variable model.

Holds the variables read from a project's dotenv files, split into the shared
layer and one layer per deployment environment tier.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class EnvironmentKey(Enum):
    """Deployment environment tier.

    Declaration order is the order layers are flattened in.
    """

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


@dataclass(frozen=True)
class EnvironmentMap:
    """Layered key-value view of a project's environment variables.

    Attributes:
        shared: Variables common to all environments
        by_environment: Per-tier variables (shared layer merged under each tier)
        combined: Shared layer merged with every tier layer, later tiers winning
    """

    shared: Dict[str, str] = field(default_factory=dict)
    by_environment: Dict[EnvironmentKey, Dict[str, str]] = field(default_factory=dict)
    combined: Dict[str, str] = field(default_factory=dict)

    def layer(self, environment: EnvironmentKey) -> Dict[str, str]:
        """Return the variables visible to one environment tier."""
        return self.by_environment.get(environment, {})

    @classmethod
    def from_layers(cls, shared: Dict[str, str], tiers: Dict[EnvironmentKey, Dict[str, str]]) -> "EnvironmentMap":
        """Build a map from the raw shared layer and the raw per-tier layers.

        Args:
            shared: Variables read from the shared dotenv file
            tiers: Variables read from each tier's own dotenv files (without shared)

        Returns:
            EnvironmentMap with merged tier layers and the flattened combined view
        """
        by_environment: Dict[EnvironmentKey, Dict[str, str]] = {}
        combined: Dict[str, str] = dict(shared)

        for environment in EnvironmentKey:
            tier_vars = tiers.get(environment, {})
            by_environment[environment] = {**shared, **tier_vars}
            combined.update(tier_vars)

        return cls(shared=dict(shared), by_environment=by_environment, combined=combined)
