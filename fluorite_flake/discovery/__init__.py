"""Resource discovery from local project files.

Classes:
    EnvironmentMapReader: Dotenv file reading and layering
    ResourceDiscoverer: Inventory construction from env vars and provider config
    DiscoveryError: Raised when a project cannot be identified
"""

from __future__ import annotations

from fluorite_flake.discovery.discoverer import DiscoveryError, ResourceDiscoverer
from fluorite_flake.discovery.env_reader import EnvironmentMapReader, parse_env_content
from fluorite_flake.utils.masking import mask_sensitive_value

__all__ = [
    "DiscoveryError",
    "EnvironmentMapReader",
    "ResourceDiscoverer",
    "mask_sensitive_value",
    "parse_env_content",
]
