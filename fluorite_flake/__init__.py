"""fluorite-flake: cloud resource discovery and guarded cleanup for generated projects."""

__version__ = "0.1.0"
