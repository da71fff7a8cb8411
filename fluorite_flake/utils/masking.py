"""Masking of secret values for display."""

from __future__ import annotations

VISIBLE_CHARS = 4


def mask_sensitive_value(value: str) -> str:
    """Mask a secret value for display.

    Values of 8 characters or fewer are fully masked. Longer values keep their
    first and last 4 characters. The masked string always has the same length
    as the input.

    Args:
        value: Raw value

    Returns:
        Masked copy of the value
    """
    if len(value) <= VISIBLE_CHARS * 2:
        return "*" * len(value)
    hidden = len(value) - VISIBLE_CHARS * 2
    return f"{value[:VISIBLE_CHARS]}{'*' * hidden}{value[-VISIBLE_CHARS:]}"
