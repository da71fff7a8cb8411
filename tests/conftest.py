"""Shared pytest configuration."""

from __future__ import annotations

import logging
from typing import Iterator

import pytest

from fluorite_flake.utils.logging import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees package records in every test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep tests away from the user's config file and audit directory."""
    config_file = tmp_path_factory.mktemp("home") / "config.yaml"
    monkeypatch.setattr("fluorite_flake.cli.config.DEFAULT_CONFIG_FILE", config_file)
    monkeypatch.setenv("FLUORITE_AUDIT_DIR", str(tmp_path_factory.mktemp("audit-logs")))
    for name in ("FLUORITE_LOG_LEVEL", "FLUORITE_AUDIT_ENABLED"):
        monkeypatch.delenv(name, raising=False)
