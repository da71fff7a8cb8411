"""Tests for CLI configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from fluorite_flake.cli.config import Config, ConfigError


@pytest.fixture(autouse=True)
def clear_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("FLUORITE_AUDIT_DIR", raising=False)


class TestConfig:
    """Test suite for Config.load."""

    def test_defaults(self) -> None:
        """Test defaults apply without a config file."""
        config = Config.load()

        assert config.log_level == "INFO"
        assert config.audit_enabled is True
        assert config.audit_dir.endswith("audit-logs")

    def test_file_values(self, tmp_path: Path) -> None:
        """Test values are read from a YAML file and unknown keys ignored."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("log_level: DEBUG\naudit_dir: /tmp/audit\naudit_enabled: false\ncolor: auto\n")

        config = Config.load(str(config_file))

        assert config.log_level == "DEBUG"
        assert config.audit_dir == "/tmp/audit"
        assert config.audit_enabled is False

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file keeps the defaults."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert Config.load(str(config_file)) == Config()

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test FLUORITE_* variables win over the file."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("log_level: DEBUG\naudit_enabled: true\n")
        monkeypatch.setenv("FLUORITE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("FLUORITE_AUDIT_DIR", "/var/audit")
        monkeypatch.setenv("FLUORITE_AUDIT_ENABLED", "off")

        config = Config.load(str(config_file))

        assert config.log_level == "WARNING"
        assert config.audit_dir == "/var/audit"
        assert config.audit_enabled is False

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Test an explicitly named file must exist."""
        with pytest.raises(ConfigError, match="not found"):
            Config.load(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        """Test malformed YAML is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("log_level: [unclosed\n")

        with pytest.raises(ConfigError, match="Invalid YAML"):
            Config.load(str(config_file))

    def test_non_mapping(self, tmp_path: Path) -> None:
        """Test a YAML list is rejected."""
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            Config.load(str(config_file))
