"""Tests for dotenv reading and layering."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from fluorite_flake.discovery.env_reader import EnvironmentMapReader, parse_env_content
from fluorite_flake.models.environment import EnvironmentKey
from tests.fixtures.inventories import write_project_files


class TestParseEnvContent:
    """Test suite for parse_env_content."""

    def test_ignores_comments_and_blank_lines(self) -> None:
        """Test comment and blank lines produce no entries."""
        content = "# comment\n\nKEY=value\n   # indented comment\n"

        assert parse_env_content(content) == {"KEY": "value"}

    def test_strips_quotes(self) -> None:
        """Test single and double quotes are removed from values."""
        content = 'DOUBLE="hello world"\nSINGLE=\'abc\'\n'

        assert parse_env_content(content) == {"DOUBLE": "hello world", "SINGLE": "abc"}

    def test_first_equals_splits(self) -> None:
        """Test only the first '=' separates key and value."""
        assert parse_env_content("URL=postgres://u:p@h/db?a=b\n") == {"URL": "postgres://u:p@h/db?a=b"}

    def test_keys_without_value_dropped(self) -> None:
        """Test a bare key with no '=' is ignored."""
        assert parse_env_content("LONELY\nKEY=1\n") == {"KEY": "1"}

    def test_unterminated_quote_loses_only_its_line(self) -> None:
        """Test a malformed line does not swallow the lines after it."""
        content = 'A="abc\nTURSO_DATABASE_URL=libsql://a.turso.io\nX="y"\n'

        assert parse_env_content(content) == {"TURSO_DATABASE_URL": "libsql://a.turso.io", "X": "y"}

    def test_mixed_line_forms(self) -> None:
        """Test quoted, commented, spaced and exported lines around a bad line."""
        content = "A='abc\nB=\"x\"\nC=val # c\nD = 'q'\nexport E=1\nF=a=b\n"

        assert parse_env_content(content) == {"B": "x", "C": "val", "D": "q", "E": "1", "F": "a=b"}

    def test_no_interpolation(self) -> None:
        """Test ${VAR} references are kept literally."""
        assert parse_env_content("A=1\nB=${A}\n") == {"A": "1", "B": "${A}"}


class TestEnvironmentMapReader:
    """Test suite for EnvironmentMapReader."""

    def test_missing_files_give_empty_map(self, tmp_path: Path) -> None:
        """Test a project without dotenv files yields empty layers."""
        env_map = EnvironmentMapReader().read(tmp_path)

        assert env_map.shared == {}
        assert env_map.combined == {}
        assert all(layer == {} for layer in env_map.by_environment.values())

    def test_layer_precedence(self, tmp_path: Path) -> None:
        """Test tier files override .env and later tier files override earlier ones."""
        write_project_files(
            tmp_path,
            {
                ".env": "NAME=shared\nSHARED_ONLY=yes\n",
                ".env.local": "NAME=local\n",
                ".env.development": "NAME=development\n",
                ".env.prod": "NAME=prod\n",
                ".env.production": "NAME=production\n",
            },
        )

        env_map = EnvironmentMapReader().read(tmp_path)

        assert env_map.layer(EnvironmentKey.DEVELOPMENT)["NAME"] == "development"
        assert env_map.layer(EnvironmentKey.PRODUCTION)["NAME"] == "production"
        assert env_map.layer(EnvironmentKey.STAGING) == {"NAME": "shared", "SHARED_ONLY": "yes"}
        assert env_map.combined["NAME"] == "production"

    def test_staging_file(self, tmp_path: Path) -> None:
        """Test .env.staging feeds the staging tier only."""
        write_project_files(tmp_path, {".env.staging": "STAGE=1\n"})

        env_map = EnvironmentMapReader().read(tmp_path)

        assert env_map.layer(EnvironmentKey.STAGING) == {"STAGE": "1"}
        assert env_map.layer(EnvironmentKey.PRODUCTION) == {}

    def test_directory_in_place_of_file_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test a directory named like a dotenv file is skipped with a warning."""
        (tmp_path / ".env").mkdir()

        with caplog.at_level(logging.WARNING):
            env_map = EnvironmentMapReader().read(tmp_path)

        assert env_map.shared == {}
        assert "Failed to read environment file" in caplog.text

    def test_undecodable_file_logged_and_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Test an unreadable file is treated as empty with a warning."""
        (tmp_path / ".env").write_bytes(b"\xff\xfe\xfa")
        write_project_files(tmp_path, {".env.production": "OK=1\n"})

        with caplog.at_level(logging.WARNING):
            env_map = EnvironmentMapReader().read(tmp_path)

        assert env_map.shared == {}
        assert env_map.layer(EnvironmentKey.PRODUCTION) == {"OK": "1"}
        assert "Failed to read environment file" in caplog.text

    def test_custom_file_lists(self, tmp_path: Path) -> None:
        """Test file lists can be overridden."""
        write_project_files(tmp_path, {"base.env": "A=1\n", "prod.env": "A=2\n"})

        reader = EnvironmentMapReader(
            shared_files=["base.env"],
            environment_files={EnvironmentKey.PRODUCTION: ["prod.env"]},
        )
        env_map = reader.read(tmp_path)

        assert env_map.shared == {"A": "1"}
        assert env_map.layer(EnvironmentKey.PRODUCTION) == {"A": "2"}
        assert env_map.layer(EnvironmentKey.DEVELOPMENT) == {"A": "1"}
