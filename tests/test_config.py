from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from matchset.config import (
    MatchSetConfig,
    _parse_section,
    _pyproject_has_matchset_section,
    _read_toml,
    discover_config_file,
    load_config,
)
from matchset.exceptions import ConfigError


@pytest.mark.unit
class TestMatchSetConfig:
    """Tests for MatchSetConfig dataclass."""

    def test_default_initialization(self) -> None:
        """Test MatchSetConfig initializes with correct defaults."""
        config = MatchSetConfig()

        assert config.default_format == "table"
        assert config.show_unconstrained is False
        assert config.source_path is None

    def test_to_log_dict(self) -> None:
        """Test to_log_dict returns configuration without metadata."""
        config = MatchSetConfig(
            default_format="json",
            show_unconstrained=True,
            source_path=Path("/test/path.toml"),
        )

        assert config.to_log_dict() == {
            "default_format": "json",
            "show_unconstrained": True,
        }


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file function."""

    def test_explicit_path_priority(self, tmp_path: Path) -> None:
        """Test explicit path is used when provided and exists."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[matchset]\n", encoding="utf-8")

        assert discover_config_file(config_file) == config_file.resolve()

    def test_explicit_path_not_found_raises_error(self, tmp_path: Path) -> None:
        """Test a missing explicit path raises ConfigError."""
        missing = tmp_path / "missing.toml"

        with pytest.raises(ConfigError) as exc_info:
            discover_config_file(missing)

        assert exc_info.value.details["path"] == str(missing)

    def test_discovers_matchset_toml(self, tmp_path: Path) -> None:
        """Test matchset.toml in the working directory is found."""
        config_file = tmp_path / "matchset.toml"
        config_file.write_text("[matchset]\n", encoding="utf-8")

        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_discovers_pyproject_toml_with_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml with [tool.matchset] is found."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.matchset]\ndefault_format = 'json'\n", encoding="utf-8")

        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == pyproject

    def test_ignores_pyproject_toml_without_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml without the section is skipped."""
        (tmp_path / "pyproject.toml").write_text("[tool.other]\n", encoding="utf-8")

        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_precedence_order(self, tmp_path: Path) -> None:
        """Test matchset.toml wins over pyproject.toml."""
        standalone = tmp_path / "matchset.toml"
        standalone.write_text("[matchset]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.matchset]\n", encoding="utf-8")

        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == standalone


@pytest.mark.unit
class TestPyprojectHasMatchsetSection:
    """Tests for _pyproject_has_matchset_section."""

    def test_returns_true_when_section_exists(self, tmp_path: Path) -> None:
        """Test the section is detected."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.matchset]\n", encoding="utf-8")

        assert _pyproject_has_matchset_section(pyproject) is True

    def test_returns_false_on_invalid_toml(self, tmp_path: Path) -> None:
        """Test an unreadable pyproject.toml counts as no section."""
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.matchset\n", encoding="utf-8")

        assert _pyproject_has_matchset_section(pyproject) is False


@pytest.mark.unit
class TestReadToml:
    """Tests for _read_toml."""

    def test_reads_valid_toml(self, tmp_path: Path) -> None:
        """Test valid TOML is parsed into a dictionary."""
        path = tmp_path / "config.toml"
        path.write_text("[matchset]\nshow_unconstrained = true\n", encoding="utf-8")

        assert _read_toml(path) == {"matchset": {"show_unconstrained": True}}

    def test_raises_error_on_invalid_toml(self, tmp_path: Path) -> None:
        """Test invalid TOML raises ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("not = [valid", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _read_toml(path)

    def test_raises_error_when_file_not_found(self, tmp_path: Path) -> None:
        """Test an unreadable file raises ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read"):
            _read_toml(tmp_path / "missing.toml")


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section."""

    def test_parses_empty_section(self) -> None:
        """Test an empty section yields defaults."""
        config = _parse_section({}, config_path="test.toml")

        assert config == MatchSetConfig()

    def test_parses_all_options(self) -> None:
        """Test every option is read."""
        config = _parse_section(
            {"default_format": "JSON", "show_unconstrained": True},
            config_path="test.toml",
        )

        assert config.default_format == "json"
        assert config.show_unconstrained is True

    def test_raises_error_on_unknown_keys(self) -> None:
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour"):
            _parse_section({"colour": True}, config_path="test.toml")

    def test_raises_error_on_unsupported_format(self) -> None:
        """Test default_format must be a known format."""
        with pytest.raises(ConfigError) as exc_info:
            _parse_section({"default_format": "yaml"}, config_path="test.toml")

        assert exc_info.value.option == "default_format"

    def test_raises_error_on_wrong_type_default_format(self) -> None:
        """Test default_format must be a string."""
        with pytest.raises(ConfigError, match="must be a string"):
            _parse_section({"default_format": 1}, config_path="test.toml")

    def test_raises_error_on_wrong_type_show_unconstrained(self) -> None:
        """Test show_unconstrained must be a boolean."""
        with pytest.raises(ConfigError, match="must be a boolean"):
            _parse_section({"show_unconstrained": "yes"}, config_path="test.toml")


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_returns_defaults_when_no_config_found(self, tmp_path: Path) -> None:
        """Test defaults are returned without a config file."""
        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config == MatchSetConfig()

    def test_loads_matchset_toml(self, tmp_path: Path) -> None:
        """Test values are read from matchset.toml."""
        path = tmp_path / "matchset.toml"
        path.write_text("[matchset]\ndefault_format = 'simple'\n", encoding="utf-8")

        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config.default_format == "simple"
        assert config.source_path == path

    def test_loads_pyproject_toml(self, tmp_path: Path) -> None:
        """Test values are read from [tool.matchset]."""
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.matchset]\nshow_unconstrained = true\n", encoding="utf-8")

        with patch("matchset.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config.show_unconstrained is True
        assert config.source_path == path

    def test_loads_explicit_config_path(self, tmp_path: Path) -> None:
        """Test an explicit path is loaded."""
        path = tmp_path / "custom.toml"
        path.write_text("[matchset]\ndefault_format = 'json'\n", encoding="utf-8")

        config = load_config(path)

        assert config.default_format == "json"
        assert config.source_path == path.resolve()

    def test_handles_empty_matchset_section(self, tmp_path: Path) -> None:
        """Test a file without options gives defaults with a source path."""
        path = tmp_path / "custom.toml"
        path.write_text("[other]\n", encoding="utf-8")

        config = load_config(path)

        assert config.default_format == "table"
        assert config.source_path == path.resolve()

    def test_raises_error_on_unknown_keys(self, tmp_path: Path) -> None:
        """Test unknown keys in the file raise ConfigError."""
        path = tmp_path / "custom.toml"
        path.write_text("[matchset]\nstrict = true\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            load_config(path)
