from __future__ import annotations

import sys
from unittest.mock import MagicMock, patch

import pytest

from matchset.__main__ import _print_startup_error, main


@pytest.mark.unit
class TestMain:
    """Tests for the ``python -m matchset`` entry point."""

    @pytest.mark.parametrize(
        "exit_code",
        [0, 1, 130],
        ids=["success", "error", "interrupted"],
    )
    def test_main_returns_cli_exit_code(self, exit_code: int) -> None:
        """Test main returns the exit code from the CLI main."""
        mock_cli_module = MagicMock()
        mock_cli_module.main = MagicMock(return_value=exit_code)

        with patch.dict("sys.modules", {"matchset.cli": mock_cli_module}):
            result = main()

        assert result == exit_code
        mock_cli_module.main.assert_called_once_with()

    def test_main_import_error_returns_one(self, capsys: pytest.CaptureFixture) -> None:
        """Test main returns 1 when the CLI cannot be imported."""
        with patch.dict("sys.modules", {"matchset.cli": None}):
            result = main()

        assert result == 1
        assert "ImportError:" in capsys.readouterr().err


@pytest.mark.unit
class TestPrintStartupError:
    """Tests for _print_startup_error."""

    def test_prints_version_when_available(self, capsys: pytest.CaptureFixture) -> None:
        """Test the package version is reported."""
        mock_version_module = MagicMock(__version__="9.9.9")

        with patch.dict(sys.modules, {"matchset.__version__": mock_version_module}):
            _print_startup_error(ImportError("Test error message"))

        err = capsys.readouterr().err
        assert "matchset version: 9.9.9" in err
        assert "ImportError: Test error message" in err

    def test_prints_unknown_version(self, capsys: pytest.CaptureFixture) -> None:
        """Test an unknown version is reported when it cannot be imported."""
        with patch.dict(sys.modules, {"matchset.__version__": None}):
            _print_startup_error(ImportError("boom"))

        assert "matchset version: <unknown>" in capsys.readouterr().err
