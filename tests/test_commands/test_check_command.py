"""Tests for the ``matchset check`` command.

Test Coverage:
- Building the combined constraint from specs, build number and excludes
- Candidate evaluation
- simple / json / table output
- Exit codes for matching, non-matching and invalid input
- Config-provided defaults
"""

from __future__ import annotations

import json
import logging
from typing import Generator, List

import pytest
from click.testing import CliRunner, Result

from matchset.cli import cli
from matchset.commands import parse_candidates, requirements_to_constraints
from matchset.commands.check import evaluate_candidates
from matchset.core import ConstraintSet
from matchset.exceptions import ParseError
from matchset.models import Candidate, Requirement
import matchset.utils.console as console_module
from matchset.utils.console import configure_console


@pytest.fixture(autouse=True)
def isolated_output(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.delenv("MATCHSET_CONFIG", raising=False)
    configure_console()
    yield
    root_logger = logging.getLogger("matchset")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    root_logger.addHandler(logging.NullHandler())
    root_logger.setLevel(logging.NOTSET)
    root_logger.propagate = True
    console_module._console = None


def run(args: List[str], config: str = "") -> Result:
    """Invoke ``matchset --no-color check ARGS`` in an empty directory."""
    runner = CliRunner()
    with runner.isolated_filesystem():
        if config:
            with open("matchset.toml", "w", encoding="utf-8") as fh:
                fh.write(config)
        return runner.invoke(cli, ["--no-color", "check", *args])


@pytest.mark.unit
class TestRequirementsToConstraints:
    """Tests for the shared operand helper."""

    def test_no_requirements_is_full(self) -> None:
        """Test no operands leaves every candidate allowed."""
        assert requirements_to_constraints([]) == ConstraintSet.full()

    def test_specs_are_intersected(self) -> None:
        """Test every spec must hold."""
        result = requirements_to_constraints([">=1.0,<2.0", ">=1.5,<3.0"])

        assert result == Requirement("x", ">=1.5,<2.0").to_constraints()

    def test_build_number_applies(self) -> None:
        """Test the build number narrows every group."""
        result = requirements_to_constraints([">=1.0"], build_number=2)

        assert result.contains(Candidate("1.5", 2))
        assert not result.contains(Candidate("1.5", 1))

    def test_excludes_are_removed(self) -> None:
        """Test excluded specifiers are subtracted."""
        result = requirements_to_constraints([">=1.0"], excludes=["==1.8"])

        assert result.contains(Candidate("1.7"))
        assert not result.contains(Candidate("1.8"))
        assert result.contains(Candidate("1.9"))

    def test_invalid_spec_raises(self) -> None:
        """Test a bad specifier surfaces as ParseError."""
        with pytest.raises(ParseError):
            requirements_to_constraints(["=>1.0"])

    def test_parse_candidates(self) -> None:
        """Test operands are parsed in order."""
        assert parse_candidates(["1.0", "2.0=3"]) == [Candidate("1.0", 0), Candidate("2.0", 3)]


@pytest.mark.unit
class TestEvaluateCandidates:
    """Tests for evaluate_candidates."""

    def test_results_keep_order(self) -> None:
        """Test each candidate is paired with its membership."""
        constraint = Requirement("x", "<2.0").to_constraints()
        candidates = [Candidate("1.0"), Candidate("2.0"), Candidate("1.5")]

        assert evaluate_candidates(constraint, candidates) == [
            (candidates[0], True),
            (candidates[1], False),
            (candidates[2], True),
        ]


@pytest.mark.integration
class TestCheckCommand:
    """End-to-end tests through the click command."""

    def test_all_match_exits_zero(self) -> None:
        """Test a matching candidate gives exit code 0."""
        result = run(["1.7", "-s", ">=1.0,<2.0", "-s", ">=1.5,<3.0", "-f", "simple"])

        assert result.exit_code == 0
        assert result.output == "1.7=0: match\n"

    def test_any_mismatch_exits_one(self) -> None:
        """Test a non-matching candidate gives exit code 1."""
        result = run(["1.7", "1.2", "-s", ">=1.5", "-f", "simple"])

        assert result.exit_code == 1
        assert result.output == "1.7=0: match\n1.2=0: no match\n"

    def test_json_output(self) -> None:
        """Test JSON output lists the constraint and every candidate."""
        result = run(["1.7=2", "1.8=2", "-s", ">=1.0", "-b", "2", "-x", "==1.8", "-f", "json"])

        payload = json.loads(result.stdout)
        assert result.exit_code == 1
        assert payload["candidates"] == [
            {"candidate": "1.7=2", "matches": True},
            {"candidate": "1.8=2", "matches": False},
        ]
        assert payload["constraint"] == (
            "version >=1.0,<1.8 || >=1.8.post0.dev0 and build_number ==2"
        )
        assert payload["groups"] == [
            {"version": ">=1.0,<1.8 || >=1.8.post0.dev0", "build_number": "==2"}
        ]

    def test_table_output(self) -> None:
        """Test the default table shows the constraint and a summary."""
        result = run(["1.7", "-s", ">=1.0,<2.0"])

        assert result.exit_code == 0
        assert "Constraint:" in result.output
        assert "1.7=0" in result.output
        assert "[OK] All candidates match" in result.output

    def test_unsatisfiable_warns(self) -> None:
        """Test contradictory requirements are reported."""
        result = run(["1.0", "-s", ">=2.0", "-s", "<1.0"])

        assert result.exit_code == 1
        assert "[WARNING] Requirements are unsatisfiable" in result.output
        assert "<empty>" in result.output

    def test_no_requirements_matches_everything(self) -> None:
        """Test candidates always match when nothing is required."""
        result = run(["0.0.1=99", "-f", "simple"])

        assert result.exit_code == 0
        assert result.output == "0.0.1=99: match\n"

    def test_invalid_spec_exits_one(self) -> None:
        """Test an invalid specifier is reported as an error."""
        result = run(["1.0", "-s", "=>1.0"])

        assert result.exit_code == 1
        assert "[ERROR] Invalid version specifier" in result.output

    def test_invalid_candidate_exits_one(self) -> None:
        """Test an invalid candidate is reported as an error."""
        result = run(["not-a-version"])

        assert result.exit_code == 1
        assert "[ERROR] Invalid candidate version" in result.output

    def test_non_ascii_build_digit_exits_one(self) -> None:
        """Test a superscript build digit is an input error, not a crash."""
        result = run(["1.0=\u00b2"])

        assert result.exit_code == 1
        assert "[ERROR] Invalid build number" in result.output

    def test_missing_candidates_is_usage_error(self) -> None:
        """Test at least one candidate is required."""
        result = run(["-s", ">=1.0"])

        assert result.exit_code == 2

    def test_negative_build_number_is_usage_error(self) -> None:
        """Test --build-number rejects negative values."""
        result = run(["1.0", "-b", "-1"])

        assert result.exit_code == 2

    def test_config_default_format(self) -> None:
        """Test the configured format is used when --format is omitted."""
        result = run(["1.0", "-s", "==1.0"], config="[matchset]\ndefault_format = 'simple'\n")

        assert result.exit_code == 0
        assert result.output == "1.0=0: match\n"

    def test_format_option_overrides_config(self) -> None:
        """Test --format wins over the configured default."""
        result = run(
            ["1.0", "-s", "==1.0", "-f", "json"],
            config="[matchset]\ndefault_format = 'simple'\n",
        )

        assert json.loads(result.stdout)["candidates"][0]["matches"] is True
