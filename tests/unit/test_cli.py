"""Tests for CLI module."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from bibgrammar.cli.main import cli


@pytest.fixture
def runner() -> CliRunner:
    """Provide Click test CLI runner."""
    return CliRunner()


def _read_events(path: Path) -> list[dict]:
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]


# ---------------------------------------------------------------------------
# Top-level CLI
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_cli_version_flag(runner: CliRunner) -> None:
    """Test --version flag outputs version string."""
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "bibgrammar" in result.output


@pytest.mark.unit
def test_cli_help(runner: CliRunner) -> None:
    """Test --help output lists commands."""
    result = runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    for command in ("parse", "check", "stats"):
        assert command in result.output


@pytest.mark.unit
def test_cli_invalid_command(runner: CliRunner) -> None:
    """Test invalid command returns non-zero exit code."""
    result = runner.invoke(cli, ["invalid-command"])

    assert result.exit_code != 0


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_parse_writes_jsonl(runner: CliRunner, sample_bib_path: Path, tmp_path: Path) -> None:
    """Test parse writes one JSON object per entry."""
    output = tmp_path / "entries.jsonl"

    result = runner.invoke(cli, ["parse", str(sample_bib_path), "-o", str(output), "--validate"])

    assert result.exit_code == 0, result.output
    assert "Successfully wrote 7 entries" in result.output
    rows = [json.loads(line) for line in output.read_text(encoding="utf-8").splitlines()]
    assert [row["kind"] for row in rows] == [
        "comment",
        "preamble",
        "variable",
        "variable",
        "bibliography",
        "bibliography",
        "bibliography",
    ]


@pytest.mark.unit
def test_parse_requires_output(runner: CliRunner, sample_bib_path: Path) -> None:
    """Test parse fails without --output."""
    result = runner.invoke(cli, ["parse", str(sample_bib_path)])

    assert result.exit_code != 0


@pytest.mark.unit
def test_parse_nonexistent_input(runner: CliRunner, tmp_path: Path) -> None:
    """Test parse rejects missing input files."""
    result = runner.invoke(cli, ["parse", "/nonexistent.bib", "-o", str(tmp_path / "o.jsonl")])

    assert result.exit_code != 0


@pytest.mark.unit
def test_parse_syntax_error_reports_position(
    runner: CliRunner,
    write_bib: Callable[..., Path],
    tmp_path: Path,
) -> None:
    """Test a malformed file exits 1 with line and column."""
    path = write_bib("@misc{k,\n  title {x}}")
    output = tmp_path / "out.jsonl"

    result = runner.invoke(cli, ["parse", str(path), "-o", str(output)])

    assert result.exit_code == 1
    assert "Error" in result.output
    assert "line 2, column 9" in result.output
    assert not output.exists()


@pytest.mark.unit
def test_parse_bad_encoding_option(runner: CliRunner, sample_bib_path: Path, tmp_path: Path) -> None:
    """Test an unknown codec is reported as a bad parameter."""
    result = runner.invoke(
        cli,
        ["parse", str(sample_bib_path), "-o", str(tmp_path / "o.jsonl"), "--encoding", "nope"],
    )

    assert result.exit_code == 2
    assert "Unknown encoding" in result.output


@pytest.mark.unit
def test_parse_audit_log(runner: CliRunner, sample_bib_path: Path, tmp_path: Path) -> None:
    """Test parse records the run in the audit log."""
    output = tmp_path / "out.jsonl"
    audit_log = tmp_path / "audit" / "events.jsonl"

    result = runner.invoke(
        cli,
        ["parse", str(sample_bib_path), "-o", str(output), "--audit-log", str(audit_log)],
    )

    assert result.exit_code == 0, result.output
    events = _read_events(audit_log)
    assert [e["event"] for e in events] == [
        "run_started",
        "file_parsed",
        "artifact_written",
        "run_finished",
    ]
    assert len({e["run_id"] for e in events}) == 1
    assert events[1]["data"]["counts"]["bibliography"] == 3
    assert events[1]["data"]["sha256"].startswith("sha256:")
    assert events[2]["data"]["record_count"] == 7
    assert events[3]["data"]["status"] == "success"


@pytest.mark.unit
def test_parse_audit_log_on_failure(
    runner: CliRunner,
    write_bib: Callable[..., Path],
    tmp_path: Path,
) -> None:
    """Test a failed parse is logged with the error kind."""
    path = write_bib("@misc{k, title = {open")
    audit_log = tmp_path / "events.jsonl"

    result = runner.invoke(
        cli,
        ["parse", str(path), "-o", str(tmp_path / "o.jsonl"), "--audit-log", str(audit_log)],
    )

    assert result.exit_code == 1
    events = _read_events(audit_log)
    assert [e["event"] for e in events] == ["run_started", "parse_failed", "run_finished"]
    assert events[1]["data"]["kind"] == "incomplete"
    assert events[2]["data"]["status"] == "failed"


@pytest.mark.unit
def test_parse_verbose(runner: CliRunner, sample_bib_path: Path, tmp_path: Path) -> None:
    """Test verbose mode reports progress."""
    result = runner.invoke(
        cli,
        ["parse", str(sample_bib_path), "-o", str(tmp_path / "o.jsonl"), "-v"],
    )

    assert result.exit_code == 0
    assert "Found 7 entries" in result.output


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_check_ok(runner: CliRunner, sample_bib_path: Path) -> None:
    """Test check reports counts for a valid file."""
    result = runner.invoke(cli, ["check", str(sample_bib_path)])

    assert result.exit_code == 0
    assert "OK" in result.output
    assert "1 preamble, 1 comment, 2 variable, 3 bibliography" in result.output


@pytest.mark.unit
def test_check_mixed_results(
    runner: CliRunner,
    sample_bib_path: Path,
    write_bib: Callable[..., Path],
) -> None:
    """Test one failing file fails the run but every file is checked."""
    bad = write_bib("@misc{k, title = }", name="bad.bib")
    empty = write_bib("just some notes", name="empty.bib")

    result = runner.invoke(cli, ["check", str(bad), str(sample_bib_path), str(empty)])

    assert result.exit_code == 1
    assert f"FAIL {bad}" in result.output
    assert f"OK   {sample_bib_path}" in result.output
    assert "no entries" in result.output


@pytest.mark.unit
def test_check_requires_paths(runner: CliRunner) -> None:
    """Test check needs at least one input."""
    result = runner.invoke(cli, ["check"])

    assert result.exit_code != 0


@pytest.mark.unit
def test_check_audit_log(
    runner: CliRunner,
    sample_bib_path: Path,
    write_bib: Callable[..., Path],
    tmp_path: Path,
) -> None:
    """Test check logs one event per file."""
    bad = write_bib("@misc{", name="bad.bib")
    audit_log = tmp_path / "events.jsonl"

    runner.invoke(cli, ["check", str(sample_bib_path), str(bad), "--audit-log", str(audit_log)])

    events = _read_events(audit_log)
    assert [e["event"] for e in events] == [
        "run_started",
        "file_parsed",
        "parse_failed",
        "run_finished",
    ]
    assert events[2]["source"] == str(bad)
    assert events[3]["data"]["files_processed"] == 2


# ---------------------------------------------------------------------------
# stats command
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_stats_output(runner: CliRunner, sample_bib_path: Path) -> None:
    """Test stats prints per-kind and per-type counts."""
    result = runner.invoke(cli, ["stats", str(sample_bib_path)])

    assert result.exit_code == 0
    assert "Entries: 7" in result.output
    assert "  variable: 2" in result.output
    assert "Entry types:" in result.output
    assert "  article: 1" in result.output
    assert "  book: 1" in result.output
    assert "  misc: 1" in result.output


@pytest.mark.unit
def test_stats_parse_error(runner: CliRunner, write_bib: Callable[..., Path]) -> None:
    """Test stats exits 1 on malformed input."""
    path = write_bib("@misc{k, = {x}}")

    result = runner.invoke(cli, ["stats", str(path)])

    assert result.exit_code == 1
    assert "Error" in result.output
