"""Tests for audit logger module."""

import json
from collections.abc import Iterator
from importlib import resources
from pathlib import Path

import jsonschema
import pytest

from bibgrammar.audit import AuditLogger, generate_run_id
from bibgrammar.errors import ErrorKind, ParsingError


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    schema_file = resources.files("bibgrammar") / "schemas" / "log_event.schema.json"
    return json.loads(schema_file.read_text(encoding="utf-8"))


@pytest.fixture
def logger(tmp_path: Path) -> Iterator[AuditLogger]:
    """Create a logger that auto-closes after test."""
    lg = AuditLogger(run_id="test_run", log_path=tmp_path / "logs" / "events.jsonl")
    yield lg
    lg.close()


def _read_events(path: Path) -> list[dict]:
    """Read all JSONL events from file."""
    with path.open() as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.unit
def test_logger_init_creates_file(logger: AuditLogger) -> None:
    """Test logger creates the log file and its parent directory."""
    assert logger.log_path.exists()
    assert logger.run_id == "test_run"


@pytest.mark.unit
def test_logger_event_writes_valid_jsonl(logger: AuditLogger) -> None:
    """Test event() writes a valid JSONL line with correct envelope."""
    logger.event("test_event", data={"key": "value"}, level="INFO", source="a.bib")

    (evt,) = _read_events(logger.log_path)

    assert evt["run_id"] == "test_run"
    assert evt["event"] == "test_event"
    assert evt["level"] == "INFO"
    assert evt["data"] == {"key": "value"}
    assert evt["source"] == "a.bib"
    assert evt["ts"].endswith("Z")


@pytest.mark.unit
def test_logger_rejects_unknown_level(logger: AuditLogger) -> None:
    """Test unknown levels are refused."""
    with pytest.raises(ValueError, match="level must be one of"):
        logger.event("x", level="LOUD")


@pytest.mark.unit
def test_logger_helpers_write_expected_events(
    logger: AuditLogger,
    event_schema: dict,
) -> None:
    """Test convenience methods produce schema-valid events."""
    error = ParsingError(
        "Incomplete input", kind=ErrorKind.INCOMPLETE, offset=10, line=2, column=3
    )

    logger.run_started(["bibgrammar", "check", "a.bib"], {"encoding": None})
    logger.file_parsed("a.bib", "sha256:abc", {"bibliography": 2})
    logger.parse_failed("b.bib", error)
    logger.artifact_written("out.jsonl", "sha256:def", bytes_written=12, record_count=2)
    logger.error("OSError", "denied", source="c.bib")
    logger.run_finished("failed", 0.5, files_processed=3)

    events = _read_events(logger.log_path)

    assert [e["event"] for e in events] == [
        "run_started",
        "file_parsed",
        "parse_failed",
        "artifact_written",
        "error",
        "run_finished",
    ]
    assert events[0]["data"]["python_version"].count(".") == 2
    assert events[2]["level"] == "ERROR"
    assert events[2]["data"]["kind"] == "incomplete"
    assert events[2]["data"]["line"] == 2
    assert events[3]["data"] == {
        "path": "out.jsonl",
        "sha256": "sha256:def",
        "bytes": 12,
        "record_count": 2,
    }
    assert events[5]["data"]["files_processed"] == 3
    for event in events:
        jsonschema.validate(instance=event, schema=event_schema)


@pytest.mark.unit
def test_logger_context_manager_closes(tmp_path: Path) -> None:
    """Test the file handle is closed on exit."""
    with AuditLogger(run_id="r", log_path=tmp_path / "e.jsonl") as lg:
        lg.event("x")

    assert lg._file.closed


@pytest.mark.unit
def test_logger_appends(tmp_path: Path) -> None:
    """Test separate loggers append to the same file."""
    path = tmp_path / "e.jsonl"
    for run_id in ("r1", "r2"):
        with AuditLogger(run_id=run_id, log_path=path) as lg:
            lg.event("x")

    assert [e["run_id"] for e in _read_events(path)] == ["r1", "r2"]


@pytest.mark.unit
def test_generate_run_id_unique() -> None:
    """Test run IDs are unique and timestamp-prefixed."""
    first, second = generate_run_id(), generate_run_id()

    assert first != second
    assert "__" in first
    assert first.split("__")[0].endswith("Z")


@pytest.mark.unit
def test_schema_rejects_bad_level(event_schema: dict) -> None:
    """Test the event schema enforces known levels."""
    event = {
        "ts": "2026-01-01T00:00:00.000001Z",
        "run_id": "r",
        "level": "LOUD",
        "event": "x",
        "data": {},
        "source": None,
    }

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(instance=event, schema=event_schema)
