"""Structured audit logger for JSONL event logging.

Provides append-only structured event logging to JSONL files with
a persistent file handle for efficient I/O.
"""

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

from bibgrammar.audit.helpers import get_python_version
from bibgrammar.audit.models import LEVELS, LogEvent
from bibgrammar.errors import ParsingError
from bibgrammar.utils import get_iso_timestamp

__all__ = ["AuditLogger"]


class AuditLogger:
    """JSONL audit logger with persistent file handle.

    Writes structured log events to a JSONL file (one JSON object per line).
    Events are append-only and flushed after each write.

    Attributes
    ----------
    run_id : str
        Unique run identifier.
    log_path : Path
        Path to JSONL log file.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Initialize audit logger and open file handle.

        Parameters
        ----------
        run_id : str
            Unique run identifier.
        log_path : Path
            Path to JSONL log file. Parent directories are created.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        """Enter context manager."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Exit context manager and close file."""
        self.close()

    def close(self) -> None:
        """Flush and close the log file handle."""
        if not self._file.closed:
            self._file.flush()
            self._file.close()

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: str = "INFO",
        source: str | None = None,
    ) -> None:
        """Write structured event to log.

        Parameters
        ----------
        event_type : str
            Event type identifier (e.g., "file_parsed").
        data : dict[str, Any] | None, optional
            Event-specific data payload.
        level : str, optional
            Log level ("DEBUG", "INFO", "WARN", "ERROR").
        source : str | None, optional
            Input file the event refers to.

        Raises
        ------
        ValueError
            If ``level`` is not a known log level.
        """
        if level not in LEVELS:
            raise ValueError(f"level must be one of {LEVELS}, got {level!r}")

        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=level,
            event=event_type,
            data=data or {},
            source=source,
        )
        self._write_event(log_event)

    def _write_event(self, event: LogEvent) -> None:
        json.dump(asdict(event), self._file, ensure_ascii=False, separators=(",", ":"))
        self._file.write("\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log run_started event.

        Parameters
        ----------
        command : list[str]
            Command-line arguments.
        parameters : dict[str, Any]
            Parser configuration and command options.
        """
        self.event(
            "run_started",
            data={
                "command": command,
                "parameters": parameters,
                "python_version": get_python_version(),
            },
        )

    def run_finished(
        self,
        status: str,
        duration_seconds: float,
        files_processed: int | None = None,
    ) -> None:
        """Log run_finished event.

        Parameters
        ----------
        status : str
            Run status ("success", "failed", "partial").
        duration_seconds : float
            Total execution time in seconds.
        files_processed : int | None, optional
            Number of input files handled.
        """
        data: dict[str, Any] = {
            "status": status,
            "duration_seconds": duration_seconds,
        }
        if files_processed is not None:
            data["files_processed"] = files_processed

        self.event("run_finished", data=data)

    def file_parsed(self, source: str, sha256: str, counts: dict[str, int]) -> None:
        """Log file_parsed event.

        Parameters
        ----------
        source : str
            Path of the parsed file.
        sha256 : str
            Digest of the file bytes.
        counts : dict[str, int]
            Entry counts per kind.
        """
        self.event("file_parsed", data={"sha256": sha256, "counts": counts}, source=source)

    def parse_failed(self, source: str, error: ParsingError) -> None:
        """Log parse_failed event with the error kind and position."""
        self.event("parse_failed", data=error.to_dict(), level="ERROR", source=source)

    def artifact_written(
        self,
        path: str,
        sha256: str,
        bytes_written: int | None = None,
        record_count: int | None = None,
    ) -> None:
        """Log artifact_written event.

        Parameters
        ----------
        path : str
            Path to artifact.
        sha256 : str
            SHA256 hash of artifact.
        bytes_written : int | None, optional
            File size in bytes.
        record_count : int | None, optional
            Number of records in artifact.
        """
        data: dict[str, Any] = {"path": path, "sha256": sha256}
        if bytes_written is not None:
            data["bytes"] = bytes_written
        if record_count is not None:
            data["record_count"] = record_count

        self.event("artifact_written", data=data)

    def error(self, exception_class: str, message: str, source: str | None = None) -> None:
        """Log an unexpected error that is not a ``ParsingError``."""
        self.event(
            "error",
            data={"exception_class": exception_class, "message": message},
            level="ERROR",
            source=source,
        )
