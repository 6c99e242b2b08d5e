"""Helper utilities for audit logging."""

import secrets
import sys
from datetime import UTC, datetime

__all__ = ["generate_run_id", "get_python_version"]


def generate_run_id() -> str:
    """Generate unique run identifier.

    Returns
    -------
    str
        Run ID in format: ISO8601_timestamp__random_suffix.
    """
    timestamp = datetime.now(UTC).isoformat().replace("+00:00", "Z")
    suffix = secrets.token_hex(4)
    return f"{timestamp}__{suffix}"


def get_python_version() -> str:
    """Return the running interpreter version (e.g., "3.12.3")."""
    return ".".join(str(part) for part in sys.version_info[:3])
