"""Shared helpers for hashing and timestamps."""

from bibgrammar.utils.hashing import calculate_file_digest, calculate_file_sha256, format_sha256
from bibgrammar.utils.timestamps import get_iso_timestamp

__all__ = [
    "get_iso_timestamp",
    "calculate_file_sha256",
    "calculate_file_digest",
    "format_sha256",
]
