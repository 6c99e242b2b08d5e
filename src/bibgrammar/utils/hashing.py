"""SHA-256 digests for parsed inputs and written artifacts."""

import hashlib
from pathlib import Path

__all__ = ["format_sha256", "calculate_file_sha256", "calculate_file_digest"]


def format_sha256(hex_digest: str) -> str:
    """Prefix a hexadecimal digest with ``sha256:``."""
    return f"sha256:{hex_digest}"


def calculate_file_sha256(path: Path) -> str:
    """Hash a file on disk in 8 KiB chunks.

    Parameters
    ----------
    path : Path
        File to hash.

    Returns
    -------
    str
        Digest in format "sha256:<hex>".

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    sha256_hash = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256_hash.update(chunk)

    return format_sha256(sha256_hash.hexdigest())


def calculate_file_digest(file_bytes: bytes) -> str:
    """Hash file content already loaded in memory."""
    return format_sha256(hashlib.sha256(file_bytes).hexdigest())
