"""Parser configuration and input decoding."""

import codecs
from dataclasses import asdict, dataclass
from typing import Any

__all__ = ["ParserConfig", "detect_encoding", "decode_input"]

_ERROR_HANDLERS = frozenset(
    {"strict", "ignore", "replace", "backslashreplace", "surrogateescape"}
)


@dataclass(frozen=True)
class ParserConfig:
    """Options controlling how raw input is turned into text.

    Attributes
    ----------
    encoding : str | None
        Codec for ``bytes`` input. If None, detected with
        ``detect_encoding``. Ignored for ``str`` input.
    errors : str
        Codec error handler used when decoding (default: 'strict').
    """

    encoding: str | None = None
    errors: str = "strict"

    def __post_init__(self) -> None:
        """Validate codec and error handler."""
        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                raise ValueError(f"Unknown encoding: {self.encoding!r}") from None

        if self.errors not in _ERROR_HANDLERS:
            raise ValueError(
                f"errors must be one of {sorted(_ERROR_HANDLERS)}, got {self.errors!r}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def detect_encoding(file_bytes: bytes) -> str:
    """Detect encoding of file bytes using deterministic strategy.

    Parameters
    ----------
    file_bytes : bytes
        Complete file content as bytes.

    Returns
    -------
    str
        'utf-8-sig' when a UTF-8 BOM is present, else 'utf-8' if the bytes
        decode cleanly, else 'latin-1'.
    """
    if file_bytes.startswith(codecs.BOM_UTF8):
        return "utf-8-sig"

    try:
        file_bytes.decode("utf-8")
        return "utf-8"
    except UnicodeDecodeError:
        pass

    return "latin-1"


def decode_input(data: str | bytes, config: ParserConfig | None = None) -> str:
    """Return ``data`` as text, decoding ``bytes`` per ``config``.

    Raises
    ------
    UnicodeDecodeError
        If an explicit encoding cannot decode the bytes under 'strict'.
    """
    if isinstance(data, str):
        return data

    config = config or ParserConfig()
    encoding = config.encoding or detect_encoding(data)
    return data.decode(encoding, config.errors)
