"""Translate scanner signals into the public ``ParsingError``."""

from collections.abc import Iterator
from contextlib import contextmanager

from bibgrammar.errors import ErrorKind, ParsingError
from bibgrammar.parse.scanner import NeedMoreInput, ScanError, UnexpectedInput

__all__ = ["locate", "to_parsing_error", "translating_errors"]


def locate(text: str, offset: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of ``offset`` in ``text``."""
    line = text.count("\n", 0, offset) + 1
    line_start = text.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def _describe(found: str) -> str:
    if found == "\n":
        return "newline"
    return repr(found)


def to_parsing_error(exc: ScanError, text: str) -> ParsingError:
    """Convert a scanner signal into a ``ParsingError``.

    Parameters
    ----------
    exc : ScanError
        ``NeedMoreInput`` or ``UnexpectedInput`` raised while parsing.
    text : str
        Text being parsed, used to compute line and column.

    Returns
    -------
    ParsingError
        INCOMPLETE for ``NeedMoreInput``, SYNTAX otherwise.
    """
    line, column = locate(text, exc.offset)

    if isinstance(exc, NeedMoreInput):
        message = (
            f"Incomplete input: expected {exc.expected} "
            f"at line {line}, column {column} but reached end of input"
        )
        kind = ErrorKind.INCOMPLETE
    elif isinstance(exc, UnexpectedInput):
        message = (
            f"Syntax error at line {line}, column {column}: "
            f"expected {exc.expected}, found {_describe(exc.found)}"
        )
        kind = ErrorKind.SYNTAX
    else:
        message = f"Syntax error at line {line}, column {column}: {exc.expected}"
        kind = ErrorKind.SYNTAX

    return ParsingError(message, kind=kind, offset=exc.offset, line=line, column=column)


@contextmanager
def translating_errors(text: str) -> Iterator[None]:
    """Re-raise scanner signals from the block as ``ParsingError``."""
    try:
        yield
    except ScanError as exc:
        raise to_parsing_error(exc, text) from None
