"""Public error type raised by the BibTeX parser."""

from enum import StrEnum

__all__ = ["ErrorKind", "ParsingError"]


class ErrorKind(StrEnum):
    """Failure class of a parse.

    The distinction is informational: both kinds abort the parse and are
    raised as the same ``ParsingError``.
    """

    INCOMPLETE = "incomplete"
    SYNTAX = "syntax"


class ParsingError(Exception):
    """Raised when BibTeX input cannot be parsed.

    Attributes
    ----------
    message : str
        Human-readable description of the failure.
    kind : ErrorKind
        Whether the input ended too early or contained an unexpected token.
    offset : int | None
        0-based character offset where the failure was detected.
    line : int | None
        1-based line of ``offset``.
    column : int | None
        1-based column of ``offset``.
    """

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.SYNTAX,
        offset: int | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize parsing error.

        Parameters
        ----------
        message : str
            Error message.
        kind : ErrorKind, optional
            Failure class, by default ``ErrorKind.SYNTAX``.
        offset : int | None, optional
            Character offset of the failure.
        line : int | None, optional
            1-based line number of the failure.
        column : int | None, optional
            1-based column number of the failure.
        """
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.offset = offset
        self.line = line
        self.column = column

    def __reduce__(self) -> tuple[type["ParsingError"], tuple[object, ...]]:
        return (
            self.__class__,
            (self.message, self.kind, self.offset, self.line, self.column),
        )

    @property
    def is_incomplete(self) -> bool:
        """Whether the input ended inside an unterminated construct."""
        return self.kind is ErrorKind.INCOMPLETE

    def to_dict(self) -> dict[str, str | int | None]:
        """Convert to dictionary."""
        return {
            "kind": self.kind.value,
            "message": self.message,
            "offset": self.offset,
            "line": self.line,
            "column": self.column,
        }
