"""Lexical scanner for BibTeX text.

The scanner walks a single string and hands out ``Slice`` views (offset
pairs) into it; it never copies text. Whitespace between tokens is skipped
and never reported. BibTeX has no comment syntax inside entries, so ``%``
there is an unexpected character like any other.

Two internal signals are raised, both carrying the offset where scanning
stopped and a description of what was expected:

- ``NeedMoreInput``: the text ended inside a construct.
- ``UnexpectedInput``: a character does not fit the current context.

Callers outside ``bibgrammar.parse`` only ever see these translated into
``bibgrammar.errors.ParsingError``.
"""

import re
from typing import NamedTuple

__all__ = [
    "Slice",
    "ScanError",
    "NeedMoreInput",
    "UnexpectedInput",
    "Scanner",
]

WHITESPACE_RE = re.compile(r"\s*")
IDENTIFIER_RE = re.compile(r"[^\s\"#%'(),={}@]+")
NUMERAL_RE = re.compile(r"[0-9]+")

_BRACE_RE = re.compile(r"[{}]")
_QUOTED_STOP_RE = re.compile(r'\\.|"', re.DOTALL)
_PAREN_STOP_RE = re.compile(r"[{})]")

CLOSERS: dict[str, str] = {"{": "}", "(": ")"}


class Slice(NamedTuple):
    """Half-open ``[start, end)`` range of the scanned text."""

    start: int
    end: int

    def text(self, source: str) -> str:
        """Return the characters of ``source`` covered by this slice."""
        return source[self.start : self.end]


class ScanError(Exception):
    """Base for scanner signals."""

    def __init__(self, expected: str, offset: int) -> None:
        super().__init__(expected)
        self.expected = expected
        self.offset = offset


class NeedMoreInput(ScanError):
    """Input ended before the current construct was complete."""


class UnexpectedInput(ScanError):
    """A character does not match what the grammar expects here."""

    def __init__(self, expected: str, offset: int, found: str) -> None:
        super().__init__(expected, offset)
        self.found = found


class Scanner:
    """Position-tracking tokenizer over one BibTeX string.

    Attributes
    ----------
    text : str
        Complete input text.
    pos : int
        Current 0-based offset into ``text``.
    """

    def __init__(self, text: str, pos: int = 0) -> None:
        self.text = text
        self.pos = pos

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def find_marker(self) -> int | None:
        """Skip free text up to the next ``@``.

        Returns
        -------
        int | None
            Offset of the ``@`` (the scanner is left just past it), or None
            when no marker remains.
        """
        index = self.text.find("@", self.pos)
        if index == -1:
            self.pos = len(self.text)
            return None
        self.pos = index + 1
        return index

    def skip_whitespace(self) -> None:
        """Skip whitespace up to the next token."""
        self.pos = WHITESPACE_RE.match(self.text, self.pos).end()

    def peek(self, expected: str) -> str:
        """Return the next significant character without consuming it.

        Raises
        ------
        NeedMoreInput
            If only whitespace is left.
        """
        self.skip_whitespace()
        if self.at_end:
            raise NeedMoreInput(expected, self.pos)
        return self.text[self.pos]

    def unexpected(self, expected: str) -> UnexpectedInput:
        """Build an ``UnexpectedInput`` for the character at the current position."""
        return UnexpectedInput(expected, self.pos, self.text[self.pos])

    def expect(self, chars: str, expected: str) -> str:
        """Consume one punctuation character out of ``chars``.

        Parameters
        ----------
        chars : str
            Acceptable characters.
        expected : str
            Description used in error messages.

        Returns
        -------
        str
            The consumed character.
        """
        char = self.peek(expected)
        if char not in chars:
            raise self.unexpected(expected)
        self.pos += 1
        return char

    def accept(self, chars: str) -> bool:
        """Consume the next character if it is one of ``chars``."""
        self.skip_whitespace()
        if not self.at_end and self.text[self.pos] in chars:
            self.pos += 1
            return True
        return False

    def identifier(self, expected: str) -> Slice:
        """Scan an identifier: keyword, citation key, tag name or reference."""
        self.peek(expected)
        match = IDENTIFIER_RE.match(self.text, self.pos)
        if match is None:
            raise self.unexpected(expected)
        self.pos = match.end()
        return Slice(match.start(), match.end())

    def numeral(self) -> Slice:
        """Scan a run of ASCII digits."""
        match = NUMERAL_RE.match(self.text, self.pos)
        if match is None:
            raise self.unexpected("digits")
        self.pos = match.end()
        return Slice(match.start(), match.end())

    def braced(self) -> Slice:
        """Scan a balanced ``{...}`` group starting at the current position.

        Returns
        -------
        Slice
            Contents between the outermost braces; inner braces included.
        """
        start = self.pos
        depth = 0
        for match in _BRACE_RE.finditer(self.text, start):
            if match.group() == "{":
                depth += 1
                continue
            depth -= 1
            if depth == 0:
                self.pos = match.end()
                return Slice(start + 1, match.start())
        self.pos = len(self.text)
        raise NeedMoreInput("closing '}'", self.pos)

    def quoted(self) -> Slice:
        """Scan a ``"..."`` group starting at the current position.

        The group ends at the first unescaped ``"``. A backslash escapes the
        character after it, so ``\\"`` is kept and ``\\\\"`` closes the group.
        Braces inside are kept verbatim and need not balance.
        """
        start = self.pos
        for match in _QUOTED_STOP_RE.finditer(self.text, start + 1):
            if match.group() == '"':
                self.pos = match.end()
                return Slice(start + 1, match.start())
        self.pos = len(self.text)
        raise NeedMoreInput("closing '\"'", self.pos)

    def parenthesized(self) -> Slice:
        """Scan a ``(...)`` group starting at the current position.

        The group ends at the first ``)`` outside braces. Braces inside must
        balance.
        """
        start = self.pos
        depth = 0
        for match in _PAREN_STOP_RE.finditer(self.text, start + 1):
            token = match.group()
            if token == "{":
                depth += 1
            elif token == "}":
                if depth == 0:
                    raise UnexpectedInput("')' or balanced braces", match.start(), token)
                depth -= 1
            elif depth == 0:
                self.pos = match.end()
                return Slice(start + 1, match.start())
        self.pos = len(self.text)
        raise NeedMoreInput("closing ')'", self.pos)

    def group(self) -> Slice:
        """Scan a raw ``{...}`` or ``(...)`` group after optional whitespace."""
        char = self.peek("'{' or '('")
        if char == "{":
            return self.braced()
        if char == "(":
            return self.parenthesized()
        raise self.unexpected("'{' or '('")

    def string(self) -> Slice:
        """Scan a braced or quoted string after optional whitespace."""
        char = self.peek("quoted or braced string")
        if char == "{":
            return self.braced()
        if char == '"':
            return self.quoted()
        raise self.unexpected("quoted or braced string")

    def value(self) -> Slice:
        """Scan a field value: braced, quoted, numeral or bare reference.

        Returns
        -------
        Slice
            Value text with outer delimiters stripped.
        """
        char = self.peek("field value")
        if char == "{":
            return self.braced()
        if char == '"':
            return self.quoted()
        if char in "0123456789":
            return self.numeral()
        return self.identifier("field value")
