"""Recursive-descent grammar for BibTeX databases.

The grammar drives a ``Scanner`` over the whole input and produces a list of
productions, one per ``@`` construct, each holding ``Slice`` views into the
input. Turning productions into model objects is left to
``bibgrammar.parse.assembler``.

Grammar (whitespace and ``%`` comments allowed between tokens)::

    database     := (free_text '@' entry)* free_text
    entry        := comment | preamble | string | bibliography
    comment      := 'comment' group
    preamble     := 'preamble' open string ('#' string)* close
    string       := 'string' open IDENT '=' value close
    bibliography := IDENT open KEY (',' tag)* ','? close
    tag          := IDENT '=' value
    value        := braced | quoted | NUMERAL | IDENT

``open``/``close`` are ``{``/``}`` or ``(``/``)`` and must match. Reserved
keywords are compared case-insensitively.
"""

from typing import NamedTuple, TypeAlias

from bibgrammar.parse.scanner import CLOSERS, Scanner, Slice, UnexpectedInput

__all__ = [
    "CommentProduction",
    "PreambleProduction",
    "VariableProduction",
    "BibliographyProduction",
    "Production",
    "Grammar",
    "parse_productions",
    "parse_bibliography_production",
]


class CommentProduction(NamedTuple):
    span: Slice
    body: Slice


class PreambleProduction(NamedTuple):
    span: Slice
    fragments: tuple[Slice, ...]


class VariableProduction(NamedTuple):
    span: Slice
    name: Slice
    value: Slice


class BibliographyProduction(NamedTuple):
    span: Slice
    entry_type: Slice
    citation_key: Slice
    tags: tuple[tuple[Slice, Slice], ...]


Production: TypeAlias = (
    CommentProduction | PreambleProduction | VariableProduction | BibliographyProduction
)


class Grammar:
    """Single-use recursive-descent parser over one input string.

    Attributes
    ----------
    text : str
        Complete input text.
    scanner : Scanner
        Tokenizer positioned at the next unread character.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.scanner = Scanner(text)

    def database(self) -> list[Production]:
        """Parse every ``@`` construct in the input, in order.

        Returns
        -------
        list[Production]
            Productions in file order; free text yields nothing.
        """
        productions: list[Production] = []
        while (start := self.scanner.find_marker()) is not None:
            productions.append(self.entry(start))
        return productions

    def entry(self, start: int) -> Production:
        """Parse one construct whose ``@`` sits at ``start``."""
        keyword = self.scanner.identifier("entry type after '@'")
        name = keyword.text(self.text).lower()

        if name == "comment":
            body = self.scanner.group()
            return CommentProduction(self._span(start), body)
        if name == "preamble":
            return self._preamble(start)
        if name == "string":
            return self._variable(start)
        return self._bibliography(start, keyword)

    def _span(self, start: int) -> Slice:
        return Slice(start, self.scanner.pos)

    def _open(self) -> str:
        opener = self.scanner.expect("{(", "'{' or '('")
        return CLOSERS[opener]

    def _close(self, closer: str) -> None:
        self.scanner.expect(closer, f"'{closer}'")

    def _preamble(self, start: int) -> PreambleProduction:
        closer = self._open()
        fragments = [self.scanner.string()]
        while self.scanner.accept("#"):
            fragments.append(self.scanner.string())
        self._close(closer)
        return PreambleProduction(self._span(start), tuple(fragments))

    def _variable(self, start: int) -> VariableProduction:
        closer = self._open()
        name = self.scanner.identifier("string variable name")
        self.scanner.expect("=", "'='")
        value = self.scanner.value()
        self._close(closer)
        return VariableProduction(self._span(start), name, value)

    def _bibliography(self, start: int, entry_type: Slice) -> BibliographyProduction:
        closer = self._open()
        citation_key = self.scanner.identifier("citation key")
        tags: list[tuple[Slice, Slice]] = []

        while True:
            separator = self.scanner.expect("," + closer, f"',' or '{closer}'")
            if separator == closer:
                break
            # A single trailing comma may precede the closer.
            if self.scanner.accept(closer):
                break
            tags.append(self._tag())

        return BibliographyProduction(self._span(start), entry_type, citation_key, tuple(tags))

    def _tag(self) -> tuple[Slice, Slice]:
        key = self.scanner.identifier("tag name")
        self.scanner.expect("=", "'='")
        return key, self.scanner.value()


def parse_productions(text: str) -> list[Production]:
    """Parse a whole database into productions.

    Raises
    ------
    NeedMoreInput
        If the text ends inside an entry.
    UnexpectedInput
        If an entry is malformed.
    """
    return Grammar(text).database()


def parse_bibliography_production(text: str) -> BibliographyProduction:
    """Parse text holding exactly one bibliography entry.

    Leading and trailing whitespace is allowed. Free text, further entries
    and the reserved ``comment``/``preamble``/``string`` forms are not.
    """
    grammar = Grammar(text)
    scanner = grammar.scanner

    scanner.expect("@", "'@'")
    start = scanner.pos - 1
    keyword_pos = scanner.pos
    production = grammar.entry(start)
    if not isinstance(production, BibliographyProduction):
        scanner.pos = keyword_pos
        keyword = scanner.identifier("entry type after '@'")
        raise UnexpectedInput("bibliography entry type", keyword.start, keyword.text(text))

    scanner.skip_whitespace()
    if not scanner.at_end:
        raise scanner.unexpected("end of input")
    return production
