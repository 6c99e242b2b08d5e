"""Parsed BibTeX document data models.

A ``Bibtex`` document is an ordered tuple of entries. Each entry is one of
four frozen dataclasses joined into the closed ``Entry`` union; there is no
shared base class to extend.

Text fields are plain ``str`` values copied out of the input once, during
assembly. A document therefore never depends on the lifetime of the text it
was parsed from. ``Span`` offsets still refer back to that text for callers
who keep it around.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, TypeAlias

if TYPE_CHECKING:
    from bibgrammar.parse.base import ParserConfig

__all__ = [
    "Span",
    "Preamble",
    "Comment",
    "Variable",
    "BibliographyEntry",
    "Bibliography",
    "Entry",
    "Bibtex",
]


@dataclass(frozen=True)
class Span:
    """Location of an entry in the source text.

    Attributes
    ----------
    start : int
        0-based offset of the ``@`` introducing the entry.
    end : int
        Offset one past the entry's closing delimiter.
    """

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Preamble:
    """``@preamble`` entry with its string fragments concatenated.

    Attributes
    ----------
    text : str
        Concatenated fragment contents, outer delimiters stripped.
    span : Span | None
        Source location; not part of equality.
    """

    kind: ClassVar[str] = "preamble"

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Comment:
    """``@comment`` entry. The content is opaque and kept verbatim.

    Attributes
    ----------
    text : str
        Raw text between the outer delimiters.
    span : Span | None
        Source location; not part of equality.
    """

    kind: ClassVar[str] = "comment"

    text: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class Variable:
    """``@string`` entry defining a named substitution.

    Attributes
    ----------
    name : str
        Variable name as written.
    value : str
        Value with outer delimiters stripped. Bare identifiers are kept as
        the raw reference text; nothing is resolved.
    span : Span | None
        Source location; not part of equality.
    """

    kind: ClassVar[str] = "variable"

    name: str
    value: str
    span: Span | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class BibliographyEntry:
    """A citation record such as ``@article{key, title = {...}}``.

    Attributes
    ----------
    entry_type : str
        Keyword after ``@`` with its original case (e.g. 'article').
    citation_key : str
        Identifier used for cross-referencing.
    tags : tuple[tuple[str, str], ...]
        ``(key, value)`` pairs in source order. Repeated keys are kept.
    """

    entry_type: str
    citation_key: str
    tags: tuple[tuple[str, str], ...] = ()

    def keys(self) -> list[str]:
        """Return tag keys in source order, repeats included."""
        return [key for key, _ in self.tags]

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the first value whose key matches ``key`` case-insensitively.

        Parameters
        ----------
        key : str
            Tag key to look up.
        default : str | None, optional
            Returned when no tag matches, by default None.

        Returns
        -------
        str | None
            First matching value or ``default``.
        """
        wanted = key.lower()
        for tag_key, value in self.tags:
            if tag_key.lower() == wanted:
                return value
        return default

    def get_all(self, key: str) -> list[str]:
        """Return every value whose key matches ``key`` case-insensitively."""
        wanted = key.lower()
        return [value for tag_key, value in self.tags if tag_key.lower() == wanted]


@dataclass(frozen=True)
class Bibliography:
    """Entry wrapper around a ``BibliographyEntry``.

    Attributes
    ----------
    entry : BibliographyEntry
        The citation record.
    span : Span | None
        Source location; not part of equality.
    """

    kind: ClassVar[str] = "bibliography"

    entry: BibliographyEntry
    span: Span | None = field(default=None, compare=False, repr=False)


Entry: TypeAlias = Preamble | Comment | Variable | Bibliography


@dataclass(frozen=True)
class Bibtex:
    """Parsed BibTeX document.

    Attributes
    ----------
    entries : tuple[Entry, ...]
        Entries in file order. Free text between entries is not represented.
    """

    entries: tuple[Entry, ...] = ()

    @classmethod
    def parse(cls, text: str | bytes, *, config: "ParserConfig | None" = None) -> "Bibtex":
        """Parse BibTeX text into a document.

        See ``bibgrammar.api.parse``.
        """
        from bibgrammar.api import parse

        return parse(text, config=config)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    def bibliographies(self) -> list[BibliographyEntry]:
        """Return the citation records in file order."""
        return [e.entry for e in self.entries if isinstance(e, Bibliography)]

    def variables(self) -> list[Variable]:
        """Return ``@string`` definitions in file order."""
        return [e for e in self.entries if isinstance(e, Variable)]

    def preambles(self) -> list[Preamble]:
        """Return ``@preamble`` entries in file order."""
        return [e for e in self.entries if isinstance(e, Preamble)]

    def comments(self) -> list[Comment]:
        """Return ``@comment`` entries in file order."""
        return [e for e in self.entries if isinstance(e, Comment)]

    def counts(self) -> dict[str, int]:
        """Count entries per kind.

        Returns
        -------
        dict[str, int]
            Mapping of entry kind to count; every kind is present.
        """
        counts = {kind: 0 for kind in ("preamble", "comment", "variable", "bibliography")}
        for entry in self.entries:
            counts[entry.kind] += 1
        return counts
