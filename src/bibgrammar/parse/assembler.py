"""Map grammar productions onto the public data model."""

from bibgrammar.models import (
    Bibliography,
    BibliographyEntry,
    Bibtex,
    Comment,
    Entry,
    Preamble,
    Span,
    Variable,
)
from bibgrammar.parse.grammar import (
    BibliographyProduction,
    CommentProduction,
    PreambleProduction,
    Production,
    VariableProduction,
)

__all__ = ["assemble", "assemble_entry", "assemble_bibliography"]


def assemble(text: str, productions: list[Production]) -> Bibtex:
    """Build a document from productions, keeping their order.

    Parameters
    ----------
    text : str
        Text the productions were parsed from.
    productions : list[Production]
        Grammar output.

    Returns
    -------
    Bibtex
        Immutable document.
    """
    return Bibtex(tuple(assemble_entry(text, p) for p in productions))


def assemble_entry(text: str, production: Production) -> Entry:
    """Convert one production into its entry variant."""
    span = Span(production.span.start, production.span.end)

    if isinstance(production, CommentProduction):
        return Comment(production.body.text(text), span=span)
    if isinstance(production, PreambleProduction):
        return Preamble("".join(f.text(text) for f in production.fragments), span=span)
    if isinstance(production, VariableProduction):
        return Variable(production.name.text(text), production.value.text(text), span=span)
    if isinstance(production, BibliographyProduction):
        return Bibliography(assemble_bibliography(text, production), span=span)
    raise TypeError(f"Unknown production: {type(production).__name__}")


def assemble_bibliography(text: str, production: BibliographyProduction) -> BibliographyEntry:
    """Convert a bibliography production into a ``BibliographyEntry``."""
    return BibliographyEntry(
        entry_type=production.entry_type.text(text),
        citation_key=production.citation_key.text(text),
        tags=tuple((key.text(text), value.text(text)) for key, value in production.tags),
    )
