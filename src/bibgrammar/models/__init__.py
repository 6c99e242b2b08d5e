"""Data types for parsed BibTeX documents."""

from bibgrammar.models.entries import (
    Bibliography,
    BibliographyEntry,
    Bibtex,
    Comment,
    Entry,
    Preamble,
    Span,
    Variable,
)

__all__ = [
    # Document
    "Bibtex",
    # Entry variants
    "Entry",
    "Preamble",
    "Comment",
    "Variable",
    "Bibliography",
    "BibliographyEntry",
    # Location
    "Span",
]
