"""BibTeX parsing engine.

Layers, leaves first:
- scanner: tokens as offset slices, with incomplete/unexpected signals
- grammar: recursive-descent productions over the scanner
- assembler: productions to ``bibgrammar.models`` values
- translate: scanner signals to ``ParsingError``

Main entry points:
- parse_text: Parse a whole database
- parse_single_entry: Parse exactly one bibliography entry
"""

from bibgrammar.models import BibliographyEntry, Bibtex
from bibgrammar.parse.assembler import assemble, assemble_bibliography
from bibgrammar.parse.base import ParserConfig, decode_input, detect_encoding
from bibgrammar.parse.grammar import parse_bibliography_production, parse_productions
from bibgrammar.parse.translate import translating_errors

__all__ = [
    "ParserConfig",
    "decode_input",
    "detect_encoding",
    "parse_text",
    "parse_single_entry",
]


def parse_text(text: str) -> Bibtex:
    """Parse a complete BibTeX database.

    Raises
    ------
    ParsingError
        On incomplete or malformed input. No partial document is returned.
    """
    with translating_errors(text):
        productions = parse_productions(text)
    return assemble(text, productions)


def parse_single_entry(text: str) -> BibliographyEntry:
    """Parse text containing exactly one bibliography entry.

    Raises
    ------
    ParsingError
        If the text is not a single well-formed bibliography entry.
    """
    with translating_errors(text):
        production = parse_bibliography_production(text)
    return assemble_bibliography(text, production)
