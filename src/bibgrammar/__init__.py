"""Grammar-based parser for BibTeX databases.

This package provides:
- Data models (bibgrammar.models): documents and entry variants
- Parsing (bibgrammar.parse): scanner, grammar, assembler, error translation
- Errors (bibgrammar.errors): ParsingError and ErrorKind
- Audit (bibgrammar.audit): JSONL event logging
- CLI (bibgrammar.cli): command-line interface
- Public API (bibgrammar.api): high-level convenience functions
"""

__version__ = "0.3.0"
__license__ = "MIT"

from bibgrammar.api import parse, parse_entry, parse_file, write_jsonl
from bibgrammar.errors import ErrorKind, ParsingError
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
from bibgrammar.parse import ParserConfig

__all__ = [
    "__version__",
    "__license__",
    "parse",
    "parse_entry",
    "parse_file",
    "write_jsonl",
    "Bibtex",
    "Entry",
    "Preamble",
    "Comment",
    "Variable",
    "Bibliography",
    "BibliographyEntry",
    "Span",
    "ParsingError",
    "ErrorKind",
    "ParserConfig",
]
