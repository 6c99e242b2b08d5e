"""Public API for parsing BibTeX databases.

This module provides the main public API for bibgrammar, enabling:
- Parsing text, bytes and files into ``Bibtex`` documents
- Parsing a single bibliography entry
- Exporting documents to JSONL format
"""

import json
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

import jsonschema

from bibgrammar.errors import ParsingError
from bibgrammar.models import Bibliography, BibliographyEntry, Bibtex, Comment, Entry, Preamble
from bibgrammar.parse import ParserConfig, decode_input, parse_single_entry, parse_text

__all__ = [
    "parse",
    "parse_entry",
    "parse_file",
    "entry_to_dict",
    "load_entry_schema",
    "write_jsonl",
    "ParsingError",
]


def parse(text: str | bytes, *, config: ParserConfig | None = None) -> Bibtex:
    """Parse the full content of a BibTeX database.

    The call is pure: it reads nothing but ``text`` and shares no state, so
    independent calls may run on separate threads.

    Parameters
    ----------
    text : str | bytes
        Database content. Bytes are decoded per ``config``.
    config : ParserConfig | None, optional
        Decoding options for bytes input.

    Returns
    -------
    Bibtex
        Entries in file order. Every text field is an independent copy,
        so the document does not depend on ``text`` staying alive.

    Raises
    ------
    ParsingError
        If the input is incomplete or malformed. Nothing is returned for
        the entries that parsed before the failure.

    Examples
    --------
        >>> from bibgrammar import parse
        >>> doc = parse('@string{abc = "value"}')
        >>> doc.entries
        (Variable(name='abc', value='value'),)
    """
    return parse_text(decode_input(text, config))


def parse_entry(text: str | bytes, *, config: ParserConfig | None = None) -> BibliographyEntry:
    """Parse text holding exactly one bibliography entry.

    Parameters
    ----------
    text : str | bytes
        Text such as ``@article{key, title = {T}}``.
    config : ParserConfig | None, optional
        Decoding options for bytes input.

    Returns
    -------
    BibliographyEntry
        The parsed record.

    Raises
    ------
    ParsingError
        If the text is malformed, holds anything besides one entry, or is a
        ``@comment``/``@preamble``/``@string`` construct.
    """
    return parse_single_entry(decode_input(text, config))


def parse_file(path: str | Path, *, config: ParserConfig | None = None) -> Bibtex:
    """Read a ``.bib`` file and parse it.

    Parameters
    ----------
    path : str | Path
        Path to file to parse.
    config : ParserConfig | None, optional
        Decoding options; the encoding is detected when not given.

    Returns
    -------
    Bibtex
        Parsed document.

    Raises
    ------
    FileNotFoundError
        If file does not exist.
    ParsingError
        If the content cannot be parsed.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    return parse(file_path.read_bytes(), config=config)


def entry_to_dict(entry: Entry) -> dict[str, Any]:
    """Convert an entry to a JSON-compatible dictionary.

    Parameters
    ----------
    entry : Entry
        Any entry variant.

    Returns
    -------
    dict[str, Any]
        Object with a ``kind`` discriminator, the variant's fields and its
        ``span`` (or None for hand-built entries).
    """
    span = {"start": entry.span.start, "end": entry.span.end} if entry.span else None

    if isinstance(entry, Bibliography):
        record = entry.entry
        return {
            "kind": entry.kind,
            "entry_type": record.entry_type,
            "citation_key": record.citation_key,
            "tags": [[key, value] for key, value in record.tags],
            "span": span,
        }
    if isinstance(entry, (Preamble, Comment)):
        return {"kind": entry.kind, "text": entry.text, "span": span}
    return {"kind": entry.kind, "name": entry.name, "value": entry.value, "span": span}


@cache
def load_entry_schema() -> dict[str, Any]:
    """Load the JSON Schema describing one exported entry."""
    schema_file = resources.files("bibgrammar") / "schemas" / "entry.schema.json"
    return json.loads(schema_file.read_text(encoding="utf-8"))


def write_jsonl(
    document: Bibtex,
    path: str | Path,
    *,
    validate: bool = False,
    sort_keys: bool = True,
) -> int:
    """Write entries to JSONL file (one JSON object per line).

    Output is deterministic with consistent field ordering and UTF-8 encoding.

    Parameters
    ----------
    document : Bibtex
        Document to export.
    path : str | Path
        Output file path. Parent directories are created.
    validate : bool, optional
        Check every object against the entry schema before writing,
        by default False.
    sort_keys : bool, optional
        Whether to sort dictionary keys, by default True.

    Returns
    -------
    int
        Number of lines written.

    Raises
    ------
    jsonschema.ValidationError
        If ``validate`` is set and an object does not match the schema.
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    rows = [entry_to_dict(entry) for entry in document]
    if validate:
        schema = load_entry_schema()
        for row in rows:
            jsonschema.validate(instance=row, schema=schema)

    with output_path.open("w", encoding="utf-8") as f:
        for row in rows:
            f.write(json.dumps(row, ensure_ascii=False, sort_keys=sort_keys))
            f.write("\n")

    return len(rows)
