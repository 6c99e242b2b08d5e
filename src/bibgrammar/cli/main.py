"""Command-line interface for bibgrammar.

Provides CLI commands to parse, check and summarise BibTeX files.
"""

import importlib.metadata
import sys
import time
from collections import Counter
from contextlib import nullcontext
from pathlib import Path

import click

from bibgrammar.audit import AuditLogger, generate_run_id
from bibgrammar.errors import ParsingError
from bibgrammar.models import Bibtex
from bibgrammar.parse import ParserConfig, decode_input, parse_text
from bibgrammar.utils import calculate_file_digest, calculate_file_sha256

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("bibgrammar")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.3.0"  # Fallback for development


def _build_config(encoding: str | None) -> ParserConfig:
    try:
        return ParserConfig(encoding=encoding)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--encoding") from e


def _open_audit(audit_log: str | None) -> AuditLogger | nullcontext:
    if audit_log is None:
        return nullcontext()
    return AuditLogger(run_id=generate_run_id(), log_path=Path(audit_log))


def _parse_path(
    path: Path,
    config: ParserConfig,
    audit: AuditLogger | None,
) -> Bibtex:
    """Parse one file, recording the outcome in the audit log."""
    file_bytes = path.read_bytes()
    text = decode_input(file_bytes, config)
    try:
        document = parse_text(text)
    except ParsingError as e:
        if audit is not None:
            audit.parse_failed(str(path), e)
        raise

    if audit is not None:
        audit.file_parsed(str(path), calculate_file_digest(file_bytes), document.counts())
    return document


encoding_option = click.option(
    "--encoding",
    type=str,
    default=None,
    help="Input encoding (default: detect UTF-8 BOM, UTF-8, then latin-1)",
)
audit_option = click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append JSONL audit events to this file",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)


@click.group()
@click.version_option(version=__version__, prog_name="bibgrammar")
def cli() -> None:
    """Grammar-based parser for BibTeX databases.

    Use 'bibgrammar COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    required=True,
    help="Output JSONL file path",
)
@click.option(
    "--validate",
    is_flag=True,
    help="Validate every exported entry against the JSON schema",
)
@encoding_option
@audit_option
@verbose_option
def parse(
    input_path: str,
    output: str,
    validate: bool,
    encoding: str | None,
    audit_log: str | None,
    verbose: bool,
) -> None:
    """Parse a BibTeX file to JSONL, one entry per line.

    Examples
    --------
        bibgrammar parse references.bib -o entries.jsonl
        bibgrammar parse refs.bib -o out/entries.jsonl --validate --audit-log run.jsonl
    """
    from bibgrammar import write_jsonl

    config = _build_config(encoding)
    started = time.perf_counter()

    with _open_audit(audit_log) as audit:
        if audit is not None:
            audit.run_started(
                sys.argv,
                {"command": "parse", "validate": validate, **config.to_dict()},
            )
        try:
            if verbose:
                click.echo(f"Parsing file: {input_path}", err=True)

            document = _parse_path(Path(input_path), config, audit)

            if verbose:
                click.echo(f"Found {len(document)} entries", err=True)
                click.echo(f"Writing to: {output}", err=True)

            count = write_jsonl(document, output, validate=validate)

            if audit is not None:
                output_path = Path(output)
                audit.artifact_written(
                    str(output_path),
                    calculate_file_sha256(output_path),
                    bytes_written=output_path.stat().st_size,
                    record_count=count,
                )
                audit.run_finished("success", time.perf_counter() - started, files_processed=1)

            click.secho(f"✓ Successfully wrote {count} entries to {output}", fg="green")

        except ParsingError as e:
            if audit is not None:
                audit.run_finished("failed", time.perf_counter() - started, files_processed=1)
            click.secho(f"Error: {input_path}: {e}", fg="red", err=True)
            sys.exit(1)
        except Exception as e:
            if audit is not None:
                audit.error(type(e).__name__, str(e), source=input_path)
                audit.run_finished("failed", time.perf_counter() - started, files_processed=1)
            click.secho(f"Error: {e}", fg="red", err=True)
            sys.exit(1)


@cli.command()
@click.argument(
    "input_paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False),
)
@encoding_option
@audit_option
@verbose_option
def check(
    input_paths: tuple[str, ...],
    encoding: str | None,
    audit_log: str | None,
    verbose: bool,
) -> None:
    """Check that each BibTeX file in INPUT_PATHS parses.

    Prints OK with entry counts, or the first error with its line and
    column. Exits with status 1 if any file fails.

    Examples
    --------
        bibgrammar check references.bib
        bibgrammar check *.bib --audit-log check.jsonl
    """
    config = _build_config(encoding)
    started = time.perf_counter()
    failures = 0

    with _open_audit(audit_log) as audit:
        if audit is not None:
            audit.run_started(sys.argv, {"command": "check", **config.to_dict()})

        for input_path in input_paths:
            try:
                document = _parse_path(Path(input_path), config, audit)
            except ParsingError as e:
                failures += 1
                click.secho(f"FAIL {input_path}: {e}", fg="red")
                continue
            except (OSError, UnicodeDecodeError) as e:
                failures += 1
                if audit is not None:
                    audit.error(type(e).__name__, str(e), source=input_path)
                click.secho(f"FAIL {input_path}: {e}", fg="red")
                continue

            counts = document.counts()
            summary = ", ".join(f"{counts[kind]} {kind}" for kind in counts if counts[kind])
            click.secho(f"OK   {input_path} ({summary or 'no entries'})", fg="green")
            if verbose:
                for entry in document.bibliographies():
                    click.echo(f"     @{entry.entry_type}{{{entry.citation_key}}}", err=True)

        if audit is not None:
            status = "success" if failures == 0 else "failed"
            audit.run_finished(status, time.perf_counter() - started, len(input_paths))

    if failures:
        sys.exit(1)


@cli.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@encoding_option
def stats(input_path: str, encoding: str | None) -> None:
    """Print entry counts per kind and per entry type for INPUT_PATH.

    Examples
    --------
        bibgrammar stats references.bib
    """
    config = _build_config(encoding)

    try:
        document = _parse_path(Path(input_path), config, None)
    except (ParsingError, OSError, UnicodeDecodeError) as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        sys.exit(1)

    click.echo(f"Entries: {len(document)}")
    for kind, count in document.counts().items():
        click.echo(f"  {kind}: {count}")

    types = Counter(entry.entry_type.lower() for entry in document.bibliographies())
    if types:
        click.echo("Entry types:")
        for entry_type, count in sorted(types.items()):
            click.echo(f"  {entry_type}: {count}")


if __name__ == "__main__":
    cli()
