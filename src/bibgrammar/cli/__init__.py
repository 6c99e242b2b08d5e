"""Command-line interface for bibgrammar."""

from bibgrammar.cli.main import cli

__all__ = ["cli"]
