"""CLI helper utilities shared across commands."""

import sys
from typing import Optional

import click
from pydantic import ValidationError

from ..models import Separators
from ..service import error_response

_ESCAPES = {"\\n": "\n", "\\t": "\t", "\\r": "\r", "\\\\": "\\"}


def unescape_separator(value: str) -> str:
    """Turn shell-friendly escapes such as ``\\n`` into the character."""
    return _ESCAPES.get(value, value)


def build_separators(
    element: Optional[str], segment: Optional[str]
) -> Optional[Separators]:
    """Build Separators from --element/--segment, None when both omitted.

    Raises:
        click.UsageError: only one of the two was given
        click.BadParameter: not single, distinct characters
    """
    if element is None and segment is None:
        return None
    if element is None or segment is None:
        raise click.UsageError("--element and --segment must be given together")

    try:
        return Separators(
            element=unescape_separator(element),
            segment=unescape_separator(segment),
        )
    except ValidationError as e:
        raise click.BadParameter(
            f"separators must be two different single characters ({e.error_count()} error(s))"
        ) from e


def read_source(source) -> str:
    """Read a binary click.File as UTF-8 without newline translation."""
    try:
        return source.read().decode("utf-8")
    except UnicodeDecodeError as e:
        raise click.FileError(source.name, hint=f"not valid UTF-8: {e}") from e


def fail(error: Exception) -> None:
    """Report a conversion failure on stderr and exit with status 1."""
    response = error_response(error)
    click.echo(f"Error: {response.error}: {response.message}", err=True)
    sys.exit(1)
