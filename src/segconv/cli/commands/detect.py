"""Detect command - report input format and inferred separators."""

import json

import click

from ...detection import classify
from ..helpers import fail, read_source


@click.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--content-type", help="Declared media type; skips sniffing when decisive")
def detect(source, content_type):
    """Print the detected format of SOURCE as JSON.

    Output: {"format": "string", "separators": {"element": "*", "segment": "~"}}
    """
    text = read_source(source)
    try:
        detection = classify(text, content_type)
    except Exception as e:
        fail(e)
        return

    click.echo(json.dumps(detection.to_dict()))
