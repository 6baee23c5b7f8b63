"""Convert command - translate between flat text, JSON and XML."""

import json

import click

from ...context import pass_context
from ...converter import FORMATS
from ...service import ConversionRequest, run_conversion
from ..helpers import build_separators, fail, read_source


@click.command()
@click.argument("source", type=click.File("rb"), default="-")
@click.option(
    "-t",
    "--to",
    "output_format",
    type=click.Choice(FORMATS, case_sensitive=False),
    required=True,
    help="Target format",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Keep empty elements (default: $SEGCONV_DEFAULT_STRICT_MODE or strict)",
)
@click.option("--element", help="Element separator character (e.g. '*')")
@click.option("--segment", help="Segment separator character (e.g. '~' or '\\n')")
@click.option("--content-type", help="Declared media type of the input")
@click.option("--raw", is_flag=True, help="Print JSON data without the envelope")
@pass_context
def convert(ctx, source, output_format, strict, element, segment, content_type, raw):
    """Convert SOURCE (file or '-' for stdin) to another format.

    The input format is auto-detected. Flat-text separators are inferred
    unless --element and --segment are given.

    Examples:
        segconv convert orders.edi --to json
        segconv convert orders.edi --to xml --no-strict
        echo '{"segments": []}' | segconv convert --to string --element '|' --segment '\\n'
    """
    separators = build_separators(element, segment)
    text = read_source(source)

    try:
        request = ConversionRequest(
            input=text,
            output_format=output_format,
            strict=strict,
            separators=separators,
            content_type=content_type,
        )
        response = run_conversion(request, ctx.get_settings())
    except Exception as e:
        fail(e)
        return

    if response.is_json:
        payload = response.data["data"] if raw else response.data
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    elif output_format.lower() == "string":
        click.echo(response.data, nl=False)
    else:
        click.echo(response.data)
