"""Pytest configuration and shared fixtures."""

import pytest
from click.testing import CliRunner

from segconv.cli import cli
from segconv.config import LOG_LEVEL_ENV, STRICT_ENV
from segconv.models import Document, Segment, Separators


@pytest.fixture(autouse=True)
def clean_segconv_env(monkeypatch):
    """Keep host SEGCONV_* variables from leaking into tests."""
    monkeypatch.delenv(STRICT_ENV, raising=False)
    monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)


@pytest.fixture
def cli_runner():
    """Provide Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner):
    """Helper to invoke the CLI with args and optional input.

    Usage:
        result = invoke(["convert", "--to", "json"], input_data="A*1~")
        result = invoke(["detect", str(path)])
    """

    def _invoke(args, input_data=None):
        return cli_runner.invoke(cli, args, input=input_data)

    return _invoke


@pytest.fixture
def star_tilde():
    return Separators(element="*", segment="~")


@pytest.fixture
def pipe_newline():
    return Separators(element="|", segment="\n")


@pytest.fixture
def sample_flat():
    return "ProductID*4*8*15~AddressID*42*108~"


@pytest.fixture
def interleaved_document():
    """Repeated identifiers out of group order, with empty elements."""
    return Document(
        segments=[
            Segment(segment_id="ISA", elements=["00", "", "ZZ"]),
            Segment(segment_id="N1", elements=["ST", "Acme"]),
            Segment(segment_id="REF", elements=[]),
            Segment(segment_id="N1", elements=["BT", "", "Acme Billing"]),
            Segment(segment_id="ISA", elements=["01"]),
        ],
        metadata={"endsWithSeparator": True},
    )
