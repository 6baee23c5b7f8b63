import json


def test_detect_flat_text(invoke, sample_flat):
    res = invoke(["detect"], input_data=sample_flat)
    assert res.exit_code == 0
    assert json.loads(res.output) == {
        "format": "string",
        "separators": {"element": "*", "segment": "~"},
    }


def test_detect_newline_separated_file(invoke, tmp_path):
    source = tmp_path / "rows.txt"
    source.write_text("a|1\nb|2\n")

    res = invoke(["detect", str(source)])
    assert res.exit_code == 0
    assert json.loads(res.output)["separators"] == {"element": "|", "segment": "\n"}


def test_detect_json_and_xml(invoke):
    assert json.loads(invoke(["detect"], input_data='{"a": 1}').output) == {"format": "json"}
    assert json.loads(invoke(["detect"], input_data="<root><a>1</a></root>").output) == {
        "format": "xml"
    }


def test_detect_plain_text_has_no_separators(invoke):
    res = invoke(["detect"], input_data="plain text")
    assert json.loads(res.output) == {"format": "string"}


def test_detect_content_type_override(invoke):
    res = invoke(["detect", "--content-type", "application/json"], input_data="plain")
    assert json.loads(res.output) == {"format": "json"}


def test_detect_empty_input(invoke):
    res = invoke(["detect"], input_data="   \n")
    assert res.exit_code == 1
    assert "Error: Empty input" in res.output


def test_verbose_flag_is_accepted(invoke):
    res = invoke(["--verbose", "detect"], input_data="A*1~")
    assert res.exit_code == 0


def test_cli_package_exposes_group_and_entry_point():
    import click

    import segconv.cli
    from segconv.cli.main import main

    assert isinstance(segconv.cli.cli, click.Group)
    # importing the submodule shadows the lazy name, so ask the hook
    assert segconv.cli.__getattr__("main") is main
