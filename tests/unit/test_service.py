"""Tests for request validation, detection and error mapping."""

import pytest

from segconv.config import Settings
from segconv.exceptions import (
    EmptyInputError,
    InvalidRequestError,
    SeparatorsUnavailableError,
)
from segconv.models import Separators
from segconv.service import (
    ConversionRequest,
    ConversionResponse,
    ErrorResponse,
    detect_input_format,
    error_response,
    handle_request,
    validate_request,
    validate_separators,
)

LENIENT = Settings(default_strict=False, log_level="WARNING")


def test_string_to_json_envelope(sample_flat):
    response = handle_request({"input": sample_flat, "outputFormat": "json"})

    assert isinstance(response, ConversionResponse)
    assert response.content_type == "application/json"
    assert response.is_json is True
    assert response.data == {
        "success": True,
        "inputFormat": "string",
        "outputFormat": "json",
        "strict": True,
        "data": {
            "segments": [
                {"segment_id": "ProductID", "elements": ["4", "8", "15"]},
                {"segment_id": "AddressID", "elements": ["42", "108"]},
            ]
        },
    }


def test_output_format_is_case_insensitive(sample_flat):
    response = handle_request({"input": sample_flat, "outputFormat": "XML"})
    assert response.content_type == "application/xml"
    assert response.is_json is False
    assert "<ProductID1>4</ProductID1>" in response.data
    assert "_order" not in response.data
    assert "_metadata" not in response.data


def test_json_to_string_with_custom_separators():
    response = handle_request(
        {
            "input": {"segments": [{"segment_id": "A", "elements": ["1", "2"]}]},
            "outputFormat": "string",
            "separators": {"element": "|", "segment": "\n"},
        }
    )
    assert response.content_type == "text/plain"
    assert response.data == "A|1|2"


def test_custom_separators_override_inference():
    response = handle_request(
        {
            "input": "a;1|b;2|",
            "outputFormat": "json",
            "separators": {"element": ";", "segment": "|"},
        }
    )
    assert [s["segment_id"] for s in response.data["data"]["segments"]] == ["a", "b"]


def test_strict_falls_back_to_settings():
    response = handle_request({"input": "A*4**15~", "outputFormat": "json"}, LENIENT)
    assert response.data["strict"] is False
    assert response.data["data"]["segments"][0]["elements"] == ["4", "15"]


def test_explicit_strict_wins_over_settings():
    response = handle_request(
        {"input": "A*4**15~", "outputFormat": "json", "strict": True}, LENIENT
    )
    assert response.data["data"]["segments"][0]["elements"] == ["4", "", "15"]


def test_xml_identity_is_cleaned(sample_flat):
    xml = handle_request({"input": sample_flat, "outputFormat": "xml", "strict": True})
    again = handle_request({"input": xml.data, "outputFormat": "xml"})
    assert again.data == xml.data


def test_xml_to_string_round_trip(sample_flat):
    from segconv.converter import convert

    xml = convert(sample_flat, "string", "xml", Separators(element="*", segment="~"))
    response = handle_request(
        {
            "input": xml,
            "outputFormat": "string",
            "separators": {"element": "*", "segment": "~"},
        }
    )
    assert response.data == sample_flat


@pytest.mark.parametrize(
    "payload, status, error",
    [
        ({"outputFormat": "json"}, 400, "Missing required parameter"),
        ({"input": "", "outputFormat": "json"}, 400, "Missing required parameter"),
        ({"input": "A*1~"}, 400, "Missing required parameter"),
        ({"input": "A*1~", "outputFormat": "yaml"}, 400, "Invalid output format"),
        ({"input": "   ", "outputFormat": "json"}, 400, "Empty input"),
        ({"input": "plain text", "outputFormat": "json"}, 400, "Unable to detect separators"),
        (
            {"input": "A*1~", "outputFormat": "json", "separators": {"element": "**"}},
            400,
            "Invalid request",
        ),
        (None, 400, "Missing required parameter"),
    ],
)
def test_request_errors(payload, status, error):
    response = handle_request(payload)
    assert isinstance(response, ErrorResponse)
    assert response.status == status
    assert response.error == error


def test_malformed_xml_input():
    response = handle_request(
        {"input": "<?xml version='1.0'?><root><A></root>", "outputFormat": "json"}
    )
    assert response.status == 400
    assert response.body() == {
        "error": "Invalid XML input",
        "message": "The provided XML data is malformed",
    }


def test_malformed_json_input_declared_by_content_type():
    response = handle_request(
        {
            "input": '{"segments": [',
            "outputFormat": "xml",
            "contentType": "application/json",
        }
    )
    assert response.status == 400
    assert response.error == "Invalid JSON input"


def test_unexpected_error_is_generic_500():
    response = error_response(RuntimeError("database password is hunter2"))
    assert response.status == 500
    assert response.body() == {
        "error": "Internal server error",
        "message": "An error occurred during conversion",
    }


@pytest.mark.parametrize("segment_id", ["_metadata", "@a"])
def test_segment_identifier_unusable_in_xml_is_rejected(segment_id):
    response = handle_request(
        {
            "input": {"segments": [{"segment_id": segment_id, "elements": ["x"]}]},
            "outputFormat": "xml",
        }
    )
    assert isinstance(response, ErrorResponse)
    assert response.status == 400
    assert response.error == "Unsupported segment identifier"
    assert segment_id in response.message


def test_deeply_nested_json_is_malformed():
    response = handle_request(
        {
            "input": "[" * 100000,
            "outputFormat": "xml",
            "contentType": "application/json",
        }
    )
    assert response.status == 400
    assert response.error == "Invalid JSON input"


def test_validate_request_returns_normalized_format():
    assert validate_request("A*1~", "String") == "string"

    with pytest.raises(InvalidRequestError):
        validate_request(None, "json")
    with pytest.raises(EmptyInputError):
        validate_request("\n", "json")


def test_detect_input_format():
    assert detect_input_format({"segments": []}) == ("json", None)
    assert detect_input_format("A*1~B*2~") == (
        "string",
        Separators(element="*", segment="~"),
    )
    custom = Separators(element="|", segment="~")
    assert detect_input_format("A*1~", custom) == ("string", custom)
    assert detect_input_format("<root><A>1</A></root>") == ("xml", None)


def test_validate_separators():
    validate_separators("json", "xml", None)
    validate_separators("string", "json", Separators(element="*", segment="~"))
    with pytest.raises(SeparatorsUnavailableError):
        validate_separators("json", "string", None)


def test_request_model_accepts_field_names_and_aliases():
    by_alias = ConversionRequest.model_validate({"input": "x", "outputFormat": "json"})
    by_name = ConversionRequest(input="x", output_format="json")
    assert by_alias == by_name
