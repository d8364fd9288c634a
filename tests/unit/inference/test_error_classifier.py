import json

import httpx
import pytest
from google.genai import errors

from contracts.hsn_dto import HsnResult
from gstcheck.domain.exceptions import (
    AnalysisError,
    NetworkError,
    ResponseParseError,
    ServiceError,
)
from gstcheck.inference import BILL_ANALYSIS_MESSAGES, HSN_LOOKUP_MESSAGES, classify_error


def api_error_json(code, status):
    return {"error": {"code": code, "message": "failure", "status": status}}


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectError("connection refused"),
        httpx.ReadTimeout("timed out"),
        ConnectionError("reset"),
        TimeoutError("timeout"),
    ],
)
def test_transport_errors_are_network_errors(error):
    result = classify_error(error, BILL_ANALYSIS_MESSAGES, "Test")

    assert type(result) is NetworkError
    assert result.original_error is error
    assert result.user_message == BILL_ANALYSIS_MESSAGES.network


@pytest.mark.parametrize(
    "error",
    [
        errors.ServerError(503, api_error_json(503, "UNAVAILABLE")),
        errors.ServerError(500, api_error_json(500, "INTERNAL")),
        errors.ClientError(429, api_error_json(429, "RESOURCE_EXHAUSTED")),
    ],
)
def test_overload_is_service_error(error):
    result = classify_error(error, BILL_ANALYSIS_MESSAGES, "Test")

    assert type(result) is ServiceError
    assert result.user_message == BILL_ANALYSIS_MESSAGES.generic


def test_client_error_is_generic_analysis_error():
    """Тест: 400/403 -> AnalysisError (не сеть и не перегрузка)."""
    error = errors.ClientError(400, api_error_json(400, "INVALID_ARGUMENT"))

    result = classify_error(error, HSN_LOOKUP_MESSAGES, "Test")

    assert type(result) is AnalysisError
    assert result.user_message == "Could not retrieve HSN/SAC information for this item."


def test_validation_and_json_errors_are_parse_errors():
    try:
        HsnResult.model_validate_json("{}")
    except Exception as e:
        pydantic_error = e
    json_error = json.JSONDecodeError("bad", "doc", 0)

    for error in (pydantic_error, json_error):
        result = classify_error(error, HSN_LOOKUP_MESSAGES, "Test")
        assert type(result) is ResponseParseError
        assert result.user_message == HSN_LOOKUP_MESSAGES.parse


def test_already_classified_error_returned_as_is():
    error = NetworkError(message="x", component="Other")

    assert classify_error(error, BILL_ANALYSIS_MESSAGES, "Test") is error


def test_unknown_error_is_analysis_error():
    result = classify_error(RuntimeError("boom"), BILL_ANALYSIS_MESSAGES, "Test")

    assert type(result) is AnalysisError
    assert "boom" in str(result)
