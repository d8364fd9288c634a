import json

import httpx
import pytest
from google.genai import errors

from contracts.analysis_dto import AnalysisResult, OverallStatus, ValidationStatus
from gstcheck.domain.contracts import AnalysisRequest, ImageSegment, TextSegment
from gstcheck.domain.exceptions import NetworkError, ResponseParseError, ServiceError
from gstcheck.inference import AnalysisInvoker

from conftest import FakeInferenceClient

ANALYSIS_PAYLOAD = {
    "overallStatus": "ISSUES_FOUND",
    "storeName": "Saravana Stores",
    "billDate": "12/03/2024",
    "totalTax": 23.6,
    "totalAmount": 254.6,
    "items": [
        {
            "itemName": "Basmati Rice 1kg",
            "quantity": 1,
            "price": 120.0,
            "total": 126.0,
            "taxAmount": 6.0,
            "status": "CORRECT",
        },
        {
            "itemName": "Chocolate",
            "quantity": 2,
            "price": 50.0,
            "total": 128.6,
            "taxAmount": 17.6,
            "status": "INCORRECT_TAX_SLAB",
            "suggestion": "Rule: Chocolate is taxed at 18%. Action: Ask for a corrected bill.",
        },
    ],
}


@pytest.fixture
def request_():
    """Fixture: минимальный AnalysisRequest."""
    return AnalysisRequest(
        segments=(
            TextSegment(text="instructions"),
            TextSegment(text="ocr"),
            ImageSegment(data=b"\xff\xd8jpeg", mime_type="image/jpeg"),
        ),
        jurisdiction="Tamil Nadu",
    )


def test_valid_response_returns_equal_result(request_):
    """Тест: ответ по схеме -> равный AnalysisResult."""
    client = FakeInferenceClient(response=json.dumps(ANALYSIS_PAYLOAD))

    result = AnalysisInvoker(client).invoke(request_)

    assert result == AnalysisResult.model_validate(ANALYSIS_PAYLOAD)
    assert result.overall_status is OverallStatus.ISSUES_FOUND
    assert result.items[1].status is ValidationStatus.INCORRECT_TAX_SLAB
    assert [item.item_name for item in result.issues] == ["Chocolate"]
    assert result.model_dump(by_alias=True, exclude_none=True) == ANALYSIS_PAYLOAD


def test_call_uses_schema_and_request_segments(request_):
    client = FakeInferenceClient(response=json.dumps(ANALYSIS_PAYLOAD))

    AnalysisInvoker(client).invoke(request_)

    assert len(client.calls) == 1
    assert client.calls[0]["response_schema"] is AnalysisResult
    assert client.calls[0]["segments"] == list(request_.segments)


def test_non_json_response_is_parse_error(request_):
    client = FakeInferenceClient(response="Sorry, I cannot read this bill.")

    with pytest.raises(ResponseParseError) as exc_info:
        AnalysisInvoker(client).invoke(request_)

    assert exc_info.value.user_message == (
        "Could not read the bill from the image. Please try again with a clearer, well-lit image."
    )


@pytest.mark.parametrize("missing", ["storeName", "items", "overallStatus"])
def test_missing_required_field_is_parse_error(request_, missing):
    """Тест: нет обязательного поля -> ошибка, а не частичный объект."""
    payload = {k: v for k, v in ANALYSIS_PAYLOAD.items() if k != missing}
    client = FakeInferenceClient(response=json.dumps(payload))

    with pytest.raises(ResponseParseError):
        AnalysisInvoker(client).invoke(request_)


def test_unknown_status_is_parse_error(request_):
    payload = json.loads(json.dumps(ANALYSIS_PAYLOAD))
    payload["items"][0]["status"] = "PROBABLY_FINE"
    client = FakeInferenceClient(response=json.dumps(payload))

    with pytest.raises(ResponseParseError):
        AnalysisInvoker(client).invoke(request_)


def test_empty_items_with_issues_is_parse_error(request_):
    """Тест: пустой items допустим только при VERIFIED."""
    payload = dict(ANALYSIS_PAYLOAD, items=[])
    client = FakeInferenceClient(response=json.dumps(payload))

    with pytest.raises(ResponseParseError):
        AnalysisInvoker(client).invoke(request_)


def test_network_failure_is_network_error(request_):
    client = FakeInferenceClient(error=httpx.ConnectError("offline"))

    with pytest.raises(NetworkError) as exc_info:
        AnalysisInvoker(client).invoke(request_)

    assert exc_info.value.user_message == "Network error. Please check your connection and try again."
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


def test_overloaded_engine_is_service_error(request_):
    error = errors.ServerError(503, {"error": {"code": 503, "message": "overloaded", "status": "UNAVAILABLE"}})
    client = FakeInferenceClient(error=error)

    with pytest.raises(ServiceError) as exc_info:
        AnalysisInvoker(client).invoke(request_)

    assert exc_info.value.user_message == "An API error occurred during analysis. The service may be busy."
    assert len(client.calls) == 1


def test_snake_case_keys_are_parse_error(request_):
    """Тест: ответ с snake_case ключами не соответствует объявленной camelCase схеме."""
    result = AnalysisResult.model_validate(ANALYSIS_PAYLOAD)
    snake_case = json.dumps(result.model_dump(mode="json", by_alias=False))
    client = FakeInferenceClient(response=snake_case)

    with pytest.raises(ResponseParseError):
        AnalysisInvoker(client).invoke(request_)
