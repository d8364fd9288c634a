import json

import httpx
import pytest

from contracts.hsn_dto import HsnResult
from gstcheck.domain.exceptions import NetworkError, ResponseParseError, ValidationError
from gstcheck.inference import HsnLookupInvoker

from conftest import FakeInferenceClient

HSN_PAYLOAD = {
    "code": "1806",
    "description": "Chocolate and other food preparations containing cocoa",
    "igst": "18%",
    "cgst": "9%",
    "sgst": "9%",
    "details": "No specific exemptions or conditions.",
}


@pytest.fixture
def client():
    return FakeInferenceClient(response=json.dumps(HSN_PAYLOAD))


def test_lookup_returns_result(client):
    result = HsnLookupInvoker(client).lookup("Dairy Milk chocolate")

    assert result == HsnResult(**HSN_PAYLOAD)
    assert client.calls[0]["response_schema"] is HsnResult


@pytest.mark.parametrize("query", ["ab", "  a ", "", "<>{}`x"])
def test_short_query_rejected_without_call(client, query):
    """Тест: меньше 3 символов после очистки -> ValidationError, вызова нет."""
    with pytest.raises(ValidationError):
        HsnLookupInvoker(client).lookup(query)

    assert client.calls == []


def test_query_sanitized_before_embedding(client):
    """Тест: <script>bad</script> попадает в промпт без < >."""
    HsnLookupInvoker(client).lookup("<script>bad</script>")

    prompt = client.calls[0]["segments"][0].text
    assert '"scriptbad/script"' in prompt
    assert "<" not in prompt
    assert ">" not in prompt


def test_parse_error_message(client):
    client.response = "HSN code is 1806"

    with pytest.raises(ResponseParseError) as exc_info:
        HsnLookupInvoker(client).lookup("chocolate")

    assert exc_info.value.user_message == (
        "The service couldn't understand the item. Please try a more specific name."
    )


def test_network_error_message():
    client = FakeInferenceClient(error=httpx.ConnectTimeout("timeout"))

    with pytest.raises(NetworkError) as exc_info:
        HsnLookupInvoker(client).lookup("chocolate")

    assert exc_info.value.user_message == (
        "Service unavailable due to a network error. Please try again later."
    )
