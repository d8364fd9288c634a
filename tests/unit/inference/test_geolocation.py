import math

import pytest

from contracts.jurisdiction import IndianState
from gstcheck.domain.exceptions import AnalysisError, ResponseParseError, ValidationError
from gstcheck.inference import GeolocationResolver

from conftest import FakeInferenceClient

GEO_MESSAGE = "Could not determine state from your location via the API."


def test_resolve_returns_trimmed_answer():
    client = FakeInferenceClient(response="  Tamil Nadu\n")

    assert GeolocationResolver(client).resolve(13.0827, 80.2707) == "Tamil Nadu"


def test_prompt_lists_every_state_and_coordinates():
    client = FakeInferenceClient(response="Kerala")

    GeolocationResolver(client).resolve(9.93, 76.26)

    call = client.calls[0]
    prompt = call["segments"][0].text
    assert call["response_schema"] is None
    assert "latitude=9.93" in prompt
    assert "longitude=76.26" in prompt
    for name in IndianState.names():
        assert f'"{name}"' in prompt


def test_answer_outside_enumeration_returned_as_is():
    """Тест: ответ не проверяется по списку (это делает вызывающий код)."""
    client = FakeInferenceClient(response="Atlantis")

    state = GeolocationResolver(client).resolve(0.0, 0.0)

    assert state == "Atlantis"
    assert IndianState.from_name(state) is None


@pytest.mark.parametrize(
    "lat, lon",
    [(91, 0), (-90.5, 10), (20, 181), (20, -180.01), (math.nan, 77), (20, math.inf), ("north", 77)],
)
def test_invalid_coordinates_rejected_without_call(lat, lon):
    client = FakeInferenceClient(response="Goa")

    with pytest.raises(ValidationError):
        GeolocationResolver(client).resolve(lat, lon)

    assert client.calls == []


@pytest.mark.parametrize("answer", [None, "", "   "])
def test_empty_answer_is_parse_error(answer):
    client = FakeInferenceClient(response=answer)

    with pytest.raises(ResponseParseError) as exc_info:
        GeolocationResolver(client).resolve(28.61, 77.21)

    assert exc_info.value.user_message == GEO_MESSAGE


def test_engine_failure_uses_geolocation_message():
    client = FakeInferenceClient(error=RuntimeError("quota"))

    with pytest.raises(AnalysisError) as exc_info:
        GeolocationResolver(client).resolve(28.61, 77.21)

    assert exc_info.value.user_message == GEO_MESSAGE
