from types import SimpleNamespace

import pytest

from contracts.hsn_dto import HsnResult
from gstcheck.domain.contracts import ImageSegment, TextSegment
from gstcheck.domain.exceptions import ValidationError
from gstcheck.inference import GeminiClient, build_generate_config, to_parts
from gstcheck.inference import gemini_client as client_module


class RecordingModels:
    """Подмена client.models: запоминает аргументы generate_content."""

    def __init__(self, text):
        self.text = text
        self.kwargs = None

    def generate_content(self, **kwargs):
        self.kwargs = kwargs
        return SimpleNamespace(text=self.text)


def make_client(text="ok"):
    models = RecordingModels(text)
    return GeminiClient(model="gemini-test", client=SimpleNamespace(models=models)), models


def test_to_parts_keeps_order_and_payload():
    parts = to_parts([
        TextSegment(text="instructions"),
        ImageSegment(data=b"\xff\xd8abc", mime_type="image/jpeg"),
    ])

    assert parts[0].text == "instructions"
    assert parts[1].inline_data.data == b"\xff\xd8abc"
    assert parts[1].inline_data.mime_type == "image/jpeg"


def test_config_is_json_with_schema():
    config = build_generate_config(HsnResult)

    assert config.response_mime_type == "application/json"
    assert config.response_schema is HsnResult


def test_config_absent_for_free_text():
    assert build_generate_config(None) is None


def test_generate_passes_model_parts_and_config():
    client, models = make_client(text='{"code": "1006"}')

    text = client.generate([TextSegment(text="hello")], response_schema=HsnResult)

    assert text == '{"code": "1006"}'
    assert models.kwargs["model"] == "gemini-test"
    assert models.kwargs["contents"][0].text == "hello"
    assert models.kwargs["config"].response_schema is HsnResult


def test_generate_propagates_sdk_errors():
    """Тест: ошибки SDK пробрасываются как есть (классификация в invoker'ах)."""
    class FailingModels:
        def generate_content(self, **kwargs):
            raise RuntimeError("sdk failure")

    client = GeminiClient(client=SimpleNamespace(models=FailingModels()))

    with pytest.raises(RuntimeError):
        client.generate([TextSegment(text="hello")])


def test_missing_api_key_rejected(monkeypatch):
    monkeypatch.setattr(client_module, "GEMINI_API_KEY", None)

    with pytest.raises(ValidationError):
        GeminiClient(api_key=None)
