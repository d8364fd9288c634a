"""
Клиент Gemini (google-genai SDK), реализующий IInferenceClient.

Один блокирующий вызов generate_content на запрос. Без повторов.
Ошибки SDK и транспорта пробрасываются как есть, классификация
выполняется в invoker'ах (error_classifier.classify_error).
"""

from typing import List, Optional, Sequence, Type

from google import genai
from google.genai import types
from loguru import logger
from pydantic import BaseModel

from config.settings import GEMINI_API_KEY, GEMINI_MODEL, GEMINI_TIMEOUT_MS
from ..domain.contracts import ContentSegment, ImageSegment, TextSegment
from ..domain.exceptions import ValidationError
from ..domain.interfaces import IInferenceClient


def to_parts(segments: Sequence[ContentSegment]) -> List[types.Part]:
    """Преобразует сегменты запроса в types.Part с сохранением порядка."""
    parts = []
    for segment in segments:
        if isinstance(segment, TextSegment):
            parts.append(types.Part.from_text(text=segment.text))
        elif isinstance(segment, ImageSegment):
            parts.append(types.Part.from_bytes(data=segment.data, mime_type=segment.mime_type))
        else:
            raise TypeError(f"Неизвестный тип сегмента: {type(segment).__name__}")
    return parts


def build_generate_config(
    response_schema: Optional[Type[BaseModel]] = None
) -> Optional[types.GenerateContentConfig]:
    """JSON конфиг со схемой, либо None для свободного текста."""
    if response_schema is None:
        return None
    return types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=response_schema,
    )


class GeminiClient(IInferenceClient):
    """
    Обёртка над genai.Client.

    Хэндл клиента создаётся явно и передаётся в invoker'ы
    (никакого глобального синглтона).
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = GEMINI_MODEL,
        timeout_ms: int = GEMINI_TIMEOUT_MS,
        client: Optional[genai.Client] = None
    ):
        """
        Args:
            api_key: Ключ Gemini API (по умолчанию из GEMINI_API_KEY)
            model: Имя модели
            timeout_ms: Таймаут HTTP запроса в миллисекундах
            client: Готовый genai.Client (для тестов)

        Raises:
            ValidationError: Если ключ не задан и client не передан
        """
        self.model = model
        self.timeout_ms = timeout_ms

        if client is not None:
            self._client = client
        else:
            api_key = api_key or GEMINI_API_KEY
            if not api_key:
                raise ValidationError(
                    message="GEMINI_API_KEY не задан",
                    component="GeminiClient",
                    user_message="The analysis service is not configured. Please set an API key."
                )
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout_ms),
            )

        logger.debug(f"[GeminiClient] Инициализирован: model={model}, timeout={timeout_ms}ms")

    def generate(
        self,
        segments: Sequence[ContentSegment],
        response_schema: Optional[Type[BaseModel]] = None
    ) -> Optional[str]:
        parts = to_parts(segments)
        config = build_generate_config(response_schema)

        schema_name = response_schema.__name__ if response_schema else "text"
        logger.debug(
            f"[GeminiClient] generate_content: {len(parts)} частей, схема={schema_name}"
        )

        response = self._client.models.generate_content(
            model=self.model,
            contents=parts,
            config=config,
        )
        return response.text
