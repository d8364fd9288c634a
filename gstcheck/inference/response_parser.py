"""
Разбор JSON ответа модели в pydantic схему.

Частичных объектов не бывает: либо полностью валидная модель,
либо ResponseParseError.
"""

from typing import Optional, Type, TypeVar

import pydantic
from pydantic import BaseModel

from ..domain.exceptions import ResponseParseError

T = TypeVar("T", bound=BaseModel)


def strip_code_fence(text: str) -> str:
    """Убирает обёртку ```json ... ```, если модель её добавила."""
    text = text.strip()
    if not text.startswith("```"):
        return text
    text = text[3:]
    if text.lower().startswith("json"):
        text = text[4:]
    if text.rstrip().endswith("```"):
        text = text.rstrip()[:-3]
    return text.strip()


def parse_response(
    text: Optional[str],
    schema: Type[T],
    component: str = "ResponseParser",
    user_message: Optional[str] = None
) -> T:
    """
    Валидирует текст ответа по схеме.

    Raises:
        ResponseParseError: Пустой ответ, не JSON или нарушение схемы
    """
    if text is None or not text.strip():
        raise ResponseParseError(
            message="Пустой ответ модели",
            component=component,
            user_message=user_message
        )

    try:
        # Ответ модели принимается только в объявленной форме (camelCase алиасы)
        return schema.model_validate_json(strip_code_fence(text), by_alias=True, by_name=False)
    except pydantic.ValidationError as e:
        raise ResponseParseError(
            message=f"Ответ не соответствует схеме {schema.__name__} ({e.error_count()} ошибок)",
            component=component,
            original_error=e,
            user_message=user_message
        )
