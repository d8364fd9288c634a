"""
Классификация ошибок вызова Gemini.

Правила:
- транспорт (httpx.TransportError, ConnectionError, TimeoutError) -> NetworkError
- перегрузка движка (ServerError 5xx, 429) -> ServiceError
- невалидный ответ (pydantic/JSON) -> ResponseParseError
- всё остальное -> AnalysisError

Тексты для пользователя задаются на уровне операции (UserMessages).
"""

import json
from typing import NamedTuple

import httpx
import pydantic
from google.genai import errors

from ..domain.exceptions import (
    AnalysisError,
    NetworkError,
    ResponseParseError,
    ServiceError,
)

RATE_LIMIT_CODE = 429


class UserMessages(NamedTuple):
    """Тексты для пользователя по типу ошибки."""

    parse: str
    network: str
    generic: str


BILL_ANALYSIS_MESSAGES = UserMessages(
    parse="Could not read the bill from the image. Please try again with a clearer, well-lit image.",
    network="Network error. Please check your connection and try again.",
    generic="An API error occurred during analysis. The service may be busy.",
)

HSN_LOOKUP_MESSAGES = UserMessages(
    parse="The service couldn't understand the item. Please try a more specific name.",
    network="Service unavailable due to a network error. Please try again later.",
    generic="Could not retrieve HSN/SAC information for this item.",
)

GEOLOCATION_MESSAGES = UserMessages(
    parse="Could not determine state from your location via the API.",
    network="Could not determine state from your location via the API.",
    generic="Could not determine state from your location via the API.",
)


def is_network_error(error: BaseException) -> bool:
    return isinstance(error, (httpx.TransportError, ConnectionError, TimeoutError))


def is_service_error(error: BaseException) -> bool:
    if isinstance(error, errors.ServerError):
        return True
    return isinstance(error, errors.APIError) and error.code == RATE_LIMIT_CODE


def classify_error(
    error: Exception,
    messages: UserMessages,
    component: str
) -> AnalysisError:
    """
    Превращает исключение вызова в типизированную AnalysisError.

    Уже классифицированные ошибки домена возвращаются как есть.
    """
    if isinstance(error, AnalysisError):
        return error

    if isinstance(error, (pydantic.ValidationError, json.JSONDecodeError)):
        return ResponseParseError(
            message="Невалидный ответ модели",
            component=component,
            original_error=error,
            user_message=messages.parse
        )

    if is_network_error(error):
        return NetworkError(
            message="Сетевая ошибка при обращении к Gemini",
            component=component,
            original_error=error,
            user_message=messages.network
        )

    if is_service_error(error):
        return ServiceError(
            message=f"Gemini недоступен (code={getattr(error, 'code', None)})",
            component=component,
            original_error=error,
            user_message=messages.generic
        )

    return AnalysisError(
        message="Ошибка при обращении к Gemini",
        component=component,
        original_error=error,
        user_message=messages.generic
    )

