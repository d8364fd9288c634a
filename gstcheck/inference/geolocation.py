"""
GeolocationResolver: координаты -> название штата Индии.

Ответ модели возвращается как есть (только обрезка пробелов).
Проверка принадлежности списку IndianState остаётся за вызывающим кодом
(IndianState.from_name).
"""

import math

from loguru import logger

from contracts.jurisdiction import IndianState
from ..domain.contracts import TextSegment
from ..domain.exceptions import AnalysisError, ResponseParseError, ValidationError
from ..domain.interfaces import IInferenceClient
from ..prompting.templates import GEOLOCATION_PROMPT
from .error_classifier import GEOLOCATION_MESSAGES, classify_error


def check_coordinates(latitude: float, longitude: float) -> None:
    """
    Raises:
        ValidationError: Нечисловые координаты или вне [-90, 90] / [-180, 180]
    """
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError) as e:
        raise ValidationError(
            message=f"Координаты не числа: {latitude!r}, {longitude!r}",
            component="GeolocationResolver",
            original_error=e,
            user_message="Invalid location coordinates."
        )

    if not (math.isfinite(lat) and math.isfinite(lon)) or abs(lat) > 90 or abs(lon) > 180:
        raise ValidationError(
            message=f"Координаты вне диапазона: lat={lat}, lon={lon}",
            component="GeolocationResolver",
            user_message="Invalid location coordinates."
        )


class GeolocationResolver:
    """Один текстовый вызов Gemini со списком допустимых штатов."""

    component = "GeolocationResolver"

    def __init__(self, client: IInferenceClient):
        self.client = client

    def build_prompt(self, latitude: float, longitude: float) -> str:
        states = ", ".join(f'"{name}"' for name in IndianState.names())
        return GEOLOCATION_PROMPT.format(
            latitude=float(latitude),
            longitude=float(longitude),
            states=states,
        )

    def resolve(self, latitude: float, longitude: float) -> str:
        """
        Определяет штат по координатам.

        Returns:
            Ответ модели без пробелов по краям (не проверяется по списку)

        Raises:
            ValidationError: Некорректные координаты (до вызова)
            ResponseParseError: Пустой ответ
            AnalysisError: Ошибки вызова
        """
        check_coordinates(latitude, longitude)
        logger.info(f"[{self.component}] Определение штата: lat={latitude}, lon={longitude}")

        try:
            text = self.client.generate([TextSegment(text=self.build_prompt(latitude, longitude))])
            state_name = (text or "").strip()
            if not state_name:
                raise ResponseParseError(
                    message="Пустой ответ модели",
                    component=self.component,
                    user_message=GEOLOCATION_MESSAGES.parse
                )
        except AnalysisError as e:
            logger.error(f"[{self.component}] {type(e).__name__}: {e.message}")
            raise
        except Exception as e:
            error = classify_error(e, GEOLOCATION_MESSAGES, self.component)
            logger.error(f"[{self.component}] {type(error).__name__}: {error.message}")
            raise error from e

        if IndianState.from_name(state_name) is None:
            logger.warning(f"[{self.component}] Ответ вне списка штатов: {state_name!r}")
        else:
            logger.info(f"[{self.component}] Штат: {state_name}")

        return state_name
