"""
AnalysisInvoker: один schema-constrained вызов Gemini для проверки чека.

ЦКП: полностью валидный AnalysisResult или типизированная AnalysisError.
"""

from loguru import logger

from contracts.analysis_dto import AnalysisResult
from ..domain.contracts import AnalysisRequest
from ..domain.exceptions import AnalysisError
from ..domain.interfaces import IInferenceClient
from .error_classifier import BILL_ANALYSIS_MESSAGES, classify_error
from .response_parser import parse_response


class AnalysisInvoker:
    """Отправляет AnalysisRequest и валидирует ответ по AnalysisResult."""

    component = "AnalysisInvoker"

    def __init__(self, client: IInferenceClient):
        self.client = client

    def invoke(self, request: AnalysisRequest) -> AnalysisResult:
        """
        Выполняет анализ.

        Raises:
            ResponseParseError: Ответ не JSON или нарушает схему
            NetworkError: Транспортный сбой
            ServiceError: Движок перегружен / 5xx / 429
            AnalysisError: Прочие ошибки
        """
        logger.info(
            f"[{self.component}] Запрос к Gemini: {len(request.image_segments)} изображений, "
            f"юрисдикция={request.jurisdiction}"
        )

        try:
            text = self.client.generate(request.segments, response_schema=AnalysisResult)
            result = parse_response(
                text,
                AnalysisResult,
                component=self.component,
                user_message=BILL_ANALYSIS_MESSAGES.parse
            )
        except AnalysisError as e:
            logger.error(f"[{self.component}] {type(e).__name__}: {e.message}")
            raise
        except Exception as e:
            error = classify_error(e, BILL_ANALYSIS_MESSAGES, self.component)
            logger.error(f"[{self.component}] {type(error).__name__}: {error.message}")
            raise error from e

        logger.info(
            f"[{self.component}] Готово: {len(result.items)} позиций, "
            f"статус={result.overall_status.value}, проблем={len(result.issues)}"
        )
        return result
