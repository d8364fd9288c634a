"""
HsnLookupInvoker: поиск HSN/SAC кода и ставок GST по названию товара.
"""

from loguru import logger

from config.settings import HSN_MIN_QUERY_LENGTH
from contracts.hsn_dto import HsnResult
from ..domain.contracts import TextSegment
from ..domain.exceptions import AnalysisError, ValidationError
from ..domain.interfaces import IInferenceClient
from ..prompting.sanitizer import sanitize_for_prompt
from ..prompting.templates import HSN_LOOKUP_PROMPT
from .error_classifier import HSN_LOOKUP_MESSAGES, classify_error
from .response_parser import parse_response


class HsnLookupInvoker:
    """
    Очищает запрос, проверяет длину и вызывает Gemini со схемой HsnResult.

    Короткий запрос отклоняется до сетевого вызова.
    """

    component = "HsnLookupInvoker"

    def __init__(self, client: IInferenceClient, min_query_length: int = HSN_MIN_QUERY_LENGTH):
        self.client = client
        self.min_query_length = min_query_length

    def lookup(self, item_name: str) -> HsnResult:
        """
        Ищет HSN/SAC для товара.

        Raises:
            ValidationError: Меньше min_query_length символов после очистки
            AnalysisError: Ошибки вызова (см. classify_error)
        """
        query = sanitize_for_prompt(item_name or "")
        if len(query) < self.min_query_length:
            raise ValidationError(
                message=f"Слишком короткий запрос: {len(query)} < {self.min_query_length}",
                component=self.component,
                user_message="Invalid item name provided."
            )

        logger.info(f"[{self.component}] Поиск HSN для: {query!r}")

        prompt = HSN_LOOKUP_PROMPT.format(item_name=query)
        try:
            text = self.client.generate([TextSegment(text=prompt)], response_schema=HsnResult)
            result = parse_response(
                text,
                HsnResult,
                component=self.component,
                user_message=HSN_LOOKUP_MESSAGES.parse
            )
        except AnalysisError as e:
            logger.error(f"[{self.component}] {type(e).__name__}: {e.message}")
            raise
        except Exception as e:
            error = classify_error(e, HSN_LOOKUP_MESSAGES, self.component)
            logger.error(f"[{self.component}] {type(error).__name__}: {error.message}")
            raise error from e

        logger.info(f"[{self.component}] Найден код {result.code} (IGST {result.igst})")
        return result
