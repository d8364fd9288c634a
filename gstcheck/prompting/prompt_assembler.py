"""
PromptAssembler: сборка AnalysisRequest для проверки чека.

Порядок сегментов (детерминированный):
1. Инструкции (роль, юрисдикция, список задач)
2. OCR текст в маркерах START/END (недоверенные данные из чека)
3. Изображения в исходном порядке

Юрисдикция валидируется по закрытому списку IndianState ДО сборки.
В промпт попадает только каноническое значение enum, не ввод пользователя.
"""

from typing import Sequence, Union

from loguru import logger

from contracts.analysis_dto import ValidationStatus
from contracts.jurisdiction import IndianState
from ..domain.contracts import AnalysisRequest, EnhancedImage, ImageSegment, TextSegment
from ..domain.exceptions import ValidationError
from .templates import (
    BILL_ANALYSIS_INSTRUCTIONS,
    GST_TAX_SLABS,
    OCR_TEXT_END,
    OCR_TEXT_START,
)


def resolve_jurisdiction(jurisdiction: Union[IndianState, str]) -> IndianState:
    """
    Приводит юрисдикцию к IndianState.

    Строка сравнивается со значениями enum без учёта регистра и пробелов по краям.

    Raises:
        ValidationError: Если значения нет в закрытом списке
    """
    if isinstance(jurisdiction, IndianState):
        return jurisdiction

    if isinstance(jurisdiction, str):
        wanted = jurisdiction.strip().casefold()
        for state in IndianState:
            if state.value.casefold() == wanted:
                return state

    raise ValidationError(
        message=f"Неизвестная юрисдикция: {jurisdiction!r}",
        component="PromptAssembler",
        user_message="Please select a valid Indian state or union territory."
    )


def wrap_ocr_text(ocr_text: str) -> str:
    """Оборачивает OCR текст в маркеры начала/конца."""
    return f"{OCR_TEXT_START}\n{ocr_text}\n{OCR_TEXT_END}"


class PromptAssembler:
    """
    Собирает один AnalysisRequest на запрос.

    ЦКП: AnalysisRequest (инструкции -> OCR блок -> изображения).
    """

    def build_instructions(self, state: IndianState) -> str:
        """Текст инструкций для юрисдикции."""
        statuses = ", ".join(f"'{status.value}'" for status in ValidationStatus)
        slabs = ", ".join(f"{slab}%" for slab in GST_TAX_SLABS)
        return BILL_ANALYSIS_INSTRUCTIONS.format(
            state=state.value,
            ocr_start=OCR_TEXT_START,
            ocr_end=OCR_TEXT_END,
            slabs=slabs,
            statuses=statuses,
        )

    def assemble(
        self,
        images: Sequence[EnhancedImage],
        ocr_text: str,
        jurisdiction: Union[IndianState, str]
    ) -> AnalysisRequest:
        """
        Собирает запрос.

        Args:
            images: Улучшенные страницы чека (минимум одна)
            ocr_text: Склеенный OCR текст всех страниц
            jurisdiction: Юрисдикция вызывающего кода

        Raises:
            ValidationError: Неизвестная юрисдикция или нет изображений
        """
        state = resolve_jurisdiction(jurisdiction)

        if not images:
            raise ValidationError(
                message="Нет изображений для анализа",
                component="PromptAssembler",
                user_message="No images provided for analysis."
            )

        segments = [
            TextSegment(text=self.build_instructions(state)),
            TextSegment(text=wrap_ocr_text(ocr_text)),
        ]
        segments.extend(
            ImageSegment(data=image.data, mime_type=image.mime_type)
            for image in images
        )

        logger.debug(
            f"[PromptAssembler] Запрос собран: юрисдикция={state.value}, "
            f"изображений={len(images)}, OCR символов={len(ocr_text)}"
        )

        return AnalysisRequest(segments=tuple(segments), jurisdiction=state.value)
