"""
Пайплайн Bill Analysis.

Обрабатывает страницы одного чека через:
1. ImageEnhancer (grayscale -> brightness/contrast -> sharpen)
2. TextExtractor (одна OCR сессия, сбой страницы = заглушка)
3. PromptAssembler (инструкции -> OCR блок -> изображения)
4. AnalysisInvoker (один вызов Gemini со схемой)

ЦКП: AnalysisResult или одна типизированная ошибка.
Сбой OCR не прерывает запрос.
"""

from typing import Optional, Sequence, Union

from loguru import logger

from contracts.analysis_dto import AnalysisResult
from contracts.jurisdiction import IndianState
from ..domain.contracts import RawImage
from ..domain.exceptions import AnalysisError, BillCheckError, ValidationError
from ..domain.interfaces import ITextExtractor
from ..enhancement.enhancer import ImageEnhancer
from ..inference.analysis_invoker import AnalysisInvoker
from ..prompting.prompt_assembler import PromptAssembler, resolve_jurisdiction
from .progress import PipelineStage, ProgressCallback, report


class BillAnalysisPipeline:
    """
    Пайплайн проверки GST по фото чека.

    Координирует enhancement, OCR, сборку запроса и вызов Gemini.
    Все компоненты передаются явно (см. BillCheckComponentFactory).
    """

    def __init__(
        self,
        enhancer: ImageEnhancer,
        text_extractor: ITextExtractor,
        prompt_assembler: PromptAssembler,
        analysis_invoker: AnalysisInvoker
    ):
        self.enhancer = enhancer
        self.text_extractor = text_extractor
        self.prompt_assembler = prompt_assembler
        self.analysis_invoker = analysis_invoker

        logger.info("[BillAnalysis] Pipeline инициализирован")

    def analyze(
        self,
        images: Sequence[RawImage],
        jurisdiction: Union[IndianState, str],
        on_progress: Optional[ProgressCallback] = None
    ) -> AnalysisResult:
        """
        Анализирует чек.

        Args:
            images: Страницы чека (минимум одна)
            jurisdiction: Штат/UT вызывающего кода
            on_progress: Синхронный callback для меток этапов

        Returns:
            AnalysisResult

        Raises:
            ValidationError: Нет изображений или неизвестная юрисдикция (до любых вызовов)
            ImageProcessingError: Изображение не декодируется
            AnalysisError: Ошибка вызова Gemini (или неожиданная ошибка пайплайна)
        """
        if not images:
            raise ValidationError(
                message="Нет изображений для анализа",
                component="BillAnalysisPipeline",
                user_message="No images provided for analysis."
            )
        state = resolve_jurisdiction(jurisdiction)

        try:
            logger.info(f"[BillAnalysis] Старт: {len(images)} страниц, юрисдикция={state.value}")

            # 1. Enhancement
            report(on_progress, PipelineStage.ENHANCING_IMAGES)
            enhanced = self.enhancer.enhance_all(images)

            # 2. OCR
            report(on_progress, PipelineStage.INITIALIZING_OCR)
            report(on_progress, PipelineStage.EXTRACTING_TEXT)
            ocr_text = self.text_extractor.extract_text(enhanced)

            # 3. Запрос
            request = self.prompt_assembler.assemble(enhanced, ocr_text, state)

            # 4. Gemini
            report(on_progress, PipelineStage.VALIDATING)
            result = self.analysis_invoker.invoke(request)

            logger.info(f"[BillAnalysis] Готово: статус={result.overall_status.value}")
            return result

        except BillCheckError as e:
            logger.error(f"[BillAnalysis] Прервано: {e.message}")
            raise
        except Exception as e:
            logger.error(f"[BillAnalysis] Неожиданная ошибка: {e}")
            raise AnalysisError(
                message="Неожиданная ошибка пайплайна",
                component="BillAnalysisPipeline",
                original_error=e
            ) from e
