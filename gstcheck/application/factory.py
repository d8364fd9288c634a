"""
Фабрика для создания компонентов Bill Check.

Клиент Gemini создаётся один раз и явно передаётся в каждый invoker.
"""

from typing import Optional

from loguru import logger

from ..domain.interfaces import IInferenceClient, IOcrEngine, ITextExtractor
from ..enhancement.enhancer import ImageEnhancer
from ..extraction.tesseract_engine import TesseractEngine
from ..extraction.text_extractor import TextExtractor
from ..inference.analysis_invoker import AnalysisInvoker
from ..inference.gemini_client import GeminiClient
from ..inference.geolocation import GeolocationResolver
from ..inference.hsn_lookup import HsnLookupInvoker
from ..prompting.prompt_assembler import PromptAssembler
from .bill_analysis_pipeline import BillAnalysisPipeline


class BillCheckComponentFactory:
    """
    Фабрика для создания компонентов Bill Check.

    Отвечает за сборку:
    - Enhancement + OCR (Tesseract)
    - Клиента Gemini и трёх invoker'ов
    - Пайплайна Bill Analysis
    """

    @staticmethod
    def create_inference_client(api_key: Optional[str] = None) -> IInferenceClient:
        """
        Создает клиент Gemini.

        Args:
            api_key: Ключ API (по умолчанию из config.settings)
        """
        logger.debug("[BillCheck] Создание клиента Gemini")
        return GeminiClient(api_key=api_key)

    @staticmethod
    def create_image_enhancer() -> ImageEnhancer:
        logger.debug("[BillCheck] Создание ImageEnhancer")
        return ImageEnhancer()

    @staticmethod
    def create_ocr_engine() -> IOcrEngine:
        logger.debug("[BillCheck] Создание OCR движка (Tesseract)")
        return TesseractEngine()

    @staticmethod
    def create_text_extractor(engine: Optional[IOcrEngine] = None) -> ITextExtractor:
        logger.debug("[BillCheck] Создание TextExtractor")
        if engine is None:
            engine = BillCheckComponentFactory.create_ocr_engine()
        return TextExtractor(engine)

    @staticmethod
    def create_prompt_assembler() -> PromptAssembler:
        return PromptAssembler()

    @staticmethod
    def create_analysis_invoker(client: IInferenceClient) -> AnalysisInvoker:
        return AnalysisInvoker(client)

    @staticmethod
    def create_hsn_lookup(client: Optional[IInferenceClient] = None) -> HsnLookupInvoker:
        """Создает HsnLookupInvoker (клиент по умолчанию из настроек)."""
        if client is None:
            client = BillCheckComponentFactory.create_inference_client()
        return HsnLookupInvoker(client)

    @staticmethod
    def create_geolocation_resolver(client: Optional[IInferenceClient] = None) -> GeolocationResolver:
        """Создает GeolocationResolver (клиент по умолчанию из настроек)."""
        if client is None:
            client = BillCheckComponentFactory.create_inference_client()
        return GeolocationResolver(client)

    @staticmethod
    def create_pipeline(
        client: IInferenceClient,
        enhancer: Optional[ImageEnhancer] = None,
        text_extractor: Optional[ITextExtractor] = None,
        prompt_assembler: Optional[PromptAssembler] = None
    ) -> BillAnalysisPipeline:
        """
        Создает пайплайн Bill Analysis.

        Args:
            client: Клиент inference (обязателен)
            enhancer: ImageEnhancer (опционально)
            text_extractor: TextExtractor (опционально)
            prompt_assembler: PromptAssembler (опционально)
        """
        logger.debug("[BillCheck] Создание пайплайна Bill Analysis")

        if enhancer is None:
            enhancer = BillCheckComponentFactory.create_image_enhancer()

        if text_extractor is None:
            text_extractor = BillCheckComponentFactory.create_text_extractor()

        if prompt_assembler is None:
            prompt_assembler = BillCheckComponentFactory.create_prompt_assembler()

        return BillAnalysisPipeline(
            enhancer=enhancer,
            text_extractor=text_extractor,
            prompt_assembler=prompt_assembler,
            analysis_invoker=BillCheckComponentFactory.create_analysis_invoker(client)
        )

    @staticmethod
    def create_default_pipeline() -> BillAnalysisPipeline:
        """
        Создает пайплайн с настройками по умолчанию.

        Returns:
            Полностью сконфигурированный BillAnalysisPipeline
        """
        logger.info("[BillCheck] Создание пайплайна с настройками по умолчанию")
        client = BillCheckComponentFactory.create_inference_client()
        return BillCheckComponentFactory.create_pipeline(client)
