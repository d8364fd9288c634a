"""
TextExtractor: OCR всех страниц одного чека.

Политика сбоев: OCR никогда не прерывает пайплайн.
- Сбой на странице -> текст страницы = заглушка OCR_UNAVAILABLE_TEXT
- Сбой открытия сессии -> заглушка для каждой страницы
- Пустой результат страницы -> OCR_EMPTY_PAGE_TEXT (страница не пропадает из склейки)

Страницы обрабатываются последовательно внутри одной сессии движка
и склеиваются через пустую строку ("\\n\\n") в порядке входа.
"""

import re
from typing import List, Sequence

from loguru import logger

from config.settings import OCR_EMPTY_PAGE_TEXT, OCR_UNAVAILABLE_TEXT
from ..domain.contracts import EnhancedImage, ExtractedText
from ..domain.interfaces import IOcrEngine, IOcrSession, ITextExtractor

PAGE_SEPARATOR = "\n\n"

_BLANK_LINES = re.compile(r"\n[ \t\r\f\v]*(?:\n[ \t\r\f\v]*)+")


def normalize_page_text(text: str) -> str:
    """
    Нормализует текст страницы.

    Схлопывает серии пустых строк внутри страницы в один перевод строки,
    чтобы пустая строка встречалась только как разделитель страниц.
    """
    text = text.replace("\r\n", "\n").strip()
    return _BLANK_LINES.sub("\n", text)


class TextExtractor(ITextExtractor):
    """
    Извлечение текста из улучшенных страниц чека.

    ЦКП: один текстовый блок, порядок страниц сохранён,
    N страниц -> ровно N-1 разделителей.
    """

    def __init__(
        self,
        engine: IOcrEngine,
        unavailable_text: str = OCR_UNAVAILABLE_TEXT,
        empty_page_text: str = OCR_EMPTY_PAGE_TEXT
    ):
        """
        Args:
            engine: OCR движок (TesseractEngine)
            unavailable_text: Заглушка для страницы, где OCR упал
            empty_page_text: Заглушка для страницы, где OCR ничего не нашёл
        """
        self.engine = engine
        self.unavailable_text = unavailable_text
        self.empty_page_text = empty_page_text
        logger.debug("[TextExtractor] Инициализирован")

    def _degraded(self, page_index: int) -> ExtractedText:
        return ExtractedText(page_index=page_index, text=self.unavailable_text, degraded=True)

    def _recognize_page(self, session: IOcrSession, page_index: int, image: EnhancedImage) -> ExtractedText:
        try:
            text = normalize_page_text(session.recognize(image))
        except Exception as e:
            logger.warning(f"[TextExtractor] OCR страницы {page_index + 1} не удался, используется заглушка: {e}")
            return self._degraded(page_index)

        if not text:
            logger.debug(f"[TextExtractor] Страница {page_index + 1}: текст не найден")
            text = self.empty_page_text

        return ExtractedText(page_index=page_index, text=text, degraded=False)

    def extract_pages(self, images: Sequence[EnhancedImage]) -> List[ExtractedText]:
        """
        Распознаёт все страницы в одной сессии движка.

        Returns:
            ExtractedText для каждой страницы, в порядке входа
        """
        if not images:
            return []

        pages: List[ExtractedText] = []
        try:
            with self.engine.session() as session:
                for page_index, image in enumerate(images):
                    pages.append(self._recognize_page(session, page_index, image))
        except Exception as e:
            logger.warning(f"[TextExtractor] OCR движок недоступен, анализ только по изображениям: {e}")
            pages.extend(self._degraded(i) for i in range(len(pages), len(images)))

        degraded = sum(1 for page in pages if page.degraded)
        logger.info(f"[TextExtractor] Готово: {len(pages)} страниц, из них без OCR: {degraded}")
        return pages

    def extract_text(self, images: Sequence[EnhancedImage]) -> str:
        """Склеивает текст всех страниц через пустую строку."""
        return join_pages(self.extract_pages(images))


def join_pages(pages: Sequence[ExtractedText]) -> str:
    """Склеивает страницы в порядке page_index."""
    ordered = sorted(pages, key=lambda page: page.page_index)
    return PAGE_SEPARATOR.join(page.text for page in ordered)
