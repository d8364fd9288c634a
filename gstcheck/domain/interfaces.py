"""
Интерфейсы (абстрактные классы) для домена Bill Check.

Домен отвечает за:
1. Улучшение изображений перед OCR
2. OCR распознавание текста (одна сессия движка на запрос)
3. Обращение к Gemini со схемой ответа и валидацию результата
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import List, Optional, Sequence, Type

from pydantic import BaseModel

from .contracts import ContentSegment, EnhancedImage, ExtractedText, RawImage


class IImageEnhancer(ABC):
    """Интерфейс улучшения изображений."""

    @abstractmethod
    def enhance(self, image: RawImage) -> EnhancedImage:
        """
        Улучшает одно изображение для распознавания текста.

        Args:
            image: Исходное изображение (не изменяется)

        Returns:
            EnhancedImage тех же размеров
        """
        pass


class IOcrSession(ABC):
    """Открытая сессия OCR движка."""

    @abstractmethod
    def recognize(self, image: EnhancedImage) -> str:
        """
        Распознаёт текст одной страницы.

        Raises:
            OcrUnavailable: Если движок не смог обработать страницу
        """
        pass


class IOcrEngine(ABC):
    """Интерфейс OCR движка со scoped-сессией."""

    @abstractmethod
    def session(self) -> AbstractContextManager[IOcrSession]:
        """
        Открывает сессию движка.

        Сессия освобождается при выходе из with-блока на любом пути
        (успех, сбой страницы, исключение).

        Raises:
            OcrUnavailable: Если движок недоступен
        """
        pass


class ITextExtractor(ABC):
    """Интерфейс извлечения текста из страниц одного чека."""

    @abstractmethod
    def extract_pages(self, images: Sequence[EnhancedImage]) -> List[ExtractedText]:
        """Возвращает текст каждой страницы в порядке входа."""
        pass

    @abstractmethod
    def extract_text(self, images: Sequence[EnhancedImage]) -> str:
        """Возвращает склеенный текст всех страниц."""
        pass


class IInferenceClient(ABC):
    """Интерфейс клиента inference движка (Gemini)."""

    @abstractmethod
    def generate(
        self,
        segments: Sequence[ContentSegment],
        response_schema: Optional[Type[BaseModel]] = None
    ) -> Optional[str]:
        """
        Один блокирующий вызов generate.

        Args:
            segments: Упорядоченные сегменты запроса
            response_schema: Pydantic модель для JSON ответа (None = свободный текст)

        Returns:
            Текст ответа модели (может быть None, если модель ничего не вернула)

        Raises:
            Исключения транспорта/SDK как есть. Классификация - на стороне invoker.
        """
        pass
