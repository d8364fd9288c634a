"""
Внутренние контракты пайплайна Bill Analysis.

Жизненный цикл:
  RawImage       - вход от вызывающего кода, неизменяемый
  EnhancedImage  - результат ImageEnhancer, живёт в рамках одного запроса
  ExtractedText  - текст одной страницы (или заглушка при сбое OCR)
  AnalysisRequest - упорядоченные сегменты для Gemini, собирается один раз

Все модели используют Pydantic v2 (frozen).
"""

from pathlib import Path
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config.settings import SUPPORTED_IMAGE_FORMATS


# ============================================================================
# ИЗОБРАЖЕНИЯ
# ============================================================================

class RawImage(BaseModel):
    """Исходное изображение чека (закодированные байты)."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., description="Закодированные байты изображения (JPEG/PNG/...)")
    mime_type: str = Field(..., description="MIME type исходного файла")
    source_name: str = Field("image", description="Имя источника (для логов)")

    @field_validator("mime_type")
    @classmethod
    def mime_is_image(cls, v: str) -> str:
        """Принимаем только image/* типы."""
        if not v.startswith("image/"):
            raise ValueError(f"Ожидался image/* mime type, получено: {v}")
        return v

    @classmethod
    def from_path(cls, image_path: Path) -> "RawImage":
        """
        Читает файл изображения.

        Args:
            image_path: Путь к файлу (расширение из SUPPORTED_IMAGE_FORMATS)

        Raises:
            FileNotFoundError: Если файла нет
            ValueError: Если расширение не поддерживается
        """
        image_path = Path(image_path)
        mime_type = SUPPORTED_IMAGE_FORMATS.get(image_path.suffix.lower())
        if mime_type is None:
            raise ValueError(
                f"Неподдерживаемый формат: {image_path.suffix} "
                f"(поддерживаются: {list(SUPPORTED_IMAGE_FORMATS)})"
            )
        with open(image_path, "rb") as f:
            data = f.read()
        return cls(data=data, mime_type=mime_type, source_name=image_path.name)


class EnhancedImage(BaseModel):
    """Улучшенное изображение, закодированное для отправки."""

    model_config = ConfigDict(frozen=True)

    data: bytes = Field(..., min_length=1, description="Закодированные байты (JPEG)")
    mime_type: str = Field("image/jpeg", description="MIME type результата")
    width: int = Field(..., gt=0, description="Ширина (исходная, после поворота по EXIF)")
    height: int = Field(..., gt=0, description="Высота (исходная, после поворота по EXIF)")
    source_name: str = Field("image", description="Имя исходного изображения")


# ============================================================================
# OCR
# ============================================================================

class ExtractedText(BaseModel):
    """Распознанный текст одной страницы чека."""

    model_config = ConfigDict(frozen=True)

    page_index: int = Field(..., ge=0, description="Позиция страницы во входной последовательности")
    text: str = Field(..., description="Текст страницы или заглушка при сбое OCR")
    degraded: bool = Field(False, description="True если OCR не сработал и text = заглушка")


# ============================================================================
# ЗАПРОС К INFERENCE
# ============================================================================

class TextSegment(BaseModel):
    """Текстовый сегмент запроса."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = Field(..., min_length=1)


class ImageSegment(BaseModel):
    """Сегмент с inline изображением."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    data: bytes = Field(..., min_length=1)
    mime_type: str = Field(...)


ContentSegment = Union[TextSegment, ImageSegment]


class AnalysisRequest(BaseModel):
    """
    Упорядоченный набор сегментов для одного вызова Gemini.

    Порядок: инструкции -> OCR текст (в маркерах) -> изображения.
    """

    model_config = ConfigDict(frozen=True)

    segments: Tuple[ContentSegment, ...] = Field(..., min_length=1)
    jurisdiction: Optional[str] = Field(None, description="Юрисдикция вызывающего кода (для логов)")

    @property
    def image_segments(self) -> Tuple[ImageSegment, ...]:
        return tuple(s for s in self.segments if isinstance(s, ImageSegment))

    @property
    def text_segments(self) -> Tuple[TextSegment, ...]:
        return tuple(s for s in self.segments if isinstance(s, TextSegment))
