"""
Этапы пайплайна и метки прогресса.

Метки уходят в on_progress строго в порядке объявления.
"""

from enum import Enum
from typing import Callable, Optional


class PipelineStage(str, Enum):
    """Этапы Bill Analysis с текстом для пользователя."""

    ENHANCING_IMAGES = "Optimizing image quality..."
    INITIALIZING_OCR = "Initializing OCR engine (English + Hindi)..."
    EXTRACTING_TEXT = "Extracting text from bill (OCR)..."
    VALIDATING = "Validating with AI expert..."

    @property
    def label(self) -> str:
        return self.value


ProgressCallback = Callable[[str], None]


def report(on_progress: Optional[ProgressCallback], stage: PipelineStage) -> None:
    """Синхронно передаёт метку этапа вызывающему коду."""
    if on_progress is not None:
        on_progress(stage.label)
