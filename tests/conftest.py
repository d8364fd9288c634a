"""
Общие фикстуры: синтетические изображения чеков и fake-реализации
OCR движка и клиента Gemini.
"""

from contextlib import contextmanager
from typing import Iterator, List, Optional, Sequence, Set, Type, Union

import cv2
import numpy as np
import pytest
from pydantic import BaseModel

from gstcheck.domain.contracts import ContentSegment, EnhancedImage, RawImage
from gstcheck.domain.exceptions import OcrUnavailable
from gstcheck.domain.interfaces import IInferenceClient, IOcrEngine, IOcrSession


# ============================================================================
# ИЗОБРАЖЕНИЯ
# ============================================================================

def encode_png(pixels: np.ndarray) -> bytes:
    """Кодирует RGB(A)/Gray массив в PNG (без потерь)."""
    if pixels.ndim == 3 and pixels.shape[2] == 3:
        pixels = cv2.cvtColor(pixels, cv2.COLOR_RGB2BGR)
    elif pixels.ndim == 3 and pixels.shape[2] == 4:
        pixels = cv2.cvtColor(pixels, cv2.COLOR_RGBA2BGRA)
    success, buffer = cv2.imencode(".png", pixels)
    assert success
    return buffer.tobytes()


def make_receipt_pixels(width: int = 120, height: int = 80) -> np.ndarray:
    """RGB изображение: светлый фон, тёмные "строки" текста."""
    pixels = np.full((height, width, 3), 235, dtype=np.uint8)
    for y in range(10, height - 10, 15):
        pixels[y:y + 4, 10:width - 10] = (30, 40, 50)
    return pixels


def make_raw_image(pixels: Optional[np.ndarray] = None, name: str = "bill.png") -> RawImage:
    if pixels is None:
        pixels = make_receipt_pixels()
    return RawImage(data=encode_png(pixels), mime_type="image/png", source_name=name)


def make_enhanced_image(name: str = "page.jpg", marker: int = 0) -> EnhancedImage:
    """EnhancedImage с уникальными байтами (marker) для проверки порядка."""
    return EnhancedImage(
        data=b"\xff\xd8" + bytes([marker]) * 8,
        mime_type="image/jpeg",
        width=10,
        height=10,
        source_name=name,
    )


@pytest.fixture
def receipt_pixels():
    """Fixture: RGB массив чека 120x80."""
    return make_receipt_pixels()


@pytest.fixture
def raw_image():
    """Fixture: RawImage (PNG) с синтетическим чеком."""
    return make_raw_image()


# ============================================================================
# FAKE OCR
# ============================================================================

class FakeOcrSession(IOcrSession):
    """Возвращает заранее заданный текст, на failing_pages бросает OcrUnavailable."""

    def __init__(self, texts: Sequence[str], failing_pages: Set[int]):
        self.texts = list(texts)
        self.failing_pages = failing_pages
        self.calls = 0

    def recognize(self, image: EnhancedImage) -> str:
        page_index = self.calls
        self.calls += 1
        if page_index in self.failing_pages:
            raise OcrUnavailable(message=f"page {page_index} failed", component="FakeOcrSession")
        return self.texts[page_index]


class FakeOcrEngine(IOcrEngine):
    """Считает открытия/закрытия сессии."""

    def __init__(
        self,
        texts: Sequence[str] = (),
        failing_pages: Optional[Set[int]] = None,
        fail_on_open: bool = False
    ):
        self.texts = texts
        self.failing_pages = failing_pages or set()
        self.fail_on_open = fail_on_open
        self.opened = 0
        self.closed = 0
        self.last_session: Optional[FakeOcrSession] = None

    @contextmanager
    def session(self) -> Iterator[FakeOcrSession]:
        if self.fail_on_open:
            raise OcrUnavailable(message="engine missing", component="FakeOcrEngine")
        self.opened += 1
        self.last_session = FakeOcrSession(self.texts, self.failing_pages)
        try:
            yield self.last_session
        finally:
            self.closed += 1


# ============================================================================
# FAKE GEMINI
# ============================================================================

class FakeInferenceClient(IInferenceClient):
    """Записывает вызовы; возвращает response или бросает error."""

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None):
        self.response = response
        self.error = error
        self.calls: List[dict] = []

    def generate(
        self,
        segments: Sequence[ContentSegment],
        response_schema: Optional[Type[BaseModel]] = None
    ) -> Optional[str]:
        self.calls.append({"segments": list(segments), "response_schema": response_schema})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_client():
    """Fixture: FakeInferenceClient без ответа (настраивается в тесте)."""
    return FakeInferenceClient()
