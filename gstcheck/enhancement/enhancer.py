"""
ImageEnhancer: детерминированное улучшение изображения чека перед OCR.

Stages:
0. Decode: bytes -> RGB(A) numpy array
1. Grayscale: 0.299R + 0.587G + 0.114B
2. Brightness/Contrast: +10, затем контраст C=50 от середины, обрезка [0, 255]
3. Sharpen: ядро 3x3, BORDER_REPLICATE, альфа без изменений
4. Encode: JPEG quality 95

Никакой адаптивности: один и тот же вход всегда даёт один и тот же выход.
Изображения одного запроса независимы и могут обрабатываться параллельно.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

import numpy as np
import numpy.typing as npt
from loguru import logger

from config.settings import (
    ENHANCE_BRIGHTNESS,
    ENHANCE_CONTRAST,
    ENHANCE_MAX_WORKERS,
    JPEG_QUALITY,
)
from ..domain.contracts import EnhancedImage, RawImage
from ..domain.interfaces import IImageEnhancer
from .filters import apply_brightness_contrast, apply_grayscale, apply_sharpen, merge_channels
from .image_decoder import ImageDecoder
from .image_encoder import ImageEncoder


class ImageEnhancer(IImageEnhancer):
    """
    Фиксированный пайплайн улучшения (grayscale -> brightness/contrast -> sharpen).

    Контракт: размеры сохраняются, альфа не меняется, вход не мутируется.
    """

    def __init__(
        self,
        brightness: float = ENHANCE_BRIGHTNESS,
        contrast: float = ENHANCE_CONTRAST,
        jpeg_quality: int = JPEG_QUALITY,
        max_workers: int = ENHANCE_MAX_WORKERS
    ) -> None:
        self.brightness = brightness
        self.contrast = contrast
        self.jpeg_quality = jpeg_quality
        self.max_workers = max(1, max_workers)
        self.decoder = ImageDecoder()
        self.encoder = ImageEncoder()
        logger.debug(
            f"[ImageEnhancer] Инициализирован "
            f"(brightness={brightness}, contrast={contrast}, quality={jpeg_quality})"
        )

    def enhance_pixels(self, pixels: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
        """
        Применяет Stages 1-3 к декодированному изображению.

        Args:
            pixels: uint8 (H, W) | (H, W, 3) RGB | (H, W, 4) RGBA

        Returns:
            Новый массив той же формы: R = G = B, альфа скопирована
        """
        gray = apply_grayscale(pixels)
        adjusted = apply_brightness_contrast(gray, self.brightness, self.contrast)
        sharpened = apply_sharpen(adjusted)
        return merge_channels(sharpened, pixels)

    def enhance(self, image: RawImage) -> EnhancedImage:
        """
        Улучшает одно изображение.

        Raises:
            ImageDecodeError: Если исходник не декодируется
            ImageEncodeError: Если результат не удалось закодировать
        """
        logger.debug(f"[ImageEnhancer] Обработка: {image.source_name}")

        pixels = self.decoder.decode(image)
        height, width = pixels.shape[:2]

        enhanced = self.enhance_pixels(pixels)
        data = self.encoder.encode(enhanced, quality=self.jpeg_quality)

        logger.info(
            f"[ImageEnhancer] ✅ Готово: {image.source_name} "
            f"({width}x{height}, {len(image.data)} → {len(data)} байт)"
        )

        return EnhancedImage(
            data=data,
            mime_type="image/jpeg",
            width=width,
            height=height,
            source_name=image.source_name
        )

    def enhance_all(self, images: Sequence[RawImage]) -> List[EnhancedImage]:
        """
        Улучшает все изображения запроса, порядок сохраняется.

        Первая ошибка прерывает обработку и пробрасывается как есть.
        """
        if len(images) <= 1 or self.max_workers == 1:
            return [self.enhance(image) for image in images]

        workers = min(self.max_workers, len(images))
        logger.debug(f"[ImageEnhancer] Параллельная обработка: {len(images)} изображений, {workers} потоков")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(self.enhance, images))
