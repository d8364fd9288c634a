"""
Image Decoder для пайплайна улучшения.

Декодирование байтов изображения в numpy array (RGB/RGBA).
Ориентация из EXIF применяется сразу, дальше по пайплайну
изображение всегда в том виде, в каком его снял пользователь.
"""

import io

import cv2
import numpy as np
import numpy.typing as npt
from loguru import logger
from PIL import Image

from ..domain.contracts import RawImage
from ..domain.exceptions import ImageDecodeError

# EXIF тег Orientation
EXIF_ORIENTATION_TAG = 0x0112


def read_exif_orientation(data: bytes) -> int:
    """Возвращает EXIF Orientation (1..8), 1 если тега нет или он нечитаем."""
    try:
        with Image.open(io.BytesIO(data)) as pil_image:
            orientation = pil_image.getexif().get(EXIF_ORIENTATION_TAG, 1)
    except (OSError, ValueError) as e:
        logger.debug(f"[ImageDecoder] EXIF не прочитан: {e}")
        return 1

    if not isinstance(orientation, int) or not 1 <= orientation <= 8:
        return 1
    return orientation


def apply_exif_orientation(pixels: npt.NDArray[np.uint8], orientation: int) -> npt.NDArray[np.uint8]:
    """
    Поворачивает/отражает массив по EXIF Orientation.

    Работает с любым числом каналов, альфа сохраняется.
    """
    if orientation == 2:
        return cv2.flip(pixels, 1)
    if orientation == 3:
        return cv2.rotate(pixels, cv2.ROTATE_180)
    if orientation == 4:
        return cv2.flip(pixels, 0)
    if orientation == 5:
        return cv2.transpose(pixels)
    if orientation == 6:
        return cv2.rotate(pixels, cv2.ROTATE_90_CLOCKWISE)
    if orientation == 7:
        return cv2.rotate(cv2.transpose(pixels), cv2.ROTATE_180)
    if orientation == 8:
        return cv2.rotate(pixels, cv2.ROTATE_90_COUNTERCLOCKWISE)
    return pixels


class ImageDecoder:
    """
    Декодирует RawImage в numpy array.

    ЦКП: uint8 массив (H, W) | (H, W, 3) RGB | (H, W, 4) RGBA,
    повёрнутый по EXIF Orientation.
    Альфа-канал сохраняется (IMREAD_UNCHANGED).
    """

    @staticmethod
    def decode(image: RawImage) -> npt.NDArray[np.uint8]:
        """
        Декодирует байты изображения.

        Args:
            image: Исходное изображение

        Returns:
            uint8 массив в порядке каналов RGB(A)

        Raises:
            ImageDecodeError: Если байты не декодируются
        """
        try:
            buffer = np.frombuffer(image.data, np.uint8)
            decoded = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED)
        except cv2.error as e:
            raise ImageDecodeError(
                message=f"Не удалось декодировать изображение: {image.source_name}",
                component="ImageDecoder",
                original_error=e
            )

        if decoded is None or decoded.size == 0:
            raise ImageDecodeError(
                message=f"Не удалось декодировать изображение: {image.source_name}",
                component="ImageDecoder"
            )

        # 16-bit PNG/TIFF -> 8 bit
        if decoded.dtype == np.uint16:
            decoded = (decoded >> 8).astype(np.uint8)
        elif decoded.dtype != np.uint8:
            raise ImageDecodeError(
                message=f"Неподдерживаемая глубина цвета {decoded.dtype}: {image.source_name}",
                component="ImageDecoder"
            )

        if decoded.ndim == 3 and decoded.shape[2] == 3:
            decoded = cv2.cvtColor(decoded, cv2.COLOR_BGR2RGB)
        elif decoded.ndim == 3 and decoded.shape[2] == 4:
            decoded = cv2.cvtColor(decoded, cv2.COLOR_BGRA2RGBA)
        elif decoded.ndim == 3 and decoded.shape[2] == 1:
            decoded = decoded[:, :, 0]

        # IMREAD_UNCHANGED не применяет EXIF Orientation
        orientation = read_exif_orientation(image.data)
        if orientation != 1:
            logger.debug(f"[ImageDecoder] EXIF Orientation={orientation}: {image.source_name}")
            decoded = apply_exif_orientation(decoded, orientation)

        logger.debug(f"[ImageDecoder] Изображение декодировано: {image.source_name}, размер: {decoded.shape}")

        return decoded  # type: ignore[return-value]
