"""
Image Encoder для пайплайна улучшения.

Кодирование numpy array изображений в JPEG bytes.
Операция отвечает только за кодирование изображения в байты.
"""

import cv2
import numpy as np
import numpy.typing as npt
from loguru import logger

from config.settings import JPEG_QUALITY
from ..domain.exceptions import ImageEncodeError


class ImageEncoder:
    """
    Кодирует numpy array изображение в JPEG bytes.

    ЦКП: JPEG байты изображения.
    """

    @staticmethod
    def encode(image: npt.NDArray[np.uint8], quality: int = JPEG_QUALITY) -> bytes:
        """
        Кодирует numpy array в JPEG bytes.

        Для изображений с R=G=B достаточно одного канала: JPEG получается
        меньше, а после декодирования каналы снова совпадают точно.
        JPEG не хранит альфа-канал.

        Args:
            image: uint8 (H, W) | (H, W, 3) RGB | (H, W, 4) RGBA
            quality: Качество JPEG (0-100), по умолчанию 95

        Returns:
            JPEG байты изображения

        Raises:
            ImageEncodeError: Если не удалось закодировать изображение
        """
        if image.ndim == 3:
            channels = image[:, :, :3]
            if np.array_equal(channels[:, :, 0], channels[:, :, 1]) and np.array_equal(channels[:, :, 1], channels[:, :, 2]):
                image = np.ascontiguousarray(channels[:, :, 0])
            else:
                image = cv2.cvtColor(np.ascontiguousarray(channels), cv2.COLOR_RGB2BGR)  # type: ignore[assignment]

        try:
            success, buffer = cv2.imencode(
                ".jpg",
                image,
                [int(cv2.IMWRITE_JPEG_QUALITY), quality]
            )
        except cv2.error as e:
            raise ImageEncodeError(
                message="Failed to encode processed image to JPEG",
                component="ImageEncoder",
                original_error=e
            )

        if not success or buffer is None:
            raise ImageEncodeError(
                message="Failed to encode processed image to JPEG",
                component="ImageEncoder"
            )

        encoded_bytes = buffer.tobytes()

        logger.debug(
            f"[ImageEncoder] Изображение закодировано: "
            f"размер {len(encoded_bytes)} байт, качество {quality}"
        )

        return encoded_bytes
