"""
Enhancement Infrastructure: Фильтры улучшения изображения чека.

Фиксированные детерминированные операции (без авто-экспозиции):
1. Grayscale по яркостной формуле 0.299R + 0.587G + 0.114B
2. Brightness/Contrast со сдвигом от середины (128)
3. Sharpen ядром 3x3 с повтором краевых пикселей

Входные массивы НИКОГДА не изменяются, всегда возвращается новый массив.
"""

import cv2
import numpy as np
import numpy.typing as npt

from config.settings import ENHANCE_BRIGHTNESS, ENHANCE_CONTRAST, SHARPEN_KERNEL

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def contrast_factor(contrast: float) -> float:
    """
    Коэффициент контраста: 259*(C+255) / (255*(259-C)).

    Args:
        contrast: C в диапазоне (-255, 259)
    """
    if contrast >= 259:
        raise ValueError(f"Контраст должен быть < 259, получено: {contrast}")
    return (259.0 * (contrast + 255.0)) / (255.0 * (259.0 - contrast))


def apply_grayscale(image: npt.NDArray[np.uint8]) -> npt.NDArray[np.float64]:
    """
    Яркость пикселя по перцептивной формуле.

    Args:
        image: RGB или RGBA (H, W, 3|4), либо уже Grayscale (H, W)

    Returns:
        float64 (H, W), без округления
    """
    if image.ndim == 2:
        return image.astype(np.float64)

    # Порядок каналов RGB: веса применяются к R, G, B; альфа игнорируется
    r = image[:, :, 0].astype(np.float64)
    g = image[:, :, 1].astype(np.float64)
    b = image[:, :, 2].astype(np.float64)
    return r * LUMA_WEIGHTS[0] + g * LUMA_WEIGHTS[1] + b * LUMA_WEIGHTS[2]


def apply_brightness_contrast(
    gray: npt.NDArray[np.float64],
    brightness: float = ENHANCE_BRIGHTNESS,
    contrast: float = ENHANCE_CONTRAST
) -> npt.NDArray[np.uint8]:
    """
    Сдвиг яркости, затем растяжение контраста от середины.

    color = factor * (gray + brightness - 128) + 128, обрезка в [0, 255].
    Округление half-to-even (как у Uint8ClampedArray).

    Args:
        gray: float или uint8 (H, W)
        brightness: Сдвиг яркости (default 10)
        contrast: Контраст C (default 50)
    """
    factor = contrast_factor(contrast)
    color = gray.astype(np.float64) + brightness
    color = factor * (color - 128.0) + 128.0
    return np.rint(np.clip(color, 0.0, 255.0)).astype(np.uint8)


def apply_sharpen(gray: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """
    Свёртка с ядром резкости [[0,-1,0],[-1,5,-1],[0,-1,0]].

    Края: координаты за границей берутся от ближайшего краевого пикселя
    (BORDER_REPLICATE), не нули и не wrap. Результат насыщается в [0, 255].

    Args:
        gray: uint8 (H, W)
    """
    kernel = np.array(SHARPEN_KERNEL, dtype=np.float32)
    return cv2.filter2D(gray, -1, kernel, borderType=cv2.BORDER_REPLICATE)  # type: ignore[return-value]


def merge_channels(
    gray: npt.NDArray[np.uint8],
    source: npt.NDArray[np.uint8]
) -> npt.NDArray[np.uint8]:
    """
    Собирает выходное изображение в раскладке исходного.

    R = G = B = gray; альфа-канал (если был) копируется без изменений.

    Args:
        gray: uint8 (H, W)
        source: Исходное изображение (H, W) | (H, W, 3) | (H, W, 4)
    """
    if source.ndim == 2:
        return gray.copy()

    channels = source.shape[2]
    result = np.empty_like(source)
    result[:, :, 0] = gray
    result[:, :, 1] = gray
    result[:, :, 2] = gray
    if channels == 4:
        result[:, :, 3] = source[:, :, 3]
    return result
