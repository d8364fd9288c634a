"""Enhancement exports."""

from .enhancer import ImageEnhancer
from .filters import (
    contrast_factor,
    apply_grayscale,
    apply_brightness_contrast,
    apply_sharpen,
    merge_channels,
)
from .image_decoder import ImageDecoder
from .image_encoder import ImageEncoder

__all__ = [
    'ImageEnhancer',
    'ImageDecoder',
    'ImageEncoder',
    'contrast_factor',
    'apply_grayscale',
    'apply_brightness_contrast',
    'apply_sharpen',
    'merge_channels',
]
