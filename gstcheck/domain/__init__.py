"""Bill Check Domain exports."""

from .contracts import (
    RawImage,
    EnhancedImage,
    ExtractedText,
    TextSegment,
    ImageSegment,
    ContentSegment,
    AnalysisRequest,
)
from .exceptions import (
    BillCheckError,
    ImageProcessingError,
    ImageDecodeError,
    ImageEncodeError,
    OcrUnavailable,
    ValidationError,
    AnalysisError,
    ResponseParseError,
    NetworkError,
    ServiceError,
)
from .interfaces import (
    IImageEnhancer,
    IOcrEngine,
    IOcrSession,
    ITextExtractor,
    IInferenceClient,
)

__all__ = [
    'RawImage',
    'EnhancedImage',
    'ExtractedText',
    'TextSegment',
    'ImageSegment',
    'ContentSegment',
    'AnalysisRequest',
    'BillCheckError',
    'ImageProcessingError',
    'ImageDecodeError',
    'ImageEncodeError',
    'OcrUnavailable',
    'ValidationError',
    'AnalysisError',
    'ResponseParseError',
    'NetworkError',
    'ServiceError',
    'IImageEnhancer',
    'IOcrEngine',
    'IOcrSession',
    'ITextExtractor',
    'IInferenceClient',
]
