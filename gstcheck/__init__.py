"""GST Bill Check - проверка GST по фото чека (Tesseract OCR + Gemini)."""

from .application import BillAnalysisPipeline, BillCheckComponentFactory, PipelineStage
from .domain import (
    AnalysisError,
    BillCheckError,
    NetworkError,
    RawImage,
    ResponseParseError,
    ServiceError,
    ValidationError,
)
from .inference import GeminiClient, GeolocationResolver, HsnLookupInvoker

__all__ = [
    'BillAnalysisPipeline',
    'BillCheckComponentFactory',
    'PipelineStage',
    'GeminiClient',
    'HsnLookupInvoker',
    'GeolocationResolver',
    'RawImage',
    'BillCheckError',
    'ValidationError',
    'AnalysisError',
    'ResponseParseError',
    'NetworkError',
    'ServiceError',
]
