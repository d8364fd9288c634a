"""
Inference: обращение к Gemini и валидация ответов.

Три операции: анализ чека, поиск HSN, определение штата по координатам.
"""

from .analysis_invoker import AnalysisInvoker
from .error_classifier import (
    BILL_ANALYSIS_MESSAGES,
    GEOLOCATION_MESSAGES,
    HSN_LOOKUP_MESSAGES,
    UserMessages,
    classify_error,
)
from .gemini_client import GeminiClient, build_generate_config, to_parts
from .geolocation import GeolocationResolver, check_coordinates
from .hsn_lookup import HsnLookupInvoker
from .response_parser import parse_response, strip_code_fence

__all__ = [
    "AnalysisInvoker",
    "HsnLookupInvoker",
    "GeolocationResolver",
    "GeminiClient",
    "UserMessages",
    "BILL_ANALYSIS_MESSAGES",
    "HSN_LOOKUP_MESSAGES",
    "GEOLOCATION_MESSAGES",
    "classify_error",
    "check_coordinates",
    "build_generate_config",
    "to_parts",
    "parse_response",
    "strip_code_fence",
]
