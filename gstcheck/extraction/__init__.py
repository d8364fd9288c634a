"""
Extraction: OCR страниц чека.

Граница: один текстовый блок на запрос (страницы через пустую строку).
"""

from .tesseract_engine import TesseractEngine, TesseractSession
from .text_extractor import TextExtractor, join_pages, normalize_page_text, PAGE_SEPARATOR

__all__ = [
    "TesseractEngine",
    "TesseractSession",
    "TextExtractor",
    "join_pages",
    "normalize_page_text",
    "PAGE_SEPARATOR",
]
