"""Prompting exports."""

from .prompt_assembler import PromptAssembler, resolve_jurisdiction, wrap_ocr_text
from .sanitizer import sanitize_for_prompt
from .templates import OCR_TEXT_END, OCR_TEXT_START

__all__ = [
    'PromptAssembler',
    'resolve_jurisdiction',
    'wrap_ocr_text',
    'sanitize_for_prompt',
    'OCR_TEXT_START',
    'OCR_TEXT_END',
]
