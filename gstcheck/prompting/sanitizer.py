"""
Очистка пользовательского текста перед вставкой в промпт.

Базовая защита от prompt injection через название товара:
удаляются символы ` < > { } и пробелы по краям.
"""

import re

_PROMPT_UNSAFE = re.compile(r"[`<>{}]")


def sanitize_for_prompt(text: str) -> str:
    """Удаляет ` < > { } и обрезает пробелы."""
    return _PROMPT_UNSAFE.sub("", text).strip()
