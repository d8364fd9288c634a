"""
Настройки проекта GST Bill Check.

ВАЖНО: Перед запуском укажите ключ Gemini API (GEMINI_API_KEY)!
"""

import os

# =============================================================================
# GEMINI API
# =============================================================================
# Ключ API. API_KEY оставлен для совместимости со старым окружением
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", "")

GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Таймаут одного запроса (миллисекунды). Ретраев нет
GEMINI_TIMEOUT_MS = int(os.getenv("GEMINI_TIMEOUT_MS", 120000))

# =============================================================================
# ЛОГИРОВАНИЕ
# =============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# =============================================================================
# НАСТРОЙКИ ИЗОБРАЖЕНИЙ
# =============================================================================
# Поддерживаемые форматы и их mime types
SUPPORTED_IMAGE_FORMATS = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
}

# Фиксированные параметры улучшения (без авто-экспозиции)
ENHANCE_BRIGHTNESS = 10
ENHANCE_CONTRAST = 50

# Ядро резкости 3x3, сумма весов = 1
SHARPEN_KERNEL = (
    (0, -1, 0),
    (-1, 5, -1),
    (0, -1, 0),
)

# Качество JPEG (0-100) для отправки в Gemini
JPEG_QUALITY = 95

# Сколько изображений улучшать параллельно
ENHANCE_MAX_WORKERS = int(os.getenv("ENHANCE_MAX_WORKERS", 4))

# =============================================================================
# НАСТРОЙКИ OCR (Tesseract)
# =============================================================================
# Путь к бинарнику tesseract (если не в PATH)
TESSERACT_CMD = os.getenv("TESSERACT_CMD", "")

# Английский + хинди: на чеках встречаются оба алфавита
OCR_LANGUAGES = os.getenv("OCR_LANGUAGES", "eng+hin")

# PSM 11 = sparse text (разрозненные блоки текста, как на чеках)
OCR_PAGE_SEG_MODE = 11

# Белый список символов (пробел разрешён всегда)
OCR_CHAR_WHITELIST = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    ".,-/:()₹%@#&*_"
)

# Текст-заглушка для страницы, где OCR не сработал
OCR_UNAVAILABLE_TEXT = "text extraction unavailable"

# Текст-заглушка для страницы, где OCR ничего не нашёл
OCR_EMPTY_PAGE_TEXT = "no text recognized"

# =============================================================================
# НАСТРОЙКИ HSN LOOKUP
# =============================================================================
HSN_MIN_QUERY_LENGTH = 3


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации."""
    errors = []

    if not GEMINI_API_KEY:
        errors.append(
            "GEMINI_API_KEY не указан!\n"
            "Укажите ключ через переменную окружения GEMINI_API_KEY."
        )

    if ENHANCE_MAX_WORKERS < 1:
        errors.append(f"ENHANCE_MAX_WORKERS должен быть >= 1, получено: {ENHANCE_MAX_WORKERS}")

    if errors:
        raise ValueError("\n".join(errors))

    return True
