"""
OCR: Tesseract интеграция (через pytesseract).

Настройки под чеки:
- два языка одновременно (eng+hin): на чеках смешаны алфавиты
- PSM 11 (sparse text): чек - это колонки и разрозненные блоки, не абзацы
- белый список символов: подавляет мусорные глифы

Жизненный цикл: session() открывается один раз на многостраничный запрос
и закрывается на любом пути выхода (with-блок).
"""

import io
from contextlib import contextmanager
from typing import Iterator, List, Optional

import pytesseract
from PIL import Image
from loguru import logger

from config.settings import (
    OCR_CHAR_WHITELIST,
    OCR_LANGUAGES,
    OCR_PAGE_SEG_MODE,
    TESSERACT_CMD,
)
from ..domain.contracts import EnhancedImage
from ..domain.exceptions import OcrUnavailable
from ..domain.interfaces import IOcrEngine, IOcrSession


def use_tesseract_cmd(tesseract_cmd: Optional[str]) -> None:
    """
    Выставляет путь к бинарнику перед вызовом pytesseract.

    pytesseract хранит путь глобально, поэтому он выставляется
    непосредственно перед каждым вызовом, а не при создании движка.
    """
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd


class TesseractSession(IOcrSession):
    """
    Открытая сессия Tesseract.

    Конфигурация (языки, PSM, whitelist) вычисляется один раз при открытии.
    """

    def __init__(self, languages: str, config: str, tesseract_cmd: Optional[str] = None) -> None:
        self.languages = languages
        self.config = config
        self.tesseract_cmd = tesseract_cmd
        self.pages_processed = 0
        self._closed = False

    def recognize(self, image: EnhancedImage) -> str:
        """
        Распознаёт текст одной страницы.

        Raises:
            OcrUnavailable: Если сессия закрыта или Tesseract упал
        """
        if self._closed:
            raise OcrUnavailable(
                message="Сессия OCR уже закрыта",
                component="TesseractSession"
            )

        try:
            use_tesseract_cmd(self.tesseract_cmd)
            with Image.open(io.BytesIO(image.data)) as pil_image:
                text = pytesseract.image_to_string(
                    pil_image,
                    lang=self.languages,
                    config=self.config
                )
        except Exception as e:
            raise OcrUnavailable(
                message=f"Ошибка OCR: {image.source_name}",
                component="TesseractSession",
                original_error=e
            )

        self.pages_processed += 1
        logger.debug(f"[TesseractSession] Распознано: {image.source_name} ({len(text)} символов)")
        return text

    def close(self) -> None:
        self._closed = True


class TesseractEngine(IOcrEngine):
    """
    Обёртка над Tesseract OCR.

    Реализует интерфейс IOcrEngine.
    """

    def __init__(
        self,
        languages: str = OCR_LANGUAGES,
        page_seg_mode: int = OCR_PAGE_SEG_MODE,
        char_whitelist: str = OCR_CHAR_WHITELIST,
        tesseract_cmd: Optional[str] = None
    ):
        """
        Инициализация движка.

        Args:
            languages: Языки Tesseract через '+' (default eng+hin)
            page_seg_mode: Page Segmentation Mode (default 11 = sparse text)
            char_whitelist: Допустимые символы
            tesseract_cmd: Путь к бинарнику (если не в PATH)
        """
        self.languages = languages
        self.page_seg_mode = page_seg_mode
        self.char_whitelist = char_whitelist

        self.tesseract_cmd = tesseract_cmd or TESSERACT_CMD or None

        logger.debug(
            f"[TesseractEngine] Инициализирован "
            f"(lang={languages}, psm={page_seg_mode})"
        )

    def build_config(self) -> str:
        """Строка конфигурации Tesseract."""
        config_parts = [f"--psm {self.page_seg_mode}"]
        if self.char_whitelist:
            config_parts.append(f"-c tessedit_char_whitelist={self.char_whitelist}")
        return " ".join(config_parts)

    def _resolve_languages(self) -> str:
        """
        Оставляет только установленные языки.

        Raises:
            OcrUnavailable: Если ни один запрошенный язык не установлен
        """
        requested: List[str] = [lang for lang in self.languages.split("+") if lang]
        installed = set(pytesseract.get_languages(config=""))

        available = [lang for lang in requested if lang in installed]
        missing = [lang for lang in requested if lang not in installed]

        if missing:
            logger.warning(f"[TesseractEngine] Языки не установлены: {missing}")
        if not available:
            raise OcrUnavailable(
                message=f"Ни один из языков не установлен: {self.languages}",
                component="TesseractEngine"
            )
        return "+".join(available)

    @contextmanager
    def session(self) -> Iterator[TesseractSession]:
        """
        Открывает сессию Tesseract.

        Raises:
            OcrUnavailable: Если Tesseract не установлен или нет языков
        """
        try:
            use_tesseract_cmd(self.tesseract_cmd)
            version = pytesseract.get_tesseract_version()
            languages = self._resolve_languages()
        except OcrUnavailable:
            raise
        except Exception as e:
            raise OcrUnavailable(
                message="Tesseract недоступен (не установлен или не в PATH)",
                component="TesseractEngine",
                original_error=e
            )

        logger.info(f"[TesseractEngine] Сессия открыта (Tesseract {version}, lang={languages})")
        session = TesseractSession(languages, self.build_config(), self.tesseract_cmd)
        try:
            yield session
        finally:
            session.close()
            logger.info(f"[TesseractEngine] Сессия закрыта ({session.pages_processed} страниц)")
