"""
Исключения для домена Bill Check.

Каждая ошибка несёт:
- message: диагностика для логов
- component: где произошла ошибка
- original_error: исходное исключение (если есть)
- user_message: короткий текст для пользователя, без трейсов

Иерархия:
    BillCheckError
    ├── ImageProcessingError
    │   ├── ImageDecodeError
    │   └── ImageEncodeError
    ├── OcrUnavailable          (восстанавливается в TextExtractor)
    ├── ValidationError         (некорректный ввод вызывающего кода)
    └── AnalysisError           (общая ошибка inference)
        ├── ResponseParseError
        ├── NetworkError
        └── ServiceError
"""

from typing import Optional


class BillCheckError(Exception):
    """Базовое исключение для ошибок домена Bill Check."""

    default_user_message = "Something went wrong. Please try again."

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        self.user_message = user_message or self.default_user_message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Bill Check Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ImageProcessingError(BillCheckError):
    """Ошибка обработки изображения."""

    default_user_message = "The image could not be processed. Please try another photo."


class ImageDecodeError(ImageProcessingError):
    """Изображение не удалось декодировать."""

    default_user_message = "The image could not be opened. Please upload a JPEG or PNG photo of the bill."


class ImageEncodeError(ImageProcessingError):
    """Не удалось закодировать улучшенное изображение."""

    default_user_message = "The image could not be prepared for analysis. Please try another photo."


class OcrUnavailable(BillCheckError):
    """OCR движок недоступен или упал на странице. Не фатально для пайплайна."""

    default_user_message = "Text extraction is unavailable. The bill will be analysed from the images only."


class ValidationError(BillCheckError):
    """Некорректный ввод: короткий запрос, неизвестная юрисдикция, нет изображений."""

    default_user_message = "Invalid input. Please check your request and try again."


class AnalysisError(BillCheckError):
    """Общая ошибка обращения к inference движку."""

    default_user_message = "An API error occurred during analysis. The service may be busy."


class ResponseParseError(AnalysisError):
    """Ответ модели не JSON или не соответствует схеме."""

    default_user_message = "Could not read the bill from the image. Please try again with a clearer, well-lit image."


class NetworkError(AnalysisError):
    """Нет связи с inference движком."""

    default_user_message = "Network error. Please check your connection and try again."


class ServiceError(AnalysisError):
    """Ошибка на стороне движка: перегрузка, 5xx, rate limit."""

    default_user_message = "An API error occurred during analysis. The service may be busy."
