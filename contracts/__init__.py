"""
Контракты DTO проекта GST Bill Check.

Все контракты используют Pydantic v2 для валидации.

Контракты:
- Bill analysis -> вызывающий код: AnalysisResult (analysis_dto.py)
- HSN lookup -> вызывающий код: HsnResult (hsn_dto.py)
- Закрытый список юрисдикций: IndianState (jurisdiction.py)
"""

from .analysis_dto import AnalysisResult, BillItem, OverallStatus, ValidationStatus
from .hsn_dto import HsnResult
from .jurisdiction import IndianState

__all__ = [
    "AnalysisResult",
    "BillItem",
    "OverallStatus",
    "ValidationStatus",
    "HsnResult",
    "IndianState",
]
