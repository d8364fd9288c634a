"""
DTO контракт: результат проверки чека (AnalysisInvoker -> вызывающий код).

Эта же модель передаётся в Gemini как response_schema, поэтому:
- JSON ключи в camelCase (alias), Python атрибуты в snake_case
- description полей - инструкции для модели, пишем по-английски

ВАЛИДАЦИЯ: Pydantic гарантирует, что наружу уходит только полностью
валидный объект. Отсутствующее обязательное поле = ошибка, без дефолтов.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ValidationStatus(str, Enum):
    """Статус проверки одной позиции чека."""
    CORRECT = "CORRECT"
    INCORRECT_CALCULATION = "INCORRECT_CALCULATION"
    INCORRECT_TAX_SLAB = "INCORRECT_TAX_SLAB"
    SUSPICIOUS = "SUSPICIOUS"
    MISSING_INFO = "MISSING_INFO"
    UNKNOWN = "UNKNOWN"


class OverallStatus(str, Enum):
    """Итоговый статус чека."""
    VERIFIED = "VERIFIED"
    ISSUES_FOUND = "ISSUES_FOUND"


class BillItem(BaseModel):
    """
    Позиция чека с результатом проверки GST.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    item_name: str = Field(..., description="Item name as printed on the bill")
    quantity: float = Field(..., ge=0, description="Quantity purchased")
    price: float = Field(..., ge=0, description="Unit price")
    total: float = Field(..., ge=0, description="Line total")
    tax_amount: float = Field(..., ge=0, description="GST amount charged for this line")
    status: ValidationStatus = Field(..., description="Validation status of this line")
    suggestion: Optional[str] = Field(
        None,
        description='Format as "Rule: [The rule]. Action: [The suggested action]."'
    )


class AnalysisResult(BaseModel):
    """
    Полный результат проверки чека.

    Все шесть полей верхнего уровня обязательны.
    Пустой items допустим только при overallStatus = VERIFIED.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    overall_status: OverallStatus = Field(..., description="VERIFIED if every item is correct, otherwise ISSUES_FOUND")
    store_name: str = Field(..., description="Store name from the bill")
    bill_date: str = Field(..., description="Bill date as printed")
    total_tax: float = Field(..., ge=0, description="Total tax on the bill")
    total_amount: float = Field(..., ge=0, description="Total amount payable")
    items: List[BillItem] = Field(..., description="Line items in bill order")

    @model_validator(mode="after")
    def empty_items_only_when_verified(self) -> "AnalysisResult":
        """Без позиций чек может быть только VERIFIED."""
        if not self.items and self.overall_status != OverallStatus.VERIFIED:
            raise ValueError("Пустой список items допустим только при overallStatus=VERIFIED")
        return self

    @property
    def issues(self) -> List[BillItem]:
        """Позиции со статусом отличным от CORRECT."""
        return [item for item in self.items if item.status != ValidationStatus.CORRECT]
