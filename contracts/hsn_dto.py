"""
DTO контракт: результат поиска HSN/SAC кода (HsnLookupInvoker -> вызывающий код).

Все шесть полей обязательны, опциональных полей нет.
"""

from pydantic import BaseModel, ConfigDict, Field


class HsnResult(BaseModel):
    """HSN/SAC код товара и типичные ставки GST."""

    model_config = ConfigDict(frozen=True)

    code: str = Field(..., description="The most relevant 4 or 8-digit HSN/SAC code.")
    description: str = Field(..., description="Official description for this HSN/SAC code.")
    igst: str = Field(..., description="The typical IGST rate as a percentage, e.g., '18%'.")
    cgst: str = Field(..., description="The typical CGST rate as a percentage, e.g., '9%'.")
    sgst: str = Field(..., description="The typical SGST rate as a percentage, e.g., '9%'.")
    details: str = Field(
        ...,
        description=(
            "Provide brief, important details. Mention common exemptions, special conditions, "
            "or if the rate is subject to frequent changes. "
            "If none, state 'No specific exemptions or conditions.'."
        )
    )
