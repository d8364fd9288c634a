"""
Контракт: закрытый список юрисдикций (штаты и союзные территории Индии).

Используется:
- PromptAssembler: параметр промпта (валидируется ДО сборки запроса)
- GeolocationResolver: допустимые ответы модели (НЕ проверяются автоматически)

Значения enum = отображаемые имена, именно их видит модель.
"""

from enum import Enum
from typing import Optional


class IndianState(str, Enum):
    """Штаты и союзные территории Индии."""

    ANDAMAN_AND_NICOBAR_ISLANDS = "Andaman and Nicobar Islands"
    ANDHRA_PRADESH = "Andhra Pradesh"
    ARUNACHAL_PRADESH = "Arunachal Pradesh"
    ASSAM = "Assam"
    BIHAR = "Bihar"
    CHANDIGARH = "Chandigarh"
    CHHATTISGARH = "Chhattisgarh"
    DADRA_AND_NAGAR_HAVELI_AND_DAMAN_AND_DIU = "Dadra and Nagar Haveli and Daman and Diu"
    DELHI = "Delhi"
    GOA = "Goa"
    GUJARAT = "Gujarat"
    HARYANA = "Haryana"
    HIMACHAL_PRADESH = "Himachal Pradesh"
    JAMMU_AND_KASHMIR = "Jammu and Kashmir"
    JHARKHAND = "Jharkhand"
    KARNATAKA = "Karnataka"
    KERALA = "Kerala"
    LADAKH = "Ladakh"
    LAKSHADWEEP = "Lakshadweep"
    MADHYA_PRADESH = "Madhya Pradesh"
    MAHARASHTRA = "Maharashtra"
    MANIPUR = "Manipur"
    MEGHALAYA = "Meghalaya"
    MIZORAM = "Mizoram"
    NAGALAND = "Nagaland"
    ODISHA = "Odisha"
    PUDUCHERRY = "Puducherry"
    PUNJAB = "Punjab"
    RAJASTHAN = "Rajasthan"
    SIKKIM = "Sikkim"
    TAMIL_NADU = "Tamil Nadu"
    TELANGANA = "Telangana"
    TRIPURA = "Tripura"
    UTTAR_PRADESH = "Uttar Pradesh"
    UTTARAKHAND = "Uttarakhand"
    WEST_BENGAL = "West Bengal"

    @classmethod
    def names(cls) -> list[str]:
        """Все допустимые имена в порядке объявления."""
        return [member.value for member in cls]

    @classmethod
    def from_name(cls, name: str) -> Optional["IndianState"]:
        """
        Ищет юрисдикцию по точному имени.

        Для проверки ответа GeolocationResolver на стороне вызывающего кода.

        Returns:
            IndianState или None, если имя не из списка
        """
        try:
            return cls(name)
        except ValueError:
            return None
