# aura/modules/insights/schemas.py
from typing import List

from aura.shared.schemas import CamelModel


class InsightsIn(CamelModel):
    test_id: int


class InsightsOut(CamelModel):
    success: bool = True
    insights: List[str]
    is_fallback: bool = False
