# aura/modules/mood/schemas.py
from datetime import date as Date, datetime
from typing import List, Optional

from pydantic import Field

from aura.shared.enums import MoodCategory
from aura.shared.schemas import CamelModel


class MoodEntryIn(CamelModel):
    date: Date
    level: int = Field(..., ge=1, le=5)
    category: MoodCategory
    notes: str = Field("", max_length=2000)
    factors: List[str] = Field(default_factory=list, max_length=20)


class MoodEntryOut(CamelModel):
    id: int
    date: Date
    level: int
    category: MoodCategory
    notes: str = ""
    factors: List[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MoodListOut(CamelModel):
    entries: List[MoodEntryOut]


class LatestMoodOut(CamelModel):
    """mood=None when nothing has been logged yet."""
    mood: Optional[MoodEntryOut] = None
