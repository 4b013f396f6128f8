# aura/modules/progress/schemas.py
from typing import List, Optional

from aura.shared.schemas import CamelModel


class AchievementOut(CamelModel):
    id: str
    title: str
    description: str
    category: str
    unlocked: bool
    progress: int
    max_progress: int


class ProgressStatsOut(CamelModel):
    tests_completed: int
    mood_entries_logged: int
    insights_generated: int
    days_active: int
    longest_mood_streak: int


class ProgressOut(CamelModel):
    level: int
    title: str
    experience: int
    next_level_experience: Optional[int] = None   # None at the top level
    level_progress: int
    achievements: List[AchievementOut]
    stats: ProgressStatsOut
