# aura/shared/enums.py
"""
All enumerations of the Aura project.

Single source of truth for roles, traits, mood categories and severities.
Imported by models, schemas, services and engine.
"""

from enum import Enum


class UserRole(str, Enum):
    USER  = "user"
    ADMIN = "admin"


class Trait(str, Enum):
    """The five Big-Five categories, in display order."""
    OPENNESS          = "openness"
    CONSCIENTIOUSNESS = "conscientiousness"
    EXTRAVERSION      = "extraversion"
    AGREEABLENESS     = "agreeableness"
    NEUROTICISM       = "neuroticism"


class SessionState(str, Enum):
    PRESENTING = "presenting"
    SUBMITTING = "submitting"
    COMPLETE   = "complete"


class ScoreScale(str, Enum):
    FIVE_POINT = "five_point"   # 1–5, canonical
    UNIT       = "unit"         # 0–1, converted on the way in


class MoodCategory(str, Enum):
    HAPPY     = "happy"
    CALM      = "calm"
    ENERGETIC = "energetic"
    SAD       = "sad"
    ANXIOUS   = "anxious"
    ANGRY     = "angry"


class ErrorSeverity(str, Enum):
    ERROR   = "error"
    WARNING = "warning"
    INFO    = "info"
