# aura/shared/models/__init__.py
"""
Single entry point for every SQLAlchemy model.

ALWAYS import models from here:
  from aura.shared.models import User, TestResult, SharedResult

Never from aura.shared.models.User etc. directly.
→ Guarantees every model is registered on Base.metadata
  before table creation (Alembic, create_all).
"""

from .User      import User
from .Assessment import TestResult, SharedResult
from .Telemetry import ErrorLog, PerformanceMetric
from .Mood      import MoodEntry

__all__ = [
    # User
    "User",
    # Assessment
    "TestResult",
    "SharedResult",
    # Telemetry
    "ErrorLog",
    "PerformanceMetric",
    # Mood
    "MoodEntry",
]
