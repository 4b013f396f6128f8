# aura/shared/models/Mood.py
"""
Daily mood log.

One entry per (user, day): logging twice on the same day rewrites the
first entry instead of adding a second one.
    level    : 1 (very low) … 5 (very high)
    factors (JSON) : ["sleep", "work"]
"""
from sqlalchemy import (
    Column, Integer, String, Text, Date, DateTime, JSON, ForeignKey,
    Enum as SAEnum, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from aura.core.database import Base
from aura.shared.enums import MoodCategory


class MoodEntry(Base):
    __tablename__ = "mood_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_mood_entries_user_date"),
    )

    id       = Column(Integer, primary_key=True, index=True)
    user_id  = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    date     = Column(Date, nullable=False, index=True)
    level    = Column(Integer, nullable=False)
    category = Column(
        SAEnum(MoodCategory, name="moodcategory", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    notes    = Column(Text, nullable=False, default="")
    factors  = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    user = relationship("User", back_populates="mood_entries")

    def __repr__(self):
        return f"<MoodEntry user={self.user_id} date={self.date} level={self.level}>"
