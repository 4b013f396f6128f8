# aura/shared/models/User.py
"""
Application account.

Authentication only: assessment data lives on TestResult and mood logs
on MoodEntry, both linked through user_id.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from aura.core.database import Base
from aura.shared.enums import UserRole


class User(Base):
    __tablename__ = "users"

    id    = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name  = Column(String, nullable=False)

    hashed_password = Column(String, nullable=False)

    role      = Column(
        SAEnum(UserRole, name="userrole", values_callable=lambda e: [m.value for m in e]),
        default=UserRole.USER, nullable=False, index=True,
    )
    is_active = Column(Boolean, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # ── Relations ────────────────────────────────────────────
    test_results = relationship(
        "TestResult", back_populates="user",
        cascade="all, delete-orphan",
    )
    mood_entries = relationship(
        "MoodEntry", back_populates="user",
        cascade="all, delete-orphan",
    )

    # ── Helpers ──────────────────────────────────────────────
    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __repr__(self):
        return f"<User id={self.id} email={self.email} role={self.role}>"
