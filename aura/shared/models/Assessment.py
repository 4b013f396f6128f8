# aura/shared/models/Assessment.py
"""
Personality test models.

TestResult ──1:1──> SharedResult
    answers  (JSON) : [{"questionId": "q1", "value": 4, "trait": "openness",
                        "questionText": "...", "answerText": "Agree"}]
    traits   (JSON) : {"openness": 4.0, "neuroticism": 2.5}   ← 1–5 scale
    insights (JSON) : ["...", "..."]

Only `insights` is rewritten after creation (AI regeneration).
SharedResult is never purged: expired rows are filtered out at read time.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from aura.core.database import Base


class TestResult(Base):
    __tablename__ = "test_results"
    id           = Column(Integer, primary_key=True, index=True)
    user_id      = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    answers      = Column(JSON, nullable=False)
    traits       = Column(JSON, nullable=False)
    insights     = Column(JSON, nullable=False, default=list)
    created_at   = Column(DateTime(timezone=True), server_default=func.now())
    completed_at = Column(DateTime(timezone=True), nullable=True, index=True)

    user   = relationship("User", back_populates="test_results")
    shared = relationship(
        "SharedResult", back_populates="test_result",
        uselist=False, cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<TestResult id={self.id} user={self.user_id}>"


class SharedResult(Base):
    __tablename__ = "shared_results"
    id             = Column(Integer, primary_key=True, index=True)
    share_id       = Column(String(32), unique=True, index=True, nullable=False)
    test_result_id = Column(
        Integer, ForeignKey("test_results.id", ondelete="CASCADE"),
        unique=True, nullable=False,
    )
    expires_at     = Column(DateTime(timezone=True), nullable=False)
    view_count     = Column(Integer, nullable=False, default=0)
    created_at     = Column(DateTime(timezone=True), server_default=func.now())

    test_result = relationship("TestResult", back_populates="shared")

    def __repr__(self):
        return f"<SharedResult share_id={self.share_id} test={self.test_result_id}>"
