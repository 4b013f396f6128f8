# aura/shared/models/Telemetry.py
"""
Best-effort telemetry rows.

Writes here are never allowed to fail a user request: the telemetry
service swallows persistence errors and logs them locally.
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, Float, Text,
    DateTime, JSON, ForeignKey, Enum as SAEnum,
)
from sqlalchemy.sql import func

from aura.core.database import Base
from aura.shared.enums import ErrorSeverity


class ErrorLog(Base):
    __tablename__ = "error_logs"
    id          = Column(Integer, primary_key=True, index=True)
    user_id     = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    message     = Column(Text, nullable=False)
    stack       = Column(Text, nullable=True)
    context     = Column(String, nullable=True)
    severity    = Column(
        SAEnum(ErrorSeverity, name="errorseverity", values_callable=lambda e: [m.value for m in e]),
        nullable=False, default=ErrorSeverity.ERROR,
    )
    url         = Column(String, nullable=True)
    user_agent  = Column(String, nullable=True)
    timestamp   = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    resolved    = Column(Boolean, nullable=False, default=False, index=True)
    resolved_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<ErrorLog id={self.id} severity={self.severity} resolved={self.resolved}>"


class PerformanceMetric(Base):
    __tablename__ = "performance_metrics"
    id        = Column(Integer, primary_key=True, index=True)
    name      = Column(String, nullable=False, index=True)
    value     = Column(Float, nullable=False)
    tags      = Column(JSON, nullable=False, default=dict)
    timestamp = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<PerformanceMetric name={self.name} value={self.value}>"
