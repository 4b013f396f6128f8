# aura/modules/telemetry/schemas.py
from pydantic import Field
from typing import Any, Dict, List, Optional
from datetime import datetime

from aura.shared.enums import ErrorSeverity
from aura.shared.schemas import CamelModel


# ── Error logs ─────────────────────────────────────────────

class ErrorLogIn(CamelModel):
    message: str = Field(..., min_length=1)
    stack: Optional[str] = None
    context: Optional[str] = None
    severity: ErrorSeverity = ErrorSeverity.ERROR
    url: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: Optional[datetime] = None


class ErrorLogOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    message: str
    stack: Optional[str] = None
    context: Optional[str] = None
    severity: ErrorSeverity
    url: Optional[str] = None
    user_agent: Optional[str] = None
    timestamp: Optional[datetime] = None
    resolved: bool
    resolved_at: Optional[datetime] = None


class ErrorListOut(CamelModel):
    errors: List[ErrorLogOut]
    total: int


class ResolveOut(CamelModel):
    success: bool = True
    error: ErrorLogOut


# ── Metrics ────────────────────────────────────────────────

class MetricIn(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    value: float
    tags: Dict[str, Any] = {}
    timestamp: Optional[datetime] = None


class StoredOut(CamelModel):
    """success is true even when storage failed: telemetry never errors the client."""
    success: bool = True
    stored: bool = True


class PerformanceSampleOut(CamelModel):
    operation: str
    duration_ms: float
    timestamp: float
    metadata: Dict[str, Any] = {}


class PerformanceOut(CamelModel):
    threshold_ms: float
    capacity: int
    samples: List[PerformanceSampleOut]
