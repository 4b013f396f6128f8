# aura/modules/share/schemas.py
from datetime import datetime
from typing import Dict, List, Optional

from aura.shared.schemas import CamelModel


class ShareIn(CamelModel):
    test_id: int


class ShareOut(CamelModel):
    share_id: str
    expires_at: Optional[datetime] = None


class SharedResultOut(CamelModel):
    """Public view: no answers, no user."""
    traits: Dict[str, float]
    insights: List[str]
    completed_at: Optional[datetime] = None
    view_count: int
