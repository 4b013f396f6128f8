# aura/modules/share/service.py
"""
Public share links for a test result.

One link per result: sharing twice returns the same share_id.
Links expire after SHARE_EXPIRY_DAYS; an expired link reads as missing,
and sharing the result again reissues it under a new share_id.
"""
import logging
import secrets
import string
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from aura.core.config import settings
from aura.modules.assessment.repository import AssessmentRepository
from aura.modules.share.repository import ShareRepository
from aura.shared.errors import Conflict, NotFound
from aura.shared.models import User

logger = logging.getLogger(__name__)

repo = ShareRepository()
results_repo = AssessmentRepository()

SHARE_ID_LENGTH = 10
SHARE_ID_ALPHABET = string.ascii_letters + string.digits + "_-"


def new_share_id(length: int = SHARE_ID_LENGTH) -> str:
    return "".join(secrets.choice(SHARE_ID_ALPHABET) for _ in range(length))


def is_expired(expires_at: Optional[datetime], now: Optional[datetime] = None) -> bool:
    if expires_at is None:
        return False
    now = now or datetime.now(timezone.utc)
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at < now


class ShareService:

    async def share(self, db, user: User, test_id: int) -> Dict:
        result = await results_repo.get_result(db, test_id, user.id)
        if result is None:
            raise NotFound("Test result not found")

        expires_at = datetime.now(timezone.utc) + timedelta(days=settings.SHARE_EXPIRY_DAYS)
        existing = await repo.get_by_test_result_id(db, test_id)
        if existing is not None:
            if is_expired(existing.expires_at):
                existing = await repo.renew(db, existing, new_share_id(), expires_at)
                logger.info("Expired share link renewed for test %s", test_id)
            return {"share_id": existing.share_id, "expires_at": existing.expires_at}

        try:
            shared = await repo.create(db, test_id, new_share_id(), expires_at)
        except Conflict:
            # Concurrent share of the same test: the other request won
            shared = await repo.get_by_test_result_id(db, test_id)
            if shared is None:
                raise
        logger.info("Share link created for test %s", test_id)
        return {"share_id": shared.share_id, "expires_at": shared.expires_at}

    async def view(self, db, share_id: str) -> Dict:
        shared = await repo.get_by_share_id(db, share_id)
        if shared is None or is_expired(shared.expires_at):
            raise NotFound("Shared result not found or expired")

        view_count = await repo.increment_views(db, shared.id)
        result = shared.test_result
        return {
            "traits": result.traits or {},
            "insights": result.insights or [],
            "completed_at": result.completed_at,
            "view_count": view_count,
        }
