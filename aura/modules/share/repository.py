# aura/modules/share/repository.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from aura.shared.errors import Conflict, PersistenceFailure
from aura.shared.models import SharedResult

logger = logging.getLogger(__name__)


class ShareRepository:

    async def get_by_share_id(self, db: AsyncSession, share_id: str) -> Optional[SharedResult]:
        """Loads the linked TestResult along with the share."""
        r = await db.execute(
            select(SharedResult)
            .options(selectinload(SharedResult.test_result))
            .where(SharedResult.share_id == share_id)
        )
        return r.scalar_one_or_none()

    async def get_by_test_result_id(
        self, db: AsyncSession, test_result_id: int
    ) -> Optional[SharedResult]:
        r = await db.execute(
            select(SharedResult).where(SharedResult.test_result_id == test_result_id)
        )
        return r.scalar_one_or_none()

    async def create(
        self, db: AsyncSession, test_result_id: int, share_id: str, expires_at: datetime
    ) -> SharedResult:
        """Conflict when the test already has a link (or the share_id is taken)."""
        db_obj = SharedResult(
            share_id=share_id,
            test_result_id=test_result_id,
            expires_at=expires_at,
            view_count=0,
        )
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
        except IntegrityError as e:
            await db.rollback()
            raise Conflict("Share link already exists") from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not create share link for test %s", test_result_id)
            raise PersistenceFailure("Failed to create share link") from e
        return db_obj

    async def renew(
        self, db: AsyncSession, shared: SharedResult, share_id: str, expires_at: datetime
    ) -> SharedResult:
        """Reissues an expired link in place: new share_id, new expiry, views reset."""
        shared.share_id = share_id
        shared.expires_at = expires_at
        shared.view_count = 0
        try:
            await db.commit()
            await db.refresh(shared)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not renew share link %s", shared.id)
            raise PersistenceFailure("Failed to renew share link") from e
        return shared

    async def increment_views(self, db: AsyncSession, shared_id: int) -> int:
        """Atomic view_count + 1, returns the new count."""
        try:
            new_count = await db.scalar(
                update(SharedResult)
                .where(SharedResult.id == shared_id)
                .values(view_count=SharedResult.view_count + 1)
                .returning(SharedResult.view_count)
            )
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception("Could not count view of share %s", shared_id)
            raise PersistenceFailure("Failed to update view count") from e
        return new_count or 0
