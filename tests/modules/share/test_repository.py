# tests/modules/share/test_repository.py
"""
Unit tests for modules.share.repository.ShareRepository.renew()
"""
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError

from aura.modules.share.repository import ShareRepository
from aura.shared.errors import PersistenceFailure
from tests.conftest import make_async_db, make_shared_result

pytestmark = pytest.mark.service

repo = ShareRepository()


async def test_renew_resets_link():
    db = make_async_db()
    shared = make_shared_result(
        share_id="OldLink001",
        expires_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        view_count=9,
    )
    expires_at = datetime.now(timezone.utc) + timedelta(days=30)

    out = await repo.renew(db, shared, "NewLink001", expires_at)

    assert out is shared
    assert (out.share_id, out.expires_at, out.view_count) == ("NewLink001", expires_at, 0)
    db.commit.assert_awaited_once()


async def test_renew_db_error_rolls_back():
    db = make_async_db()
    db.commit = AsyncMock(side_effect=OperationalError("UPDATE", {}, Exception("down")))

    with pytest.raises(PersistenceFailure):
        await repo.renew(db, make_shared_result(), "NewLink001", datetime.now(timezone.utc))
    db.rollback.assert_awaited_once()
