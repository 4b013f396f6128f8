# tests/modules/progress/test_router.py
"""
HTTP tests for modules.progress.router

Coverage:
    GET /progress → 200 camelCase payload, 401 without token
"""
import pytest
from unittest.mock import AsyncMock

from aura.engine.progress import ActivityStats, build_progress

pytestmark = pytest.mark.router


async def test_progress_200(user_client, mocker):
    mocker.patch(
        "aura.modules.progress.router.service.get_progress",
        AsyncMock(return_value=build_progress(ActivityStats(tests_completed=1))),
    )
    resp = await user_client.get("/progress")
    assert resp.status_code == 200
    data = resp.json()
    assert data["level"] == 2
    assert data["nextLevelExperience"] == 250
    assert data["stats"]["testsCompleted"] == 1
    assert data["achievements"][0]["maxProgress"] == 1


async def test_progress_without_token_401(client):
    resp = await client.get("/progress")
    assert resp.status_code == 401
