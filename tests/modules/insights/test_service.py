# tests/modules/insights/test_service.py
"""
Unit tests for modules.insights.service.InsightService

Coverage:
    regenerate():
        - Result missing / not owned → NotFound
        - AI reply split and stored, is_fallback=False
        - AI disabled / UpstreamFailure / unusable reply → local insights, stored
        - DB update failure → local insights, is_fallback=True
        - At most INSIGHT_COUNT insights kept
    build_insight_prompt(): scores and answer summary embedded
"""
import pytest
from unittest.mock import AsyncMock

from aura.engine.psychometrics.insights import INSIGHT_COUNT, local_insights
from aura.modules.insights.service import InsightService, build_insight_prompt
from aura.shared.errors import NotFound, PersistenceFailure, UpstreamFailure
from tests.conftest import make_ai_client, make_async_db, make_test_result, make_user, scores_full

pytestmark = pytest.mark.service

service = InsightService()

AI_REPLY = (
    "Here is my analysis:\n"
    "1. You are curious and imaginative.\n"
    "2. You prefer quiet evenings.\n"
    "3. You care about harmony."
)


@pytest.fixture
def stored_result(mocker):
    result = make_test_result(id=3)
    mocker.patch(
        "aura.modules.insights.service.repo.get_result",
        AsyncMock(return_value=result),
    )
    return result


@pytest.fixture
def update_insights(mocker):
    return mocker.patch(
        "aura.modules.insights.service.repo.update_insights",
        AsyncMock(side_effect=lambda db, result, insights: result),
    )


class TestRegenerate:
    async def test_not_found(self, mocker):
        mocker.patch(
            "aura.modules.insights.service.repo.get_result",
            AsyncMock(return_value=None),
        )
        with pytest.raises(NotFound):
            await service.regenerate(make_async_db(), make_ai_client(), make_user(), 99)

    async def test_ai_insights_stored(self, stored_result, update_insights):
        ai = make_ai_client(reply=AI_REPLY)
        out = await service.regenerate(make_async_db(), ai, make_user(), 3)

        assert out == {
            "success": True,
            "insights": [
                "You are curious and imaginative.",
                "You prefer quiet evenings.",
                "You care about harmony.",
            ],
            "is_fallback": False,
        }
        assert update_insights.await_args.args[2] == out["insights"]
        assert ai.complete.await_args.kwargs["operation"] == "ai.insights"

    async def test_capped_at_insight_count(self, stored_result, update_insights):
        reply = "\n".join(f"{i}. Insight {letter}." for i, letter in enumerate("ABCDEFGH", start=1))
        out = await service.regenerate(make_async_db(), make_ai_client(reply=reply), make_user(), 3)
        assert len(out["insights"]) == INSIGHT_COUNT

    @pytest.mark.parametrize("ai", [
        make_ai_client(enabled=False),
        make_ai_client(error=UpstreamFailure("AI provider timed out")),
        make_ai_client(reply="-\n*"),
    ])
    async def test_local_fallback_stored(self, stored_result, update_insights, ai):
        out = await service.regenerate(make_async_db(), ai, make_user(), 3)
        assert out["is_fallback"] is True
        assert out["insights"] == local_insights(scores_full())
        update_insights.assert_awaited_once()

    async def test_db_failure_serves_local_insights(self, stored_result, mocker):
        mocker.patch(
            "aura.modules.insights.service.repo.update_insights",
            AsyncMock(side_effect=PersistenceFailure("Failed to update insights")),
        )
        out = await service.regenerate(make_async_db(), make_ai_client(reply=AI_REPLY), make_user(), 3)
        assert out == {
            "success": True,
            "insights": local_insights(scores_full()),
            "is_fallback": True,
        }


def test_prompt_embeds_scores_and_answers():
    result = make_test_result()
    messages = build_insight_prompt(result.traits, result.answers)
    content = messages[1]["content"]
    assert "openness: 4.50" in content
    assert "Q1: I enjoy trying new and different things. - Answer: Strongly Agree (Value: 5)" in content
    assert "5 distinct insights" in messages[0]["content"]
