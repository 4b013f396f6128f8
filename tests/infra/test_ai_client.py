# tests/infra/test_ai_client.py
"""
Unit tests for infra.ai_client.AIClient

The SDK client is replaced by a MagicMock: no network.

Coverage:
    - Reply text returned
    - No API key → disabled, UpstreamFailure
    - Timeout / OpenAIError / empty reply → UpstreamFailure
    - Slow call recorded by the tracker
"""
import asyncio
import pytest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from openai import OpenAIError

from aura.infra.ai_client import AIClient
from aura.shared.errors import UpstreamFailure
from tests.conftest import make_tracker

pytestmark = pytest.mark.engine

MESSAGES = [{"role": "user", "content": "hello"}]


def _reply(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(create, timeout: float = 1.0, tracker=None) -> AIClient:
    client = AIClient(
        api_key="sk-test", base_url="http://ai.invalid/v1", model="deepseek-chat",
        timeout=timeout, tracker=tracker,
    )
    sdk = MagicMock()
    sdk.chat.completions.create = create
    client._client = sdk
    return client


async def test_returns_reply_text():
    create = AsyncMock(return_value=_reply("1. You are curious."))
    client = _client(create)
    assert await client.complete(MESSAGES, temperature=0.2, max_tokens=50) == "1. You are curious."
    kwargs = create.await_args.kwargs
    assert kwargs["model"] == "deepseek-chat"
    assert kwargs["messages"] == MESSAGES
    assert kwargs["max_tokens"] == 50


async def test_disabled_without_key():
    client = AIClient(api_key=None, base_url="http://ai.invalid/v1", model="m", timeout=1.0)
    assert client.enabled is False
    with pytest.raises(UpstreamFailure):
        await client.complete(MESSAGES)


async def test_timeout():
    async def slow(**kwargs):
        await asyncio.sleep(1)
        return _reply("late")

    client = _client(slow, timeout=0.01)
    with pytest.raises(UpstreamFailure, match="timed out"):
        await client.complete(MESSAGES)


async def test_provider_error():
    client = _client(AsyncMock(side_effect=OpenAIError("rate limited")))
    with pytest.raises(UpstreamFailure, match="rate limited"):
        await client.complete(MESSAGES)


@pytest.mark.parametrize("content", [None, "", "   "])
async def test_empty_reply(content):
    client = _client(AsyncMock(return_value=_reply(content)))
    with pytest.raises(UpstreamFailure):
        await client.complete(MESSAGES)


async def test_no_choices():
    client = _client(AsyncMock(return_value=SimpleNamespace(choices=[])))
    with pytest.raises(UpstreamFailure):
        await client.complete(MESSAGES)


async def test_slow_call_is_tracked():
    ticks = iter([0.0, 2.0])
    tracker = make_tracker(threshold_ms=1000, clock=lambda: next(ticks))
    client = _client(AsyncMock(return_value=_reply("ok")), tracker=tracker)
    await client.complete(MESSAGES, operation="ai.insights")
    [sample] = tracker.snapshot()
    assert sample["operation"] == "ai.insights"
    assert sample["metadata"] == {"model": "deepseek-chat"}
