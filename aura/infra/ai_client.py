# aura/infra/ai_client.py
"""
Thin async wrapper around the DeepSeek chat-completions API
(OpenAI-compatible, reached through the `openai` SDK).

complete() either returns the reply text or raises UpstreamFailure:
timeouts, network errors, provider errors and empty replies all end up
there. Callers own the fallback.
"""
import asyncio
import logging
from typing import Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from aura.core.config import Settings
from aura.infra.telemetry import PerformanceTracker
from aura.shared.errors import UpstreamFailure

logger = logging.getLogger(__name__)

Message = Dict[str, str]


class AIClient:

    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        timeout: float,
        tracker: Optional[PerformanceTracker] = None,
    ):
        self.model = model
        self.timeout = timeout
        self.tracker = tracker
        self._client = (
            AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
            if api_key else None
        )

    @classmethod
    def from_settings(cls, settings: Settings, tracker: Optional[PerformanceTracker] = None) -> "AIClient":
        return cls(
            api_key=settings.DEEPSEEK_API_KEY,
            base_url=settings.DEEPSEEK_BASE_URL,
            model=settings.DEEPSEEK_MODEL,
            timeout=settings.AI_TIMEOUT_SECONDS,
            tracker=tracker,
        )

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def complete(
        self,
        messages: List[Message],
        temperature: float = 0.7,
        max_tokens: int = 1000,
        operation: str = "ai.completion",
    ) -> str:
        if self._client is None:
            raise UpstreamFailure("AI provider not configured")

        try:
            if self.tracker is not None:
                async with self.tracker.track(operation, {"model": self.model}):
                    response = await self._request(messages, temperature, max_tokens)
            else:
                response = await self._request(messages, temperature, max_tokens)
        except asyncio.TimeoutError:
            logger.warning("%s timed out after %ss", operation, self.timeout)
            raise UpstreamFailure("AI provider timed out")
        except OpenAIError as e:
            logger.warning("%s failed: %s", operation, e)
            raise UpstreamFailure(f"AI provider error: {e}")

        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            raise UpstreamFailure("AI provider returned an empty reply")
        return content

    async def _request(self, messages: List[Message], temperature: float, max_tokens: int):
        # Hard bound on top of the SDK timeout (connect + read can exceed it)
        return await asyncio.wait_for(
            self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            ),
            timeout=self.timeout,
        )
