# aura/infra/telemetry.py
"""
Slow-operation sampling.

SampleBuffer      : fixed-capacity ring buffer, oldest sample dropped first
PerformanceTracker: times a block, buffers it when slower than the
                    threshold, drains the buffer into a sink once
                    `flush_at` samples are waiting

The sink is fire-and-forget: any failure is logged and the batch dropped.
Nothing in here may fail the request being measured.
"""
import asyncio
import logging
import time
from collections import deque
from contextlib import asynccontextmanager
from dataclasses import dataclass, field, asdict
from typing import Any, Awaitable, Callable, Dict, List, Optional, Set

logger = logging.getLogger(__name__)


@dataclass
class PerformanceSample:
    operation: str
    duration_ms: float
    timestamp: float
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


Sink = Callable[[List[PerformanceSample]], Awaitable[None]]


class SampleBuffer:

    def __init__(self, capacity: int = 20):
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self.capacity = capacity
        self._items: deque = deque(maxlen=capacity)

    def append(self, sample: PerformanceSample) -> None:
        self._items.append(sample)

    def drain(self) -> List[PerformanceSample]:
        items = list(self._items)
        self._items.clear()
        return items

    def snapshot(self) -> List[PerformanceSample]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)


class PerformanceTracker:

    def __init__(
        self,
        buffer: SampleBuffer,
        threshold_ms: float = 1000.0,
        flush_at: int = 5,
        sink: Optional[Sink] = None,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.buffer = buffer
        self.threshold_ms = threshold_ms
        self.flush_at = flush_at
        self.sink = sink
        self._clock = clock
        self._flushing = False
        self._pending: Set[asyncio.Task] = set()

    @asynccontextmanager
    async def track(self, operation: str, metadata: Optional[Dict[str, Any]] = None):
        start = self._clock()
        try:
            yield
        finally:
            self.record(operation, (self._clock() - start) * 1000, metadata)

    def record(self, operation: str, duration_ms: float, metadata: Optional[Dict[str, Any]] = None) -> bool:
        """True if the sample was slow enough to be kept."""
        if duration_ms <= self.threshold_ms:
            return False

        self.buffer.append(PerformanceSample(
            operation=operation,
            duration_ms=round(duration_ms, 2),
            timestamp=time.time(),
            metadata=dict(metadata or {}),
        ))
        logger.warning("Slow operation: %s took %.0fms", operation, duration_ms)

        if self.sink is not None and len(self.buffer) >= self.flush_at and not self._flushing:
            try:
                task = asyncio.get_running_loop().create_task(self.flush())
            except RuntimeError:
                # no running loop (sync caller): samples wait for the next async record
                return True
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        return True

    async def flush(self) -> int:
        """Sends every buffered sample to the sink. Returns how many were sent."""
        if self.sink is None or self._flushing or not len(self.buffer):
            return 0
        self._flushing = True
        batch = self.buffer.drain()
        try:
            await self.sink(batch)
            return len(batch)
        except Exception:
            logger.exception("Dropping %d performance samples: sink failed", len(batch))
            return 0
        finally:
            self._flushing = False

    def snapshot(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.buffer.snapshot()]
