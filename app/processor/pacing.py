import asyncio
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from app.config.settings import Settings


class BasePacer(ABC):
    """Rate-limiting strategy awaited around calls to the AI provider."""

    @abstractmethod
    async def wait(self) -> None:
        raise NotImplementedError


class NoDelayPacer(BasePacer):
    async def wait(self) -> None:
        return None


class FixedDelayPacer(BasePacer):
    """Sleeps a fixed delay on every call (the inter-file gap of a batch)."""

    def __init__(self, delay_seconds: float) -> None:
        if delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")
        self.delay_seconds = delay_seconds

    async def wait(self) -> None:
        await asyncio.sleep(self.delay_seconds)


class IntervalPacer(BasePacer):
    """Spaces successive returns from wait() at least `interval_seconds` apart.

    Safe to share between concurrent tasks: each caller is released in turn,
    so request starts never come closer together than the interval.
    """

    def __init__(
        self,
        interval_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_seconds < 0:
            raise ValueError("interval_seconds must be >= 0")
        self.interval_seconds = interval_seconds
        self._clock = clock
        self._lock = asyncio.Lock()
        self._next_start: float | None = None

    async def wait(self) -> None:
        async with self._lock:
            now = self._clock()
            if self._next_start is not None and self._next_start > now:
                await asyncio.sleep(self._next_start - now)
                now = self._clock()
            self._next_start = now + self.interval_seconds


def build_pacer(settings: Settings) -> BasePacer:
    """Inter-file pacer for the batch pipeline."""
    if settings.pacing_delay_ms == 0:
        return NoDelayPacer()
    return FixedDelayPacer(settings.pacing_delay_ms / 1000)


def build_retry_pacer(settings: Settings) -> BasePacer:
    """Start-spacing pacer for concurrent retries."""
    if settings.pacing_delay_ms == 0:
        return NoDelayPacer()
    return IntervalPacer(settings.pacing_delay_ms / 1000)
