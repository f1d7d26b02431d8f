"""Time-driven progress estimate for a generation cycle.

The provider exposes no real progress signal, so the bar is advanced by a
periodic task on a fixed schedule that depends only on whether the cycle
renders one image or several. The ticker lives inside ``running()`` and is
cancelled when that scope exits, whichever way it exits.
"""

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator, Callable, List

from ..models.enums import GenerationPhase
from ..models.schemas import ProgressState
from ..utils.config import ProgressConfig
from ..utils.logger import get_logger

logger = get_logger(__name__)

# The simulated bar never passes this on its own
SIMULATED_CEILING = 95.0
COMPLETE = 100.0

ProgressListener = Callable[[ProgressState], None]


def phase_label(phase: GenerationPhase, variation_count: int = 1) -> str:
    """Display label for a phase."""
    if phase == GenerationPhase.INITIALIZING:
        return "INITIALIZING..."
    if phase == GenerationPhase.ENHANCING:
        return "ENHANCING PROMPT..."
    if phase == GenerationPhase.PLANNING:
        return "DESIGNING VARIATIONS..."
    if phase == GenerationPhase.RENDERING:
        if variation_count > 1:
            return f"RENDERING {variation_count} ASSETS..."
        return "RENDERING ASSET..."
    return "GENERATE ASSET"


class ProgressSimulator:
    """Synthetic, monotonically increasing completion estimate."""

    def __init__(
        self,
        single_duration: float = 8.0,
        multi_duration: float = 15.0,
        tick_interval: float = 0.1,
        grace_delay: float = 0.6,
    ):
        """
        Args:
            single_duration: Estimated seconds for a single-image cycle
            multi_duration: Estimated seconds for a multi-variant cycle
            tick_interval: Seconds between ticks
            grace_delay: Seconds the bar is held at 100% on success
        """
        self.single_duration = single_duration
        self.multi_duration = multi_duration
        self.tick_interval = tick_interval
        self.grace_delay = grace_delay

        self._fraction = 0.0
        self._phase = GenerationPhase.IDLE
        self._variation_count = 1
        self._completed = False
        self._listeners: List[ProgressListener] = []

    @classmethod
    def from_config(cls, config: ProgressConfig) -> "ProgressSimulator":
        return cls(
            single_duration=config.single_duration_seconds,
            multi_duration=config.multi_duration_seconds,
            tick_interval=config.tick_seconds,
            grace_delay=config.grace_seconds,
        )

    @property
    def state(self) -> ProgressState:
        return ProgressState(
            fraction=self._fraction,
            label=phase_label(self._phase, self._variation_count),
            phase=self._phase,
        )

    def subscribe(self, listener: ProgressListener) -> Callable[[], None]:
        """
        Register a callback invoked with every new state.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)
        return lambda: self.unsubscribe(listener)

    def unsubscribe(self, listener: ProgressListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def estimated_duration(self, variation_count: int) -> float:
        return self.multi_duration if variation_count > 1 else self.single_duration

    def increment(self, variation_count: int) -> float:
        """Fraction added per tick."""
        steps = self.estimated_duration(variation_count) / self.tick_interval
        return SIMULATED_CEILING / steps

    def set_phase(self, phase: GenerationPhase) -> None:
        self._phase = phase
        self._notify()

    def reset(self) -> None:
        """Back to an idle, empty bar."""
        self._fraction = 0.0
        self._phase = GenerationPhase.IDLE
        self._variation_count = 1
        self._completed = False
        self._notify()

    async def complete(self) -> None:
        """Force 100% and hold it for the grace delay."""
        self._completed = True
        self._fraction = COMPLETE
        self._notify()
        await asyncio.sleep(self.grace_delay)

    @asynccontextmanager
    async def running(self, variation_count: int) -> AsyncIterator["ProgressSimulator"]:
        """
        Scope of one generation cycle.

        Starts at 0% in the initializing phase and ticks in the background
        until the scope exits.
        """
        self._fraction = 0.0
        self._variation_count = variation_count
        self._completed = False
        self.set_phase(GenerationPhase.INITIALIZING)

        ticker = asyncio.create_task(self._tick(self.increment(variation_count)))
        try:
            yield self
        finally:
            ticker.cancel()
            with suppress(asyncio.CancelledError):
                await ticker

    async def _tick(self, increment: float) -> None:
        while not self._completed:
            await asyncio.sleep(self.tick_interval)
            if self._completed:
                break
            self._fraction = min(SIMULATED_CEILING, self._fraction + increment)
            self._notify()

    def _notify(self) -> None:
        if not self._listeners:
            return

        state = self.state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(
                    f"Progress listener failed: {e}",
                    extra={"error": str(e)},
                    exc_info=True,
                )
