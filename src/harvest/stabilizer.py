"""
Stabilizer - scroll until the page stops growing.

Each tick scrolls the viewport a fixed step, runs the page's accumulator and
merges what it returns into the store, then reads the scroll offset. Two
consecutive ticks with the same offset mean nothing more will render.
"""

from typing import Optional
from dataclasses import dataclass
from enum import Enum
import asyncio
import logging

from playwright.async_api import Error as PlaywrightError

from ..models.ranking import HarvestStore
from .callbacks import ProgressCallback, ProgressEvent, emit
from .errors import StabilizationError


logger = logging.getLogger(__name__)

# Runs in the page: scroll, collect into a fresh object, report the offset.
TICK_SCRIPT = """
(step) => {
    window.scrollBy(0, step);
    const records = {};
    fetchCollections(records);
    return {offset: document.documentElement.scrollTop, records: records};
}
"""


class ScrollState(Enum):
    TICKING = "ticking"
    STABLE = "stable"


@dataclass
class StabilizationReport:
    """Outcome of one stabilization cycle."""
    ticks: int
    new_keys: int
    final_offset: Optional[float]


class ScrollStabilizer:
    """
    Scroll-stability detector.

    Args:
        tick_interval: Delay between ticks in seconds, must be > 0
        scroll_step: Pixels scrolled per tick
        max_ticks: Ticks allowed per cycle before the page is treated as runaway
    """

    def __init__(self, tick_interval: float = 0.02, scroll_step: int = 50, max_ticks: int = 2000):
        if tick_interval <= 0:
            raise ValueError("tick_interval must be greater than zero")
        self.tick_interval = tick_interval
        self.scroll_step = scroll_step
        self.max_ticks = max_ticks

    async def stabilize(
        self,
        session,
        store: HarvestStore,
        page: int = 1,
        pages: int = 1,
        progress: Optional[ProgressCallback] = None,
    ) -> StabilizationReport:
        state = ScrollState.TICKING
        last_offset: Optional[float] = None
        ticks = 0
        new_keys = 0

        while state is ScrollState.TICKING:
            if ticks >= self.max_ticks:
                raise StabilizationError(
                    f"page {page} kept scrolling after {self.max_ticks} ticks "
                    f"(offset {last_offset}, {len(store)} collected)"
                )
            if ticks:
                await asyncio.sleep(self.tick_interval)

            try:
                sample = await session.evaluate(TICK_SCRIPT, self.scroll_step)
            except PlaywrightError as e:
                raise StabilizationError(f"scroll tick {ticks + 1} on page {page} failed: {e}") from e
            ticks += 1

            new_keys += store.merge(sample.get("records") or {})
            offset = sample.get("offset")

            if last_offset is not None and offset == last_offset:
                state = ScrollState.STABLE
            else:
                last_offset = offset

            logger.debug("tick %d: offset=%s collected=%d", ticks, offset, len(store))
            emit(progress, ProgressEvent(
                stage="stabilizing",
                page=page,
                pages=pages,
                collected=len(store),
            ))

        return StabilizationReport(ticks=ticks, new_keys=new_keys, final_offset=last_offset)
