"""
Aggregator - runs the page loop and owns the harvest store.

    stabilize -> advance -> stabilize -> ... -> stabilize

`pages` stabilization cycles, `pages - 1` advances, one store for the whole
run. The store is finalized once: placeholders dropped, rows ordered by rank.
Rows sharing a rank have no defined relative order.
"""

from typing import Optional
import logging

from ..models.ranking import HarvestResult, HarvestStore
from .callbacks import ProgressCallback, ProgressEvent, emit
from .config import validate_pages
from .errors import PaginationError
from .paginator import Paginator
from .stabilizer import ScrollStabilizer


logger = logging.getLogger(__name__)


class HarvestAggregator:
    """
    Harvest aggregator.

    Args:
        stabilizer: Scroll-stability detector used for every page
        paginator: Pagination controller
        allow_partial: Return a STOPPED_EARLY result instead of raising
            when pagination fails
        progress: Optional progress callback
    """

    def __init__(
        self,
        stabilizer: Optional[ScrollStabilizer] = None,
        paginator: Optional[Paginator] = None,
        allow_partial: bool = False,
        progress: Optional[ProgressCallback] = None,
    ):
        self.stabilizer = stabilizer or ScrollStabilizer()
        self.paginator = paginator or Paginator()
        self.allow_partial = allow_partial
        self.progress = progress
        self.store: Optional[HarvestStore] = None

    async def run(self, session, pages: int) -> HarvestResult:
        pages = validate_pages(pages)
        self.store = store = HarvestStore()
        completed = 0

        for page in range(1, pages + 1):
            if page > 1:
                emit(self.progress, ProgressEvent("paginating", page, pages, len(store)))
                try:
                    await self.paginator.advance(session)
                except PaginationError as e:
                    partial = HarvestResult.from_store(store, pages, completed)
                    logger.warning(
                        "pagination failed before page %d/%d (%d rows kept): %s",
                        page, pages, len(partial), e,
                    )
                    if self.allow_partial:
                        return partial
                    e.partial = partial
                    raise

            logger.info(
                "...scrolling to bottom and fetching collections (page %d/%d). Items fetched so far: %d",
                page, pages, len(store),
            )
            report = await self.stabilizer.stabilize(
                session, store, page=page, pages=pages, progress=self.progress,
            )
            completed += 1
            logger.debug("page %d stable after %d ticks, %d new keys", page, report.ticks, report.new_keys)

        result = HarvestResult.from_store(store, pages, completed)
        logger.info("...DONE. Total collections fetched: %d (%d kept)", result.observed, len(result))
        emit(self.progress, ProgressEvent("done", pages, pages, len(store)))
        return result
