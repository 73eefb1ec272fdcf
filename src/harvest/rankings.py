"""
Rankings - public entry point.

Usage:
    result = await rankings(2, "7d", "ethereum", "out/rankings.json", logs=True)
    print(len(result), result.status)
"""

from typing import Optional, Union
from pathlib import Path
import asyncio
import json
import logging

from playwright.async_api import Error as PlaywrightError

from ..models.ranking import HarvestResult
from .aggregator import HarvestAggregator
from .callbacks import ProgressCallback, ProgressEvent, emit
from .config import HarvestConfig, RankingsQuery
from .errors import HarvestTimeoutError, NavigationError, PersistenceError, ValidationError
from .logging_utils import enable_console_logging
from .paginator import Paginator
from .stabilizer import ScrollStabilizer
from .tools.browser import RenderSession


logger = logging.getLogger(__name__)


async def rankings(
    pages,
    duration: str,
    chain: str,
    output_path: Union[str, Path],
    debug: bool = False,
    logs: bool = False,
    browser_instance=None,
    config: Optional[HarvestConfig] = None,
    progress: Optional[ProgressCallback] = None,
    allow_partial: bool = False,
) -> HarvestResult:
    """
    Scrape the rankings list and write it to `output_path` as a JSON array.

    Args:
        pages: Pages to harvest (1 page = top 100 collections)
        duration: One of "1d", "7d", "30d", "total"
        chain: One of "ethereum", "solana"
        output_path: Where the JSON array is written
        debug: Launch a visible browser window
        logs: Print progress to the console
        browser_instance: Connected Playwright browser to use instead of launching one
        config: Harvest settings, defaults to `HarvestConfig.from_env()`
        progress: Optional progress callback
        allow_partial: Return a STOPPED_EARLY result when pagination fails

    Raises:
        ValidationError: bad arguments, before any browser work
        RenderAcquisitionError, NavigationError, StabilizationError,
        PaginationError, HarvestTimeoutError: harvest failures
        PersistenceError: the file could not be written; `.result` holds the rows
    """
    query = RankingsQuery.create(pages, duration, chain)
    config = config or HarvestConfig.from_env()
    if not config.accumulator_script.is_file():
        raise ValidationError(f"accumulator script not found: {config.accumulator_script}")
    if logs:
        enable_console_logging()

    logger.info(
        "=== rankings() ===\n...fetching %d pages (= top %d collections)",
        query.pages, query.pages * 100,
    )

    if browser_instance is not None:
        session = RenderSession.attach(browser_instance, navigation_timeout=config.navigation_timeout)
    else:
        session = RenderSession.launch(headless=not debug, navigation_timeout=config.navigation_timeout)

    aggregator = HarvestAggregator(
        stabilizer=ScrollStabilizer(
            tick_interval=config.tick_interval,
            scroll_step=config.scroll_step,
            max_ticks=config.max_ticks,
        ),
        paginator=Paginator(
            next_selector=config.next_selector,
            content_selector=config.content_selector,
        ),
        allow_partial=allow_partial,
        progress=progress,
    )

    harvest = _harvest(session, query, config, aggregator, progress)
    if config.timeout:
        try:
            result = await asyncio.wait_for(harvest, timeout=config.timeout)
        except asyncio.TimeoutError as e:
            raise HarvestTimeoutError(f"harvest did not finish within {config.timeout} seconds") from e
    else:
        result = await harvest

    save_result(result, output_path)
    logger.info("...saved %d collections to %s", len(result), output_path)
    return result


async def _harvest(
    session: RenderSession,
    query: RankingsQuery,
    config: HarvestConfig,
    aggregator: HarvestAggregator,
    progress: Optional[ProgressCallback],
) -> HarvestResult:
    async with session:
        emit(progress, ProgressEvent("navigating", 1, query.pages, 0, query.url))
        try:
            await session.navigate(query.url)

            logger.info("...waiting for cloudflare to resolve")
            await session.wait_until(config.challenge_selector, hidden=True)

            logger.info("...exposing helper functions through script tag")
            await session.inject_script(config.accumulator_script)
        except PlaywrightError as e:
            raise NavigationError(f"could not prepare {query.url}: {e}") from e

        return await aggregator.run(session, query.pages)


def save_result(result: HarvestResult, output_path: Union[str, Path]) -> Path:
    """Write the result as a JSON array of entities."""
    path = Path(output_path)
    try:
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(result.to_list(), f, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"could not write {path}: {e}", result=result) from e
    return path
