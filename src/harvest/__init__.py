"""
Harvest Layer - ranked-list harvester

Scrolls an infinite-scroll ranked list until it stops growing, pages through
it, and merges every rendered row into one keyed store.

Architecture:
    - Render session (tools/browser.py - Playwright)
    - Scroll-stability detector (stabilizer.py)
    - Pagination controller (paginator.py)
    - Harvest aggregator (aggregator.py)
    - Entry point + persistence (rankings.py)

Usage:
    result = await rankings(1, "total", "ethereum", "rankings.json")
"""

from .aggregator import HarvestAggregator
from .callbacks import ProgressCallback, ProgressEvent
from .config import CHAINS, DURATIONS, HarvestConfig, RankingsQuery
from .errors import (
    HarvestError,
    HarvestTimeoutError,
    NavigationError,
    PaginationError,
    PersistenceError,
    RenderAcquisitionError,
    StabilizationError,
    ValidationError,
)
from .paginator import Paginator
from .rankings import rankings, save_result
from .stabilizer import ScrollStabilizer, StabilizationReport

__all__ = [
    "rankings",
    "save_result",
    "HarvestAggregator",
    "ScrollStabilizer",
    "StabilizationReport",
    "Paginator",
    "HarvestConfig",
    "RankingsQuery",
    "CHAINS",
    "DURATIONS",
    "ProgressCallback",
    "ProgressEvent",
    # Errors
    "HarvestError",
    "ValidationError",
    "RenderAcquisitionError",
    "NavigationError",
    "StabilizationError",
    "PaginationError",
    "HarvestTimeoutError",
    "PersistenceError",
]
