"""
Harvest error types.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..models.ranking import HarvestResult


class HarvestError(Exception):
    """Base class for harvest failures."""


class ValidationError(HarvestError, ValueError):
    """Bad chain, duration, page count or configuration value."""


class RenderAcquisitionError(HarvestError):
    """Render session could not be created, or a supplied browser is unusable."""


class StabilizationError(HarvestError):
    """A scroll tick failed or the page never stopped scrolling."""


class PaginationError(HarvestError):
    """
    The "next page" control is missing, unclickable, or the next page never rendered.

    `partial` holds the rows collected before the failure, marked STOPPED_EARLY.
    """

    def __init__(self, message: str, partial: Optional["HarvestResult"] = None):
        super().__init__(message)
        self.partial = partial


class HarvestTimeoutError(HarvestError):
    """The run exceeded its configured timeout."""


class PersistenceError(HarvestError):
    """Output could not be written. `result` is still available."""

    def __init__(self, message: str, result: Optional["HarvestResult"] = None):
        super().__init__(message)
        self.result = result


class NavigationError(HarvestError):
    """The rankings page did not load or the accumulator could not be injected."""
