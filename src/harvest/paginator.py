"""
Paginator - moves the ranked list to its next page.
"""

from typing import Optional
import logging

from playwright.async_api import Error as PlaywrightError

from .errors import PaginationError


logger = logging.getLogger(__name__)


class Paginator:
    """
    Pagination controller.

    Clicks the "next page" control and waits for the next page's content
    marker, so stabilization can resume as soon as `advance` returns.
    """

    def __init__(
        self,
        next_selector: str = "[value=arrow_forward_ios]",
        content_selector: Optional[str] = ".Image--image",
        timeout: Optional[float] = None,
    ):
        self.next_selector = next_selector
        self.content_selector = content_selector
        self.timeout = timeout
        self.advances = 0

    async def advance(self, session) -> None:
        try:
            await session.click(self.next_selector, timeout=self.timeout)
        except PlaywrightError as e:
            raise PaginationError(
                f"next page control {self.next_selector!r} is missing or not clickable: {e}"
            ) from e

        if self.content_selector:
            try:
                await session.wait_until(self.content_selector, timeout=self.timeout)
            except PlaywrightError as e:
                raise PaginationError(
                    f"next page did not render {self.content_selector!r}: {e}"
                ) from e

        self.advances += 1
        logger.debug("advanced to page %d", self.advances + 1)
