"""
Browser Tool - Playwright render session

Wraps one Playwright page and the Playwright calls the harvester needs.
Use it as an async context manager so the page (and the browser, when the
session launched it) is closed on every exit path.
"""

from typing import Any, List, Optional, Union
from pathlib import Path
import logging

from playwright.async_api import Error as PlaywrightError

from ..errors import RenderAcquisitionError


logger = logging.getLogger(__name__)

LAUNCH_ARGS = ["--start-maximized"]


class RenderSession:
    """Playwright render session"""

    def __init__(
        self,
        browser=None,
        headless: bool = True,
        owns_browser: bool = True,
        navigation_timeout: Optional[float] = None,
    ):
        self.browser = browser
        self.headless = headless
        self.owns_browser = owns_browser
        self.navigation_timeout = navigation_timeout
        self.playwright = None
        self.page = None

    @classmethod
    def launch(cls, headless: bool = True, navigation_timeout: Optional[float] = None) -> "RenderSession":
        """Session that launches and later closes its own Chromium."""
        return cls(headless=headless, owns_browser=True, navigation_timeout=navigation_timeout)

    @classmethod
    def attach(cls, browser, navigation_timeout: Optional[float] = None) -> "RenderSession":
        """Session on a caller-supplied browser. Only the page it opens is closed."""
        if browser is None or not hasattr(browser, "new_page"):
            raise RenderAcquisitionError("No or invalid browser instance provided.")
        if not callable(getattr(browser, "is_connected", None)):
            raise RenderAcquisitionError("The provided object is not a Playwright browser.")
        if not browser.is_connected():
            raise RenderAcquisitionError("The provided browser instance is not connected.")
        return cls(browser=browser, owns_browser=False, navigation_timeout=navigation_timeout)

    async def init(self):
        """Start the browser (when owned) and open a page."""
        try:
            if self.owns_browser:
                from playwright.async_api import async_playwright

                self.playwright = await async_playwright().start()
                self.browser = await self.playwright.chromium.launch(
                    headless=self.headless,
                    args=LAUNCH_ARGS,
                )
            self.page = await self.browser.new_page()
        except PlaywrightError as e:
            await self.close()
            raise RenderAcquisitionError(f"could not open a render session: {e}") from e
        except BaseException:
            await self.close()
            raise

        if self.navigation_timeout is not None:
            self.page.set_default_timeout(self.navigation_timeout)
        logger.debug("render session ready (owns_browser=%s, headless=%s)", self.owns_browser, self.headless)

    async def navigate(self, url: str):
        logger.info("...opening url: %s", url)
        await self.page.goto(url)

    async def wait_until(self, selector: str, hidden: bool = False, timeout: Optional[float] = None):
        """Wait for `selector` to be attached and visible, or hidden/detached when `hidden`."""
        state = "hidden" if hidden else "visible"
        await self.page.wait_for_selector(selector, state=state, timeout=timeout)

    async def inject_script(self, path: Union[str, Path]):
        await self.page.add_script_tag(path=str(path))

    async def click(self, selector: str, timeout: Optional[float] = None):
        await self.page.click(selector, timeout=timeout)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return await self.page.evaluate(expression, arg)

    async def close(self):
        """Close the page, then the browser and Playwright when this session started them."""
        errors: List[BaseException] = []
        for closer in self._closers():
            try:
                await closer()
            except PlaywrightError as e:
                errors.append(e)
        self.page = None
        if self.owns_browser:
            self.browser = None
            self.playwright = None
        for e in errors:
            logger.warning("error while closing render session: %s", e)

    def _closers(self):
        if self.page is not None:
            yield self.page.close
        if self.owns_browser and self.browser is not None:
            yield self.browser.close
        if self.owns_browser and self.playwright is not None:
            yield self.playwright.stop

    async def __aenter__(self):
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
