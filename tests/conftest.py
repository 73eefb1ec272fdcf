"""
Shared fakes for harvest tests.

`FakePage` mimics the slice of the Playwright page API the render session
uses. Each list page is a sequence of "screens"; one scroll tick moves down
one screen and the accumulator sees the previous and current screen, so
every row is observed on more than one tick.
"""

import sys
from pathlib import Path

import pytest
from playwright.async_api import Error as PlaywrightError


project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.harvest.stabilizer import TICK_SCRIPT  # noqa: E402


NEXT_SELECTOR = "[value=arrow_forward_ios]"


def make_rows(start: int, count: int) -> dict:
    """Accumulator records keyed by rank slot, ranks start..start+count-1."""
    return {
        f"rank-{rank}": {
            "rank": rank,
            "name": f"Collection {rank}",
            "image": f"https://img.example/{rank}.png",
            "volume": f"{rank * 10} ETH",
        }
        for rank in range(start, start + count)
    }


def split_screens(rows: dict, per_screen: int) -> list:
    items = list(rows.items())
    return [dict(items[i:i + per_screen]) for i in range(0, len(items), per_screen)]


class FakePage:
    """In-memory stand-in for a Playwright page showing a paginated ranked list."""

    def __init__(self, pages, step: int = 50, fail_click_on: int = None):
        self.pages = pages
        self.step = step
        self.fail_click_on = fail_click_on
        self.page_index = 0
        self.position = 0
        self.calls = []
        self.evaluations = 0
        self.records_served = 0
        self.clicks = 0
        self.scripts = []
        self.closed = False
        self.default_timeout = None

    @property
    def screens(self) -> list:
        return self.pages[self.page_index]

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    async def goto(self, url):
        self.calls.append(("goto", url))
        self.url = url

    async def wait_for_selector(self, selector, state="visible", timeout=None):
        self.calls.append(("wait", selector, state))

    async def add_script_tag(self, path=None):
        self.calls.append(("script", path))
        self.scripts.append(path)

    async def click(self, selector, timeout=None):
        self.calls.append(("click", selector))
        self.clicks += 1
        if selector != NEXT_SELECTOR:
            raise PlaywrightError(f"no element matches {selector}")
        if self.fail_click_on == self.clicks or self.page_index + 1 >= len(self.pages):
            raise PlaywrightError(f"Timeout 30000ms exceeded waiting for {selector}")
        self.page_index += 1
        self.position = 0

    async def evaluate(self, expression, arg=None):
        assert expression == TICK_SCRIPT
        self.calls.append(("tick", self.page_index))
        self.evaluations += 1
        last = max(len(self.screens) - 1, 0)
        if self.position < last:
            self.position += 1
        records = {}
        for index in (self.position - 1, self.position):
            if 0 <= index < len(self.screens):
                records.update(self.screens[index])
        self.records_served += len(records)
        return {"offset": self.position * self.step, "records": records}

    async def close(self):
        self.closed = True


class FakeBrowser:
    """Connected browser that hands out one prepared page."""

    def __init__(self, page: FakePage, connected: bool = True):
        self.page = page
        self.connected = connected
        self.new_pages = 0
        self.closed = False

    def is_connected(self) -> bool:
        return self.connected

    async def new_page(self):
        self.new_pages += 1
        return self.page

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser, fail=False):
        self.browser = browser
        self.fail = fail
        self.launch_kwargs = None

    async def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.fail:
            raise PlaywrightError("Executable doesn't exist")
        return self.browser


class FakePlaywright:
    def __init__(self, chromium):
        self.chromium = chromium
        self.stopped = False

    async def stop(self):
        self.stopped = True


class FakeStarter:
    """Stands in for `async_playwright()`."""

    def __init__(self, playwright):
        self.playwright = playwright

    async def start(self):
        return self.playwright


@pytest.fixture
def thirty_row_page() -> FakePage:
    """One page, three screens of ten rows each."""
    return FakePage([split_screens(make_rows(1, 30), 10)])


@pytest.fixture
def two_hundred_row_page() -> FakePage:
    """Two pages of 100 rows, ranks 1-100 then 101-200."""
    return FakePage([
        split_screens(make_rows(1, 100), 10),
        split_screens(make_rows(101, 100), 10),
    ])
