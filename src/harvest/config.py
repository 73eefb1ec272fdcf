"""
Config - harvest settings and query validation.

Every setting has a default and can be overridden through an environment
variable (a `.env` file is loaded by the CLI).
"""

from typing import Dict, Optional
from dataclasses import dataclass
from pathlib import Path
import os

from .errors import ValidationError


RANKINGS_URL = "https://opensea.io/rankings"

CHAINS = ("ethereum", "solana")

DURATIONS: Dict[str, str] = {
    "1d": "one_day_volume",
    "7d": "seven_day_volume",
    "30d": "thirty_day_volume",
    "total": "total_volume",
}

DEFAULT_ACCUMULATOR_SCRIPT = (
    Path(__file__).resolve().parent / "resources" / "rankings_accumulator.js"
)


# ============================================================================
# Environment helpers
# ============================================================================

def _env_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from e


def get_tick_interval() -> float:
    """Scroll tick interval in seconds, from HARVEST_TICK_INTERVAL_MS (default 20 ms)."""
    return _env_number("HARVEST_TICK_INTERVAL_MS", 20.0, float) / 1000.0


def get_scroll_step() -> int:
    return _env_number("HARVEST_SCROLL_STEP", 50, int)


def get_max_ticks() -> int:
    """Upper bound on ticks per stabilization cycle (HARVEST_MAX_TICKS)."""
    return _env_number("HARVEST_MAX_TICKS", 2000, int)


def get_timeout() -> Optional[float]:
    """Whole-run timeout in seconds (HARVEST_TIMEOUT_SEC). 0 or unset disables it."""
    value = _env_number("HARVEST_TIMEOUT_SEC", 0.0, float)
    return value or None


def get_navigation_timeout() -> float:
    return _env_number("HARVEST_NAVIGATION_TIMEOUT_MS", 30000.0, float)


def get_accumulator_script() -> Path:
    return Path(os.getenv("HARVEST_ACCUMULATOR_SCRIPT") or DEFAULT_ACCUMULATOR_SCRIPT)


@dataclass
class HarvestConfig:
    """Tunables for one harvest run."""
    tick_interval: float = 0.02
    scroll_step: int = 50
    max_ticks: int = 2000
    timeout: Optional[float] = None
    navigation_timeout: float = 30000.0
    accumulator_script: Path = DEFAULT_ACCUMULATOR_SCRIPT
    challenge_selector: str = ".cf-browser-verification"
    content_selector: str = ".Image--image"
    next_selector: str = "[value=arrow_forward_ios]"

    def __post_init__(self):
        if self.tick_interval <= 0:
            raise ValidationError("tick_interval must be greater than zero")
        if self.scroll_step <= 0:
            raise ValidationError("scroll_step must be greater than zero")
        if self.max_ticks < 2:
            raise ValidationError("max_ticks must allow at least two ticks")
        if self.timeout is not None and self.timeout <= 0:
            raise ValidationError("timeout must be positive when set")
        self.accumulator_script = Path(self.accumulator_script)

    @classmethod
    def from_env(cls) -> "HarvestConfig":
        return cls(
            tick_interval=get_tick_interval(),
            scroll_step=get_scroll_step(),
            max_ticks=get_max_ticks(),
            timeout=get_timeout(),
            navigation_timeout=get_navigation_timeout(),
            accumulator_script=get_accumulator_script(),
        )


def validate_pages(pages) -> int:
    """Page count must be a positive integer. Numeric strings are accepted (CLI input)."""
    if isinstance(pages, bool):
        raise ValidationError(f"number of pages must be a positive integer, got {pages!r}")
    try:
        value = int(pages)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"number of pages must be a positive integer, got {pages!r}") from e
    if isinstance(pages, float) and value != pages:
        raise ValidationError(f"number of pages must be a positive integer, got {pages!r}")
    if value < 1:
        raise ValidationError(f"number of pages must be at least 1, got {value}")
    return value


@dataclass(frozen=True)
class RankingsQuery:
    """A validated request for one rankings listing."""
    pages: int
    duration: str
    chain: str

    @classmethod
    def create(cls, pages, duration: str, chain: str) -> "RankingsQuery":
        if chain not in CHAINS:
            raise ValidationError(f"chain {chain!r} is not in the official chain set {list(CHAINS)}")
        if duration not in DURATIONS:
            raise ValidationError(
                f"duration {duration!r} is not in the official durations set {list(DURATIONS)}"
            )
        return cls(pages=validate_pages(pages), duration=duration, chain=chain)

    @property
    def sort_by(self) -> str:
        return DURATIONS[self.duration]

    @property
    def url(self) -> str:
        return f"{RANKINGS_URL}?sortBy={self.sort_by}&chain={self.chain}"
