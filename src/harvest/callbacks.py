"""
Progress events emitted while harvesting.
"""

from typing import Callable, Dict, Optional
from dataclasses import dataclass


@dataclass
class ProgressEvent:
    """Progress update event."""
    stage: str                # navigating, stabilizing, paginating, done
    page: int                 # 1-based page being harvested
    pages: int                # Pages requested
    collected: int            # Keys in the store so far
    message: Optional[str] = None

    def to_dict(self) -> Dict:
        """Convert to dictionary for callback."""
        return {
            "stage": self.stage,
            "page": self.page,
            "pages": self.pages,
            "collected": self.collected,
            "message": self.message,
        }


ProgressCallback = Callable[[ProgressEvent], None]


def emit(callback: Optional[ProgressCallback], event: ProgressEvent) -> None:
    if callback is not None:
        callback(event)
