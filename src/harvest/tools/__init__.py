"""
Tools - render driver

Playwright session used by the harvester.
"""

from .browser import RenderSession

__all__ = [
    "RenderSession",
]
