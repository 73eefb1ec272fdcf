"""
Data Models - Core data structures for the harvester.

Defines:
- Ranked entity and harvest store
- Harvest result models
"""

from .ranking import HarvestKey, HarvestResult, HarvestStatus, HarvestStore, RankedEntity

__all__ = [
    "HarvestKey", "HarvestResult", "HarvestStatus", "HarvestStore", "RankedEntity",
]
