"""
Ranking data models.
"""

from typing import Dict, Any, List, Iterable, Iterator, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


HarvestKey = str


class HarvestStatus(Enum):
    """How a harvest run ended."""
    COMPLETED = "completed"
    STOPPED_EARLY = "stopped_early"


def _coerce_rank(value: Any) -> int:
    """Integer rank, or 0 when the value is missing or not a whole number."""
    if isinstance(value, bool):
        return 0
    text = str(value).strip().replace(",", "")
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return 0
    return int(number) if number.is_integer() else 0


@dataclass
class RankedEntity:
    """One row of the ranked list."""
    rank: int
    name: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_placeholder(self) -> bool:
        """Row rendered before its content resolved."""
        return self.rank <= 0 or not self.name

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RankedEntity":
        """Build an entity from an accumulator record."""
        attributes = {k: v for k, v in data.items() if k not in ("rank", "name")}
        name = data.get("name") or ""
        return cls(
            rank=_coerce_rank(data.get("rank")),
            name=str(name).strip(),
            attributes=attributes,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"rank": self.rank, "name": self.name, **self.attributes}


class HarvestStore:
    """
    Keyed collection of every row observed during a run.

    Owned by the aggregator for one run and never reset between pages.
    `merge` is the only way to add rows.
    """

    def __init__(self):
        self._entities: Dict[HarvestKey, RankedEntity] = {}

    def merge(self, observations: Dict[HarvestKey, Dict[str, Any]]) -> int:
        """
        Merge one tick's observations.

        A later observation replaces an earlier one, but a placeholder never
        replaces a complete entity.

        Returns:
            Number of keys seen for the first time
        """
        new_keys = 0
        for key, record in observations.items():
            entity = record if isinstance(record, RankedEntity) else RankedEntity.from_dict(record)
            key = str(key)
            existing = self._entities.get(key)
            if existing is None:
                new_keys += 1
            elif entity.is_placeholder and not existing.is_placeholder:
                continue
            self._entities[key] = entity
        return new_keys

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, key: object) -> bool:
        return key in self._entities

    def __iter__(self) -> Iterator[HarvestKey]:
        return iter(self._entities)

    def get(self, key: HarvestKey) -> Optional[RankedEntity]:
        return self._entities.get(key)

    def items(self) -> Iterable[Tuple[HarvestKey, RankedEntity]]:
        return self._entities.items()

    def finalize(self) -> List[RankedEntity]:
        """Drop placeholders and order by rank ascending."""
        complete = [e for e in self._entities.values() if not e.is_placeholder]
        return sorted(complete, key=lambda e: e.rank)


@dataclass(frozen=True)
class HarvestResult:
    """Outcome of a harvest run."""
    entities: Tuple[RankedEntity, ...]
    status: HarvestStatus
    pages_requested: int
    pages_completed: int
    observed: int = 0

    @classmethod
    def from_store(
        cls,
        store: HarvestStore,
        pages_requested: int,
        pages_completed: int,
    ) -> "HarvestResult":
        status = (
            HarvestStatus.COMPLETED
            if pages_completed >= pages_requested
            else HarvestStatus.STOPPED_EARLY
        )
        return cls(
            entities=tuple(store.finalize()),
            status=status,
            pages_requested=pages_requested,
            pages_completed=pages_completed,
            observed=len(store),
        )

    @property
    def completed(self) -> bool:
        return self.status is HarvestStatus.COMPLETED

    def __len__(self) -> int:
        return len(self.entities)

    def to_list(self) -> List[Dict[str, Any]]:
        """JSON array payload."""
        return [e.to_dict() for e in self.entities]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "status": self.status.value,
            "pages_requested": self.pages_requested,
            "pages_completed": self.pages_completed,
            "observed": self.observed,
            "entities": self.to_list(),
        }
