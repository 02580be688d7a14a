"""
Observation data models.

Contains DTOs for raw and validated observations and the normalized series.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Iterator, Optional, Tuple, Union, overload


@dataclass
class RawObservation:
    """Observation as delivered by a source adapter (not yet validated)."""

    timestamp: Optional[str]
    value: Any
    quality_code: Optional[str] = None


@dataclass(frozen=True)
class Observation:
    """Validated observation with a finite value and an aware timestamp."""

    timestamp: datetime
    value: float
    quality_code: Optional[str] = None


@dataclass(frozen=True)
class Series:
    """
    Chronologically ordered observations.

    Timestamps are strictly ascending; the normalizer guarantees there are
    no duplicates.
    """

    observations: Tuple[Observation, ...] = ()

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    @overload
    def __getitem__(self, index: int) -> Observation: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[Observation, ...]: ...

    def __getitem__(self, index: Union[int, slice]):
        return self.observations[index]

    @property
    def is_empty(self) -> bool:
        return not self.observations

    @property
    def latest(self) -> Optional[Observation]:
        """Most recent observation, or None for an empty series."""
        return self.observations[-1] if self.observations else None
